"""Tests for CatalogLoader."""

import pytest

from kotoba.classroom import CatalogLoader
from kotoba.errors import CatalogError


class TestBooks:
    """Test book listing and loading."""

    def test_list_books_in_order(self, data_dir):
        books = CatalogLoader(data_dir).list_books()
        assert [b.id for b in books] == ["kotoba_1", "kotoba_missing", "kotoba_2"]
        assert books[0].difficulty == "easy"

    def test_missing_books_file(self, tmp_path):
        assert CatalogLoader(tmp_path).list_books() == []

    def test_invalid_entry_skipped(self, tmp_path):
        (tmp_path / "books.yaml").write_text(
            "books:\n"
            "  - id: ok\n"
            "    title: OK\n"
            "    filename: ok.json\n"
            "  - title: no id\n",
            encoding="utf-8",
        )
        assert [b.id for b in CatalogLoader(tmp_path).list_books()] == ["ok"]

    def test_get_book(self, data_dir):
        loader = CatalogLoader(data_dir)
        assert loader.get_book("kotoba_2").title == "第2课词汇"
        assert loader.get_book("nope") is None

    def test_load_book(self, data_dir):
        words = CatalogLoader(data_dir).load_book("kotoba_1")
        assert [w.kana for w in words] == ["わたし", "がくせい", "せんせい"]

    def test_load_unknown_book(self, data_dir):
        with pytest.raises(CatalogError):
            CatalogLoader(data_dir).load_book("kotoba_99")

    def test_load_missing_file(self, data_dir):
        with pytest.raises(CatalogError):
            CatalogLoader(data_dir).load_book("kotoba_missing")

    def test_load_malformed_file(self, data_dir):
        (data_dir / "kotoba" / "kotoba_2.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(CatalogError):
            CatalogLoader(data_dir).load_book("kotoba_2")

    def test_load_invalid_word(self, data_dir):
        (data_dir / "kotoba" / "kotoba_2.json").write_text('[{"日汉字": "本"}]', encoding="utf-8")
        with pytest.raises(CatalogError):
            CatalogLoader(data_dir).load_book("kotoba_2")

    def test_books_with_count(self, data_dir):
        counts = {b.id: b.word_count for b in CatalogLoader(data_dir).get_books_with_count()}
        assert counts == {"kotoba_1": 3, "kotoba_missing": 0, "kotoba_2": 2}


class TestCatalog:
    """Test combined catalog loading."""

    def test_partial_catalog_skips_failed_book(self, data_dir):
        catalog = CatalogLoader(data_dir).load_catalog()
        assert [w.id for w in catalog] == [
            "kotoba_1_0", "kotoba_1_1", "kotoba_1_2", "kotoba_2_0", "kotoba_2_1",
        ]
        assert catalog[3].book_title == "第2课词汇"
        assert catalog[3].kanji == "本"

    def test_ids_unique_and_stable(self, data_dir):
        loader = CatalogLoader(data_dir)
        first = [w.id for w in loader.load_catalog()]
        second = [w.id for w in loader.load_catalog()]
        assert first == second
        assert len(set(first)) == len(first)

    def test_subset(self, data_dir):
        catalog = CatalogLoader(data_dir).load_catalog(["kotoba_2"])
        assert [w.id for w in catalog] == ["kotoba_2_0", "kotoba_2_1"]

    def test_env_data_dir(self, data_dir, monkeypatch):
        monkeypatch.setenv("KOTOBA_DATA_DIR", str(data_dir))
        assert len(CatalogLoader().load_catalog()) == 5

    def test_bundled_data(self):
        from kotoba.settings import DEFAULT_DATA_DIR

        catalog = CatalogLoader(DEFAULT_DATA_DIR).load_catalog()
        assert catalog
        assert catalog[0].id == "kotoba_1_0"
