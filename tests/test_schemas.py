"""
Schema validation tests for Kotoba.

Tests all Pydantic models to ensure they validate correctly.
"""

import pytest
from datetime import datetime

from kotoba.schemas import (
    # Vocabulary
    Word,
    BookMeta,
    BookWithCount,
    CatalogWord,
    make_word_id,
    # Progress
    CardStatus,
    DisplayMode,
    WordProgress,
    FlashcardConfig,
    FlashcardStats,
)


class TestWordIdentity:
    """Test word id construction."""

    def test_word_id_format(self):
        assert make_word_id("kotoba_1", 0) == "kotoba_1_0"
        assert make_word_id("kotoba_13", 42) == "kotoba_13_42"

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            make_word_id("kotoba_1", -1)


class TestVocabularySchemas:
    """Test vocabulary-related schemas."""

    def test_word_from_catalog_keys(self):
        word = Word.model_validate({"日汉字": "学生", "平假名": "がくせい", "中文": "学生"})
        assert word.kanji == "学生"
        assert word.kana == "がくせい"
        assert word.meaning == "学生"

    def test_word_from_field_names(self):
        word = Word(kanji="本", kana="ほん", meaning="书")
        assert word.kana == "ほん"

    def test_word_is_immutable(self):
        word = Word(kanji="本", kana="ほん", meaning="书")
        with pytest.raises(ValueError):
            word.kanji = "傘"

    def test_word_missing_field(self):
        with pytest.raises(ValueError):
            Word.model_validate({"日汉字": "本", "平假名": "ほん"})

    def test_book_meta_valid(self):
        book = BookMeta(id="kotoba_1", title="第1课词汇", filename="kotoba_1.json", difficulty="easy")
        assert book.description == ""
        assert book.icon is None

    def test_book_meta_invalid_difficulty(self):
        with pytest.raises(ValueError):
            BookMeta(id="kotoba_1", title="t", filename="f.json", difficulty="impossible")

    def test_book_with_count(self):
        book = BookWithCount(id="kotoba_1", title="t", filename="f.json", word_count=12)
        assert book.word_count == 12

    def test_catalog_word_proxies(self):
        card = CatalogWord(
            id="kotoba_1_0",
            book_id="kotoba_1",
            book_title="第1课词汇",
            word=Word(kanji="私", kana="わたし", meaning="我"),
        )
        assert card.kanji == "私"
        assert card.kana == "わたし"
        assert card.meaning == "我"


class TestProgressSchemas:
    """Test progress tracking schemas."""

    def test_card_status_values(self):
        assert CardStatus.LEARNING.value == "learning"
        assert CardStatus.NEED_REVIEW.value == "need_review"
        assert CardStatus.MASTERED.value == "mastered"

    def test_display_mode_values(self):
        assert DisplayMode.JA_TO_ZH.value == "ja-to-zh"
        assert DisplayMode.ZH_TO_JA.value == "zh-to-ja"

    def test_word_progress_camel_case(self):
        progress = WordProgress.model_validate({
            "status": "mastered",
            "reviewCount": 3,
            "lastReviewDate": "2024-01-01T10:00:00Z",
        })
        assert progress.status == CardStatus.MASTERED
        assert progress.review_count == 3
        assert progress.last_review_date.year == 2024

    def test_word_progress_dump_uses_aliases(self):
        progress = WordProgress(
            status=CardStatus.NEED_REVIEW,
            review_count=1,
            last_review_date=datetime(2024, 1, 1, 10, 0),
        )
        data = progress.model_dump(mode="json", by_alias=True)
        assert data == {
            "status": "need_review",
            "reviewCount": 1,
            "lastReviewDate": "2024-01-01T10:00:00",
        }

    def test_word_progress_negative_count(self):
        with pytest.raises(ValueError):
            WordProgress(status=CardStatus.LEARNING, review_count=-1)

    def test_word_progress_invalid_status(self):
        with pytest.raises(ValueError):
            WordProgress.model_validate({"status": "forgotten", "reviewCount": 0})

    def test_config_defaults(self):
        config = FlashcardConfig()
        assert config.mode == DisplayMode.JA_TO_ZH
        assert config.shuffled is True

    def test_stats_recorded_cards(self):
        stats = FlashcardStats(total_cards=10, mastered_cards=2, need_review_cards=1, learning_cards=0)
        assert stats.recorded_cards == 3

    def test_stats_mastered_ratio(self):
        assert FlashcardStats(total_cards=4, mastered_cards=1).mastered_ratio == 0.25
        assert FlashcardStats().mastered_ratio == 0.0

    def test_stats_mastered_ratio_clamped(self):
        stats = FlashcardStats(total_cards=2, mastered_cards=3)
        assert stats.mastered_cards == 3
        assert stats.mastered_ratio == 1.0


class TestSchemaImports:
    """Test that all schemas can be imported from the main module."""

    def test_import_from_kotoba_schemas(self):
        from kotoba.schemas import (
            Word,
            CatalogWord,
            WordProgress,
            FlashcardConfig,
        )
        assert Word is not None
        assert CatalogWord is not None
        assert WordProgress is not None
        assert FlashcardConfig is not None
