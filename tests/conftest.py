"""Shared fixtures for Kotoba tests."""

import json
import random

import pytest

from kotoba.classroom import (
    FlashcardNavigator,
    ManualScheduler,
    MemoryStorage,
    ProgressStore,
)
from kotoba.schemas import CatalogWord, Word, make_word_id


def make_catalog(book_id: str = "kotoba_1", count: int = 5, title: str = "Book") -> list[CatalogWord]:
    return [
        CatalogWord(
            id=make_word_id(book_id, i),
            book_id=book_id,
            book_title=title,
            word=Word(kanji=f"漢{i}", kana=f"かな{i}", meaning=f"意味{i}"),
        )
        for i in range(count)
    ]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return ProgressStore(storage)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def catalog():
    return make_catalog(count=5)


@pytest.fixture
def navigator(store, scheduler, catalog):
    """Unshuffled navigator loaded with five words."""
    store.storage.set("flashcard_config", json.dumps({"mode": "ja-to-zh", "shuffled": False}))
    nav = FlashcardNavigator(store, scheduler=scheduler, rng=random.Random(7))
    nav.load(catalog)
    yield nav
    nav.close()


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with two valid books and one missing file."""
    (tmp_path / "kotoba").mkdir()
    (tmp_path / "books.yaml").write_text(
        "books:\n"
        "  - id: kotoba_1\n"
        "    title: 第1课词汇\n"
        "    filename: kotoba_1.json\n"
        "    difficulty: easy\n"
        "  - id: kotoba_missing\n"
        "    title: Missing\n"
        "    filename: missing.json\n"
        "  - id: kotoba_2\n"
        "    title: 第2课词汇\n"
        "    filename: kotoba_2.json\n",
        encoding="utf-8",
    )
    book1 = [
        {"日汉字": "私", "平假名": "わたし", "中文": "我"},
        {"日汉字": "学生", "平假名": "がくせい", "中文": "学生"},
        {"日汉字": "先生", "平假名": "せんせい", "中文": "老师"},
    ]
    book2 = [
        {"日汉字": "本", "平假名": "ほん", "中文": "书"},
        {"日汉字": "傘", "平假名": "かさ", "中文": "伞"},
    ]
    (tmp_path / "kotoba" / "kotoba_1.json").write_text(json.dumps(book1, ensure_ascii=False), encoding="utf-8")
    (tmp_path / "kotoba" / "kotoba_2.json").write_text(json.dumps(book2, ensure_ascii=False), encoding="utf-8")
    return tmp_path
