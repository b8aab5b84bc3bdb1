"""Vocabulary table helpers: search filtering and shuffling."""

import random
from typing import Optional, Sequence, TypeVar

from kotoba.schemas import CatalogWord, Word


T = TypeVar("T")


def shuffle_words(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Fisher-Yates shuffle into a new list; the input is not modified."""
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _fields(item: Word | CatalogWord) -> tuple[str, str, str]:
    return item.kanji, item.kana, item.meaning


def filter_words(items: Sequence[T], term: str) -> list[T]:
    """
    Case-insensitive substring search over kanji, kana and meaning.

    A blank term returns every item.
    """
    needle = term.strip().lower()
    if not needle:
        return list(items)
    return [
        item for item in items
        if any(needle in field.lower() for field in _fields(item))
    ]
