"""
Kotoba Schemas - Pydantic models for the vocabulary study tool.

This module exports all schema classes for:
- Vocabulary: words, books, catalog entries
- Progress: card status, display config, statistics
"""

# Vocabulary schemas
from .vocabulary import (
    Word,
    BookMeta,
    BookWithCount,
    CatalogWord,
    make_word_id,
)

# Progress schemas
from .progress import (
    CardStatus,
    DisplayMode,
    WordProgress,
    FlashcardConfig,
    FlashcardStats,
)

__all__ = [
    # Vocabulary
    'Word',
    'BookMeta',
    'BookWithCount',
    'CatalogWord',
    'make_word_id',
    # Progress
    'CardStatus',
    'DisplayMode',
    'WordProgress',
    'FlashcardConfig',
    'FlashcardStats',
]
