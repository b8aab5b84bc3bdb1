"""
Vocabulary schemas for Kotoba.

Defines Pydantic models for the static word catalog:
- Word entries as stored in the book JSON files
- Book metadata from books.yaml
- Catalog words carrying their stable identity
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


def make_word_id(book_id: str, index: int) -> str:
    """Stable word identity: book id plus 0-based position within the book."""
    if index < 0:
        raise ValueError(f"Word index must be non-negative, got {index}")
    return f"{book_id}_{index}"


class Word(BaseModel):
    """
    A single vocabulary entry.

    Book files use the original Chinese-language keys (日汉字 / 平假名 / 中文);
    both those and the Python field names are accepted.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kanji: str = Field(..., alias="日汉字")
    kana: str = Field(..., alias="平假名")
    meaning: str = Field(..., alias="中文")


class BookMeta(BaseModel):
    """Vocabulary book listed in books.yaml."""
    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    filename: str
    difficulty: Optional[str] = Field(default=None, pattern=r'^(easy|medium|hard)$')
    icon: Optional[str] = None


class BookWithCount(BookMeta):
    word_count: int = Field(default=0, ge=0)


class CatalogWord(BaseModel):
    """A word placed in the combined catalog, keyed by its word id."""
    model_config = ConfigDict(frozen=True)

    id: str
    book_id: str
    book_title: str
    word: Word

    @property
    def kanji(self) -> str:
        return self.word.kanji

    @property
    def kana(self) -> str:
        return self.word.kana

    @property
    def meaning(self) -> str:
        return self.word.meaning
