"""
CatalogLoader - Load vocabulary books from the data directory.

Layout:
    <data_dir>/books.yaml            list of books (id, title, filename, ...)
    <data_dir>/kotoba/<filename>     JSON array of words

Provides:
- Book listing and lookup
- Single book loading (raises CatalogError)
- Combined catalog loading that tolerates failing books
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import ValidationError

from kotoba.errors import CatalogError
from kotoba.schemas import BookMeta, BookWithCount, CatalogWord, Word, make_word_id
from kotoba.settings import get_data_dir


logger = logging.getLogger(__name__)

BOOKS_FILE = "books.yaml"
BOOKS_SUBDIR = "kotoba"


class CatalogLoader:
    """
    Load vocabulary data from a directory of YAML/JSON files.

    Read-only. Book order in books.yaml defines catalog order and therefore
    word identity, so it must not change between sessions.
    """

    def __init__(self, data_dir: Optional[str | Path] = None):
        """
        Initialize loader.

        Args:
            data_dir: Directory containing books.yaml (default: KOTOBA_DATA_DIR or ./data)
        """
        self.data_dir = Path(data_dir) if data_dir else get_data_dir()

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------

    def list_books(self) -> list[BookMeta]:
        """Get all configured books in catalog order."""
        books_path = self.data_dir / BOOKS_FILE
        if not books_path.exists():
            logger.warning(f"Book list not found: {books_path}")
            return []

        try:
            with open(books_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to read book list {books_path}: {e}")
            return []

        entries = raw.get("books", []) if isinstance(raw, dict) else raw
        if not isinstance(entries, list):
            logger.error(f"Book list {books_path} has no 'books' list")
            return []

        books = []
        for entry in entries:
            try:
                books.append(BookMeta.model_validate(entry))
            except ValidationError as e:
                logger.error(f"Skipping invalid book entry {entry!r}: {e.error_count()} errors")
        return books

    def get_book(self, book_id: str) -> Optional[BookMeta]:
        """Get a book by ID."""
        for book in self.list_books():
            if book.id == book_id:
                return book
        return None

    def load_book(self, book_id: str) -> list[Word]:
        """
        Load the words of one book.

        Raises:
            CatalogError: Unknown book, missing file, or malformed content
        """
        book = self.get_book(book_id)
        if book is None:
            raise CatalogError(f"Unknown vocabulary book: {book_id}")
        return self._read_words(book)

    def _read_words(self, book: BookMeta) -> list[Word]:
        path = self.data_dir / BOOKS_SUBDIR / book.filename
        if not path.exists():
            raise CatalogError(f"Vocabulary file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Failed to read vocabulary file {path}: {e}") from e

        if not isinstance(data, list):
            raise CatalogError(f"Vocabulary file {path} must contain a JSON array")

        try:
            return [Word.model_validate(item) for item in data]
        except ValidationError as e:
            raise CatalogError(f"Invalid word entry in {path}: {e}") from e

    def get_books_with_count(self) -> list[BookWithCount]:
        """Get all books with their word counts (0 for books that fail to load)."""
        result = []
        for book in self.list_books():
            try:
                count = len(self._read_words(book))
            except CatalogError as e:
                logger.error(f"Failed to load vocabulary book: {book.filename} ({e})")
                count = 0
            result.append(BookWithCount(**book.model_dump(), word_count=count))
        return result

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    def load_catalog(self, book_ids: Optional[Iterable[str]] = None) -> list[CatalogWord]:
        """
        Load the combined catalog.

        Books are concatenated in books.yaml order. A book that fails to
        load is logged and contributes no words.

        Args:
            book_ids: Optional subset of books to include
        """
        wanted = set(book_ids) if book_ids is not None else None
        catalog: list[CatalogWord] = []

        for book in self.list_books():
            if wanted is not None and book.id not in wanted:
                continue
            try:
                words = self._read_words(book)
            except CatalogError as e:
                logger.error(f"Failed to load vocabulary book: {book.filename} ({e})")
                continue

            for index, word in enumerate(words):
                catalog.append(CatalogWord(
                    id=make_word_id(book.id, index),
                    book_id=book.id,
                    book_title=book.title,
                    word=word,
                ))

        logger.info(f"Loaded catalog: {len(catalog)} words")
        return catalog
