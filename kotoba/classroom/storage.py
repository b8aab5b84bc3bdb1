"""
Key/value storage backends for Kotoba.

The progress store talks to storage only through the KeyValueStorage
protocol. Backends never raise past this boundary: reads return None on
failure, writes return a falsy StorageResult carrying the StorageError.
"""

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from kotoba.errors import StorageError
from kotoba.settings import get_storage_db


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageResult:
    """Outcome of a storage write. Truthy on success."""
    ok: bool
    error: Optional[StorageError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "StorageResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, key: str, message: str) -> "StorageResult":
        return cls(ok=False, error=StorageError(key, message))


class KeyValueStorage(Protocol):
    """Durable string key/value storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> StorageResult:
        ...

    def remove(self, key: str) -> StorageResult:
        ...


class MemoryStorage:
    """
    In-memory storage.

    Args:
        quota: Optional limit on the total number of stored characters;
            a write that would exceed it fails and leaves data untouched.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None, quota: Optional[int] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.quota = quota

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> StorageResult:
        if self.quota is not None:
            used = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
            if used + len(key) + len(value) > self.quota:
                logger.error(f"Failed to set item in storage: {key} (quota exceeded)")
                return StorageResult.failure(key, "quota exceeded")
        self._data[key] = value
        return StorageResult.success()

    def remove(self, key: str) -> StorageResult:
        self._data.pop(key, None)
        return StorageResult.success()

    def keys(self) -> list[str]:
        return list(self._data)


class SQLiteStorage:
    """
    Key/value storage in a local SQLite database (~/.kotoba/storage.db).

    Each operation opens its own connection.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else get_storage_db()
        self.available = self._ensure_database()

    def _ensure_database(self) -> bool:
        """
        Create database and table if they don't exist.

        Returns False when the database cannot be opened; later operations
        then report failures instead of raising.
        """
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Storage unavailable at {self.db_path}: {e}")
            return False

        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
            """)
            conn.commit()
            return True
        except sqlite3.Error as e:
            logger.error(f"Storage unavailable at {self.db_path}: {e}")
            return False
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            logger.error(f"Failed to get item from storage: {key} ({e})")
            return None
        try:
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to get item from storage: {key} ({e})")
            return None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> StorageResult:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            logger.error(f"Failed to set item in storage: {key} ({e})")
            return StorageResult.failure(key, str(e))
        try:
            conn.execute(
                """INSERT INTO kv_store (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value)
            )
            conn.commit()
            return StorageResult.success()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Failed to set item in storage: {key} ({e})")
            return StorageResult.failure(key, str(e))
        finally:
            conn.close()

    def remove(self, key: str) -> StorageResult:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            logger.error(f"Failed to remove item from storage: {key} ({e})")
            return StorageResult.failure(key, str(e))
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return StorageResult.success()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Failed to remove item from storage: {key} ({e})")
            return StorageResult.failure(key, str(e))
        finally:
            conn.close()
