"""
ProgressStore - Persist flashcard config and per-word progress.

Stores two JSON blobs in a key/value storage backend:
- flashcard_config: display mode and shuffle preference
- flashcard_progress: word id -> WordProgress map

Malformed stored data is treated as absent. Progress writes are
read-modify-write of the whole map with no locking, so two writers
sharing one backend (e.g. two app sessions) can silently drop an update.
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from kotoba.schemas import (
    CardStatus,
    DisplayMode,
    FlashcardConfig,
    FlashcardStats,
    WordProgress,
)
from kotoba.settings import CONFIG_KEY, PROGRESS_KEY

from .storage import KeyValueStorage, StorageResult


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Status transitions
# -----------------------------------------------------------------------------

def create_progress(status: CardStatus = CardStatus.LEARNING, now: Optional[datetime] = None) -> WordProgress:
    """Create a fresh progress record with no reviews."""
    return WordProgress(
        status=status,
        review_count=0,
        last_review_date=now or datetime.now(),
    )


def update_progress(
    existing: Optional[WordProgress],
    new_status: CardStatus,
    now: Optional[datetime] = None,
) -> WordProgress:
    """
    Apply a status transition.

    Every transition increments review_count (an absent record starts at 1)
    and stamps last_review_date.
    """
    return WordProgress(
        status=new_status,
        review_count=existing.review_count + 1 if existing else 1,
        last_review_date=now or datetime.now(),
    )


class ProgressStore:
    """
    Config and progress persistence over an injected KeyValueStorage.

    Reads never fail: absent or malformed data yields defaults.
    Writes return a StorageResult; callers carry on with in-memory state
    when a write fails.
    """

    def __init__(self, storage: KeyValueStorage):
        """
        Initialize progress store.

        Args:
            storage: Backend implementing get/set/remove
        """
        self.storage = storage

    def _load_json(self, key: str) -> Any:
        raw = self.storage.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Failed to parse stored {key}: {e}")
            return None

    def _save_json(self, key: str, data: Any) -> StorageResult:
        try:
            payload = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize {key}: {e}")
            return StorageResult.failure(key, f"serialization failed: {e}")
        return self.storage.set(key, payload)

    # -------------------------------------------------------------------------
    # Config
    # -------------------------------------------------------------------------

    def get_config(self) -> FlashcardConfig:
        """
        Get the saved config.

        Returns the default config when nothing usable is stored. For a
        partially valid object each missing or invalid field is defaulted
        on its own.
        """
        data = self._load_json(CONFIG_KEY)
        if not isinstance(data, dict):
            return FlashcardConfig()

        default = FlashcardConfig()
        try:
            mode = DisplayMode(data.get("mode"))
        except (ValueError, TypeError):
            mode = default.mode
        shuffled = data.get("shuffled")
        if not isinstance(shuffled, bool):
            shuffled = default.shuffled

        return FlashcardConfig(mode=mode, shuffled=shuffled)

    def save_config(self, config: FlashcardConfig) -> StorageResult:
        """Overwrite the stored config."""
        return self._save_json(CONFIG_KEY, config.model_dump(mode="json"))

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def get_all_progress(self) -> dict[str, WordProgress]:
        """Get all stored progress records; malformed records are skipped."""
        data = self._load_json(PROGRESS_KEY)
        if not isinstance(data, dict):
            return {}

        result = {}
        for word_id, record in data.items():
            try:
                result[word_id] = WordProgress.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping malformed progress record {word_id}: {e.error_count()} errors")
        return result

    def get_progress(self, word_id: str) -> Optional[WordProgress]:
        """Get progress for a single word, or None if it has no record."""
        return self.get_all_progress().get(word_id)

    def get_card_status(self, word_id: str) -> Optional[CardStatus]:
        progress = self.get_progress(word_id)
        return progress.status if progress else None

    def save_all_progress(self, progress: dict[str, WordProgress]) -> StorageResult:
        """Overwrite the whole progress map."""
        data = {
            word_id: record.model_dump(mode="json", by_alias=True)
            for word_id, record in progress.items()
        }
        return self._save_json(PROGRESS_KEY, data)

    def save_progress(self, word_id: str, progress: WordProgress) -> StorageResult:
        """Merge one record into the stored map and write the map back."""
        all_progress = self.get_all_progress()
        all_progress[word_id] = progress
        return self.save_all_progress(all_progress)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def compute_stats(self, total_cards: int) -> FlashcardStats:
        """
        Count stored records by status.

        Words that were never marked have no record and are counted in no
        bucket, so the bucket sum can be less than total_cards.
        """
        mastered = need_review = learning = 0
        for progress in self.get_all_progress().values():
            if progress.status == CardStatus.MASTERED:
                mastered += 1
            elif progress.status == CardStatus.NEED_REVIEW:
                need_review += 1
            elif progress.status == CardStatus.LEARNING:
                learning += 1

        return FlashcardStats(
            total_cards=total_cards,
            mastered_cards=mastered,
            need_review_cards=need_review,
            learning_cards=learning,
        )

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def clear_all_progress(self) -> StorageResult:
        """Remove every progress record in one operation."""
        return self.storage.remove(PROGRESS_KEY)

    def clear_all_data(self) -> StorageResult:
        """Remove config and progress. Fails if either removal fails."""
        config_result = self.storage.remove(CONFIG_KEY)
        progress_result = self.storage.remove(PROGRESS_KEY)
        if not config_result:
            return config_result
        return progress_result
