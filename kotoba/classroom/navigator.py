"""
Navigator - Flashcard study queue, navigation, and progress marking.

Provides:
- Bucket ordering: need_review, then learning, then mastered
- Optional global shuffle of the queue
- Circular next/previous navigation and bounds-checked jumps
- Marking with debounced auto-advance
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Optional

from kotoba.schemas import (
    CardStatus,
    CatalogWord,
    DisplayMode,
    FlashcardConfig,
    FlashcardStats,
    WordProgress,
)
from kotoba.settings import ADVANCE_DELAY_MS
from kotoba.utils.search import shuffle_words

from .progress import ProgressStore, update_progress
from .scheduler import Scheduler, TaskHandle, TimerScheduler


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Queue construction
# -----------------------------------------------------------------------------

def partition_by_status(
    words: list[CatalogWord],
    progress: dict[str, WordProgress],
) -> tuple[list[CatalogWord], list[CatalogWord], list[CatalogWord]]:
    """
    Split words into (need_review, learning, mastered) buckets.

    Words without a record count as learning. Each bucket keeps catalog order.
    """
    need_review, learning, mastered = [], [], []
    for word in words:
        record = progress.get(word.id)
        if record is None or record.status == CardStatus.LEARNING:
            learning.append(word)
        elif record.status == CardStatus.NEED_REVIEW:
            need_review.append(word)
        else:
            mastered.append(word)
    return need_review, learning, mastered


def build_study_queue(
    words: list[CatalogWord],
    progress: dict[str, WordProgress],
    shuffled: bool,
    rng: Optional[random.Random] = None,
) -> list[CatalogWord]:
    """
    Build the study queue.

    Buckets are concatenated by priority. When shuffled, the whole
    concatenated sequence is permuted, so priority order does not survive.
    """
    need_review, learning, mastered = partition_by_status(words, progress)
    ordered = need_review + learning + mastered
    if shuffled:
        return shuffle_words(ordered, rng)
    return ordered


@dataclass
class SessionState:
    """Transient state of one flashcard session (never persisted)."""
    queue: list[CatalogWord] = field(default_factory=list)
    current_index: int = 0
    is_flipped: bool = False
    is_transitioning: bool = False

    @property
    def current_card(self) -> Optional[CatalogWord]:
        if not self.queue or not 0 <= self.current_index < len(self.queue):
            return None
        return self.queue[self.current_index]


class FlashcardNavigator:
    """
    Drive a flashcard session over a catalog.

    Combines ProgressStore (durable state) with an owned SessionState.
    State changes are serialized with a lock so that a timer-thread
    auto-advance cannot interleave with a user action.
    """

    def __init__(
        self,
        store: ProgressStore,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        advance_delay_ms: int = ADVANCE_DELAY_MS,
    ):
        """
        Initialize navigator.

        Args:
            store: ProgressStore for config and progress
            scheduler: Delayed-task scheduler for auto-advance (default: TimerScheduler)
            rng: Random source for shuffling
            advance_delay_ms: Delay between a mark action and the auto-advance
        """
        self.store = store
        self.scheduler = scheduler or TimerScheduler()
        self.rng = rng or random.Random()
        self.advance_delay_ms = advance_delay_ms

        self.config: FlashcardConfig = store.get_config()
        self.state = SessionState()
        self._words: list[CatalogWord] = []
        self._pending_advance: Optional[TaskHandle] = None
        self._advance_generation = 0
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def words(self) -> list[CatalogWord]:
        return list(self._words)

    @property
    def queue(self) -> list[CatalogWord]:
        return list(self.state.queue)

    @property
    def current_card(self) -> Optional[CatalogWord]:
        return self.state.current_card

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def total_cards(self) -> int:
        return len(self.state.queue)

    @property
    def is_flipped(self) -> bool:
        return self.state.is_flipped

    @property
    def is_transitioning(self) -> bool:
        return self.state.is_transitioning

    @property
    def has_pending_advance(self) -> bool:
        return self._pending_advance is not None and self._pending_advance.pending

    @property
    def stats(self) -> FlashcardStats:
        return self.store.compute_stats(len(self._words))

    def get_card_status(self, word_id: str) -> Optional[CardStatus]:
        return self.store.get_card_status(word_id)

    # -------------------------------------------------------------------------
    # Queue lifecycle
    # -------------------------------------------------------------------------

    def load(self, words: list[CatalogWord]):
        """Set the catalog and build a fresh queue."""
        with self._lock:
            self._words = list(words)
            self._rebuild()

    def _rebuild(self):
        progress = self.store.get_all_progress()
        self.state.queue = build_study_queue(self._words, progress, self.config.shuffled, self.rng)
        self.state.current_index = 0
        self.state.is_flipped = False
        logger.debug(f"Rebuilt study queue: {len(self.state.queue)} cards, shuffled={self.config.shuffled}")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def next(self):
        """Advance one card, wrapping to the start."""
        with self._lock:
            if not self.state.queue:
                return
            self.state.current_index = (self.state.current_index + 1) % len(self.state.queue)
            self.state.is_flipped = False

    def previous(self):
        """Go back one card, wrapping to the end."""
        with self._lock:
            if not self.state.queue:
                return
            self.state.current_index = (self.state.current_index - 1) % len(self.state.queue)
            self.state.is_flipped = False

    def go_to(self, index: int):
        """Jump to a queue position. Out-of-range requests are ignored."""
        with self._lock:
            if 0 <= index < len(self.state.queue):
                self.state.current_index = index
                self.state.is_flipped = False

    def flip(self):
        with self._lock:
            self.state.is_flipped = not self.state.is_flipped

    # -------------------------------------------------------------------------
    # Config toggles
    # -------------------------------------------------------------------------

    def toggle_mode(self):
        """Switch display direction. The queue is kept."""
        with self._lock:
            new_mode = (
                DisplayMode.ZH_TO_JA if self.config.mode == DisplayMode.JA_TO_ZH
                else DisplayMode.JA_TO_ZH
            )
            self.config = self.config.model_copy(update={"mode": new_mode})
            self.store.save_config(self.config)
            self.state.is_flipped = False

    def toggle_shuffle(self):
        """Flip the shuffle preference and rebuild the queue."""
        with self._lock:
            self.config = self.config.model_copy(update={"shuffled": not self.config.shuffled})
            self.store.save_config(self.config)
            self._rebuild()

    # -------------------------------------------------------------------------
    # Marking
    # -------------------------------------------------------------------------

    def mark_need_review(self):
        self._mark(CardStatus.NEED_REVIEW)

    def mark_mastered(self):
        self._mark(CardStatus.MASTERED)

    def _mark(self, status: CardStatus):
        with self._lock:
            card = self.state.current_card
            if card is None:
                return

            existing = self.store.get_progress(card.id)
            result = self.store.save_progress(card.id, update_progress(existing, status))
            if not result:
                logger.warning(f"Progress for {card.id} not saved: {result.error}")

            self.schedule_advance(self.advance_delay_ms)

    def schedule_advance(self, delay_ms: int):
        """Schedule next() after delay_ms, replacing any pending advance."""
        with self._lock:
            self.cancel_scheduled_advance()
            self.state.is_transitioning = True
            generation = self._advance_generation
            self._pending_advance = self.scheduler.call_later(
                delay_ms, lambda: self._auto_advance(generation)
            )

    def cancel_scheduled_advance(self):
        with self._lock:
            self._advance_generation += 1
            if self._pending_advance is not None:
                self._pending_advance.cancel()
                self._pending_advance = None
            self.state.is_transitioning = False

    def _auto_advance(self, generation: int):
        with self._lock:
            # Superseded or cancelled while the timer thread waited for the lock
            if generation != self._advance_generation:
                return
            self._pending_advance = None
            self.state.is_transitioning = False
            self.next()

    # -------------------------------------------------------------------------
    # Reset / teardown
    # -------------------------------------------------------------------------

    def reset_progress(self):
        """Erase all progress and rebuild the queue from fresh buckets."""
        with self._lock:
            self.cancel_scheduled_advance()
            result = self.store.clear_all_progress()
            if not result:
                logger.warning(f"Progress not cleared: {result.error}")
            self._rebuild()

    def close(self):
        """Cancel any pending auto-advance."""
        self.cancel_scheduled_advance()
