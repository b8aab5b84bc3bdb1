"""
Progress tracking schemas for Kotoba.

Defines Pydantic models for flashcard progress including:
- Per-word card status
- Display configuration
- Aggregate statistics
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum


class CardStatus(str, Enum):
    LEARNING = "learning"
    NEED_REVIEW = "need_review"
    MASTERED = "mastered"


class DisplayMode(str, Enum):
    JA_TO_ZH = "ja-to-zh"   # show Japanese, answer is the meaning
    ZH_TO_JA = "zh-to-ja"   # show meaning, answer is the Japanese


class WordProgress(BaseModel):
    """Stored progress record; serialized with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    status: CardStatus = CardStatus.LEARNING
    review_count: int = Field(default=0, ge=0, alias="reviewCount")
    last_review_date: datetime = Field(default_factory=datetime.now, alias="lastReviewDate")


class FlashcardConfig(BaseModel):
    mode: DisplayMode = DisplayMode.JA_TO_ZH
    shuffled: bool = True


class FlashcardStats(BaseModel):
    """Derived counts; words without a stored record fall in no bucket."""
    total_cards: int = 0
    mastered_cards: int = 0
    need_review_cards: int = 0
    learning_cards: int = 0

    @property
    def recorded_cards(self) -> int:
        return self.mastered_cards + self.need_review_cards + self.learning_cards

    @property
    def mastered_ratio(self) -> float:
        """
        Mastered share of total_cards, clamped to [0, 1] for progress bars.

        Stored records for words outside the loaded catalog still count as
        mastered, so the raw ratio can exceed 1.
        """
        if self.total_cards <= 0:
            return 0.0
        return min(1.0, self.mastered_cards / self.total_cards)
