"""
DictationSession - Random dictation over one book without repeats.

Each word is presented at most once per session. The presented set lives
in memory only and is cleared by restart().
"""

import logging
import random
from typing import TYPE_CHECKING, Callable, Optional

from kotoba.schemas import Word

if TYPE_CHECKING:
    from kotoba.viewer.speech import SpeechService


logger = logging.getLogger(__name__)


class DictationSession:
    """Draw words from a book uniformly at random, without replacement."""

    def __init__(self, words: list[Word], rng: Optional[random.Random] = None):
        self.words = list(words)
        self.rng = rng or random.Random()
        self.presented: set[int] = set()
        self.current_index: Optional[int] = None

    @property
    def current_word(self) -> Optional[Word]:
        if self.current_index is None:
            return None
        return self.words[self.current_index]

    @property
    def practiced_count(self) -> int:
        return len(self.presented)

    @property
    def remaining_count(self) -> int:
        return len(self.words) - len(self.presented)

    @property
    def is_complete(self) -> bool:
        return self.remaining_count == 0

    def select_next(self) -> Optional[Word]:
        """
        Pick the next word.

        Returns None once every word in the book has been presented.
        """
        available = [i for i in range(len(self.words)) if i not in self.presented]
        if not available:
            logger.info("Dictation session complete: all words practiced")
            return None

        index = self.rng.choice(available)
        self.presented.add(index)
        self.current_index = index

        word = self.words[index]
        logger.debug(f"Selected word [{index}]: {word.kanji} ({self.practiced_count}/{len(self.words)})")
        return word

    def restart(self):
        """Clear presented words and the current selection."""
        self.presented.clear()
        self.current_index = None

    def speak_current(
        self,
        speech: "SpeechService",
        on_start: Optional[Callable[[], None]] = None,
        on_end: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> bool:
        """
        Speak the current word's reading (kana, falling back to kanji).

        Also used for replay. Returns False when there is no current word
        or the speech service refuses the request.
        """
        word = self.current_word
        if word is None:
            return False
        text = word.kana or word.kanji
        return speech.speak(text, on_start=on_start, on_end=on_end, on_error=on_error)
