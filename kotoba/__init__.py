"""Kotoba - Japanese vocabulary flashcards and dictation practice."""

__version__ = "0.1.0"
