"""
Kotoba Viewer - Rendering and speech components for the study UI.

This module provides:
- Flashcard, stats and vocabulary table rendering
- Text-to-speech capability
"""

from .card import (
    get_card_css,
    render_status_badge,
    render_flashcard,
    render_stats,
    render_answer_feedback,
    words_to_rows,
    STATUS_LABELS,
)

from .speech import (
    SpeechService,
    GoogleCloudSpeech,
    NullSpeech,
    get_tts_client,
)

__all__ = [
    # Card rendering
    "get_card_css",
    "render_status_badge",
    "render_flashcard",
    "render_stats",
    "render_answer_feedback",
    "words_to_rows",
    "STATUS_LABELS",
    # Speech
    "SpeechService",
    "GoogleCloudSpeech",
    "NullSpeech",
    "get_tts_client",
]
