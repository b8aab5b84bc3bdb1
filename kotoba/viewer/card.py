"""
Card renderer - Flashcard, stats and vocabulary table display.

Provides:
- Front/back faces according to display mode
- Status badges for card progress
- Stats summary and input-comparison styling
"""

import html
from typing import Optional, Sequence

from kotoba.schemas import CardStatus, CatalogWord, DisplayMode, FlashcardStats, Word
from kotoba.utils import ComparisonStatus, border_class, focus_ring_class


STATUS_LABELS = {
    CardStatus.LEARNING: "Learning",
    CardStatus.NEED_REVIEW: "Need review",
    CardStatus.MASTERED: "Mastered",
}


def get_card_css() -> str:
    """Get CSS styles for flashcard display."""
    return """
    <style>
    .flashcard {
        background: white;
        border-radius: 16px;
        padding: 2.5em 1.5em;
        margin: 1em 0;
        text-align: center;
        box-shadow: 0 4px 12px rgba(0,0,0,0.08);
        min-height: 12em;
    }
    .flashcard-kanji {
        font-size: 2.6em;
        font-weight: 600;
        color: #222;
    }
    .flashcard-kana {
        font-size: 1.4em;
        color: #5C6BC0;
        margin-top: 0.3em;
    }
    .flashcard-meaning {
        font-size: 1.6em;
        color: #333;
    }
    .flashcard-answer {
        border-top: 1px dashed #ccc;
        margin-top: 1.2em;
        padding-top: 1.2em;
    }
    .flashcard-meta {
        color: #888;
        font-size: 0.85em;
        margin-top: 1.5em;
    }
    .status-badge {
        display: inline-block;
        border-radius: 10px;
        padding: 0.1em 0.7em;
        font-size: 0.8em;
        margin-left: 0.5em;
    }
    .status-learning { background: #e3f2fd; color: #1565C0; }
    .status-need_review { background: #fff3e0; color: #e65100; }
    .status-mastered { background: #e8f5e9; color: #388E3C; }
    .input-neutral { border: 2px solid #ccc; }
    .input-correct { border: 2px solid #43A047; }
    .input-error { border: 2px solid #E53935; }
    .focus-default { box-shadow: 0 0 0 3px rgba(33, 150, 243, 0.2); }
    .focus-correct { box-shadow: 0 0 0 3px rgba(67, 160, 71, 0.3); }
    .focus-error { box-shadow: 0 0 0 3px rgba(229, 57, 53, 0.3); }
    .stats-row {
        display: flex;
        justify-content: space-around;
        margin: 1em 0;
    }
    .stats-value { font-size: 1.6em; font-weight: 700; }
    .stats-label { color: #666; font-size: 0.85em; }
    </style>
    """


def render_status_badge(status: Optional[CardStatus]) -> str:
    if status is None:
        return ""
    return f'<span class="status-badge status-{status.value}">{STATUS_LABELS[status]}</span>'


def _japanese_html(word: Word) -> str:
    parts = [f'<div class="flashcard-kanji">{html.escape(word.kanji)}</div>']
    if word.kana and word.kana != word.kanji:
        parts.append(f'<div class="flashcard-kana">{html.escape(word.kana)}</div>')
    return ''.join(parts)


def _meaning_html(word: Word) -> str:
    return f'<div class="flashcard-meaning">{html.escape(word.meaning)}</div>'


def render_flashcard(
    card: CatalogWord,
    mode: DisplayMode,
    flipped: bool,
    status: Optional[CardStatus] = None,
    position: Optional[tuple[int, int]] = None,
) -> str:
    """
    Render a flashcard.

    Args:
        card: Word to show
        mode: JA_TO_ZH shows Japanese first; ZH_TO_JA shows the meaning first
        flipped: Whether the answer side is revealed
        status: Stored status for the badge, if any
        position: (current, total), 1-based, for the footer

    Returns:
        HTML string for the card
    """
    if mode == DisplayMode.JA_TO_ZH:
        front, back = _japanese_html(card.word), _meaning_html(card.word)
    else:
        front, back = _meaning_html(card.word), _japanese_html(card.word)

    parts = ['<div class="flashcard">', front]
    if flipped:
        parts.append(f'<div class="flashcard-answer">{back}</div>')

    meta = html.escape(card.book_title)
    if position:
        meta += f" · {position[0]} / {position[1]}"
    parts.append(f'<div class="flashcard-meta">{meta}{render_status_badge(status)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_stats(stats: FlashcardStats) -> str:
    """Render the stats summary row."""
    cells = [
        ("Total", stats.total_cards),
        ("Mastered", stats.mastered_cards),
        ("Need review", stats.need_review_cards),
        ("Learning", stats.learning_cards),
    ]
    parts = ['<div class="stats-row">']
    for label, value in cells:
        parts.append(
            f'<div><div class="stats-value">{value}</div>'
            f'<div class="stats-label">{label}</div></div>'
        )
    parts.append('</div>')
    return ''.join(parts)


def render_answer_feedback(status: ComparisonStatus, typed: str) -> str:
    """Echo typed input inside a border coloured by the comparison status."""
    return (
        f'<div class="{border_class(status)} {focus_ring_class(status)}" style="padding:0.4em;border-radius:6px">'
        f'{html.escape(typed) or "&nbsp;"}</div>'
    )


def words_to_rows(words: Sequence[Word | CatalogWord], hide_meaning: bool = False) -> list[dict]:
    """Rows for the vocabulary table; hide_meaning supports memorization mode."""
    return [
        {
            "日汉字": w.kanji,
            "平假名": w.kana,
            "中文": "" if hide_meaning else w.meaning,
        }
        for w in words
    ]
