"""
Kotoba - Japanese Vocabulary Study Tool

Streamlit application with flashcards, dictation practice and a searchable
vocabulary table.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st
from dotenv import load_dotenv

from kotoba.classroom import (
    CatalogLoader,
    DictationSession,
    FlashcardNavigator,
    MemoryStorage,
    ProgressStore,
    SQLiteStorage,
    monotonic_scheduler,
)
from kotoba.errors import CatalogError
from kotoba.schemas import DisplayMode
from kotoba.utils import compare_strings, filter_words, shuffle_words
from kotoba.viewer import (
    GoogleCloudSpeech,
    get_card_css,
    render_answer_feedback,
    render_flashcard,
    render_stats,
    words_to_rows,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.25

st.set_page_config(
    page_title="Kotoba",
    page_icon="📚",
    layout="centered",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def open_storage():
    """Open durable storage, falling back to memory for this session."""
    storage = SQLiteStorage()
    if storage.available:
        return storage
    logger.warning("Durable storage unavailable; progress will not survive a restart")
    st.warning("Progress storage is unavailable. Progress will be kept for this session only.")
    return MemoryStorage()


def init_session_state():
    """Initialize session state variables."""
    if "loader" not in st.session_state:
        st.session_state.loader = CatalogLoader()

    if "store" not in st.session_state:
        st.session_state.store = ProgressStore(open_storage())

    if "scheduler" not in st.session_state:
        st.session_state.scheduler = monotonic_scheduler()

    if "navigator" not in st.session_state:
        nav = FlashcardNavigator(st.session_state.store, scheduler=st.session_state.scheduler)
        nav.load(st.session_state.loader.load_catalog())
        st.session_state.navigator = nav

    if "speech" not in st.session_state:
        st.session_state.speech = GoogleCloudSpeech()

    if "dictation" not in st.session_state:
        st.session_state.dictation = None  # (book_id, DictationSession)

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "flashcards"  # flashcards, dictation, vocabulary

    if "vocab_order" not in st.session_state:
        st.session_state.vocab_order = None


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with view selector and progress."""
    st.sidebar.title("📚 Kotoba")

    views = ["flashcards", "dictation", "vocabulary"]
    choice = st.sidebar.radio(
        "View",
        ["Flashcards", "Dictation", "Vocabulary"],
        index=views.index(st.session_state.view_mode),
    )
    st.session_state.view_mode = choice.lower()

    nav = st.session_state.navigator
    stats = nav.stats
    st.sidebar.divider()
    st.sidebar.markdown(
        f"**Mastered:** {stats.mastered_cards}/{stats.total_cards}  \n"
        f"**Need review:** {stats.need_review_cards}"
    )
    if stats.total_cards:
        st.sidebar.progress(stats.mastered_ratio)


# -----------------------------------------------------------------------------
# Flashcards
# -----------------------------------------------------------------------------

def render_flashcard_view():
    """Render the flashcard session."""
    nav = st.session_state.navigator
    scheduler = st.session_state.scheduler
    scheduler.run_due()

    st.markdown(get_card_css(), unsafe_allow_html=True)
    st.markdown(render_stats(nav.stats), unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        label = "日 → 中" if nav.config.mode == DisplayMode.JA_TO_ZH else "中 → 日"
        if st.button(f"Mode: {label}", use_container_width=True):
            nav.toggle_mode()
            st.rerun()
    with col2:
        label = "On" if nav.config.shuffled else "Off"
        if st.button(f"Shuffle: {label}", use_container_width=True):
            nav.toggle_shuffle()
            st.rerun()
    with col3:
        if st.button("Reset progress", use_container_width=True):
            nav.reset_progress()
            st.rerun()

    card = nav.current_card
    if card is None:
        st.info("No vocabulary loaded. Check data/books.yaml.")
        return

    st.markdown(
        render_flashcard(
            card,
            nav.config.mode,
            nav.is_flipped,
            status=nav.get_card_status(card.id),
            position=(nav.current_index + 1, nav.total_cards),
        ),
        unsafe_allow_html=True,
    )

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        if st.button("← Previous", use_container_width=True):
            nav.cancel_scheduled_advance()
            nav.previous()
            st.rerun()
    with col2:
        if st.button("Flip", use_container_width=True):
            nav.flip()
            st.rerun()
    with col3:
        if st.button("🔊 Speak", use_container_width=True):
            speak_card(card)
    with col4:
        if st.button("Next →", use_container_width=True):
            nav.cancel_scheduled_advance()
            nav.next()
            st.rerun()

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Need review", use_container_width=True, disabled=nav.is_transitioning):
            nav.mark_need_review()
            st.rerun()
    with col2:
        if st.button("Mastered", type="primary", use_container_width=True, disabled=nav.is_transitioning):
            nav.mark_mastered()
            st.rerun()

    jump = st.number_input(
        "Go to card",
        min_value=1, max_value=nav.total_cards, value=nav.current_index + 1,
        key=f"goto_{nav.current_index}",
    )
    if jump - 1 != nav.current_index:
        nav.go_to(int(jump) - 1)
        st.rerun()

    if nav.has_pending_advance:
        st.caption("Moving to the next card…")
        time.sleep(POLL_INTERVAL_SECONDS)
        st.rerun()


def show_playback_error(error: Exception):
    st.error(f"Playback failed: {error}")


def play_last_audio(ok: bool):
    """Play the most recently synthesized audio inline."""
    speech = st.session_state.speech
    if ok and speech.last_audio:
        st.audio(speech.last_audio, format="audio/mp3", autoplay=True)


def speak_card(card):
    """Speak a flashcard's reading."""
    speech = st.session_state.speech
    play_last_audio(speech.speak(card.kana or card.kanji, on_error=show_playback_error))


def speak_dictation(session: DictationSession):
    """Speak (or replay) the current dictation word."""
    play_last_audio(session.speak_current(st.session_state.speech, on_error=show_playback_error))


# -----------------------------------------------------------------------------
# Dictation
# -----------------------------------------------------------------------------

def render_dictation_view():
    """Render dictation practice for one book."""
    loader = st.session_state.loader
    books = loader.list_books()
    if not books:
        st.info("No vocabulary books configured.")
        return

    titles = {book.id: book.title for book in books}
    book_id = st.selectbox("Book", list(titles), format_func=lambda b: titles[b])

    current = st.session_state.dictation
    if current is None or current[0] != book_id:
        try:
            words = loader.load_book(book_id)
        except CatalogError as e:
            st.error(f"Failed to load book: {e}")
            return
        st.session_state.dictation = (book_id, DictationSession(words))
    session = st.session_state.dictation[1]

    st.markdown(f"**Practiced:** {session.practiced_count}/{len(session.words)}")

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Next word", type="primary", use_container_width=True, disabled=session.is_complete):
            if session.select_next():
                speak_dictation(session)
    with col2:
        if st.button("Replay", use_container_width=True, disabled=session.current_word is None):
            speak_dictation(session)
    with col3:
        if st.button("Restart", use_container_width=True):
            session.restart()
            st.rerun()

    if session.is_complete:
        st.success("🎉 All words practiced!")

    word = session.current_word
    if word is None:
        return

    typed = st.text_input("Type what you hear", key=f"dictation_{book_id}_{session.practiced_count}")
    status = compare_strings(typed, word.kana)
    st.markdown(get_card_css(), unsafe_allow_html=True)
    st.markdown(render_answer_feedback(status, typed), unsafe_allow_html=True)

    with st.expander("Show answer"):
        st.markdown(f"**{word.kanji}** ({word.kana}) — {word.meaning}")


# -----------------------------------------------------------------------------
# Vocabulary table
# -----------------------------------------------------------------------------

def render_vocabulary_view():
    """Render the searchable vocabulary table."""
    nav = st.session_state.navigator
    words = st.session_state.vocab_order or nav.words

    col1, col2, col3 = st.columns([3, 1, 1])
    with col1:
        term = st.text_input("Search", placeholder="漢字 / かな / 中文")
    with col2:
        if st.button("Shuffle", use_container_width=True):
            st.session_state.vocab_order = shuffle_words(nav.words)
            st.rerun()
    with col3:
        memorize = st.toggle("Memorize")

    shown = filter_words(words, term)
    st.markdown(f"**{len(shown)} words**")
    st.dataframe(words_to_rows(shown, hide_meaning=memorize), use_container_width=True, hide_index=True)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if st.session_state.view_mode == "flashcards":
        render_flashcard_view()
    elif st.session_state.view_mode == "dictation":
        render_dictation_view()
    elif st.session_state.view_mode == "vocabulary":
        render_vocabulary_view()


if __name__ == "__main__":
    main()
