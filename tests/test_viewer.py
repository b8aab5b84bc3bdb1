"""Tests for card rendering and the speech services."""

from kotoba.schemas import CardStatus, CatalogWord, DisplayMode, FlashcardStats, Word
from kotoba.utils import ComparisonStatus
from kotoba.viewer import (
    GoogleCloudSpeech,
    NullSpeech,
    render_answer_feedback,
    render_flashcard,
    render_stats,
    render_status_badge,
    words_to_rows,
)


CARD = CatalogWord(
    id="kotoba_1_1",
    book_id="kotoba_1",
    book_title="第1课词汇",
    word=Word(kanji="学生", kana="がくせい", meaning="学生<b>"),
)


class TestCardRendering:
    """Test flashcard HTML."""

    def test_ja_to_zh_front(self):
        html_str = render_flashcard(CARD, DisplayMode.JA_TO_ZH, flipped=False)
        assert "がくせい" in html_str
        assert "flashcard-answer" not in html_str

    def test_zh_to_ja_front(self):
        html_str = render_flashcard(CARD, DisplayMode.ZH_TO_JA, flipped=False)
        assert "がくせい" not in html_str
        assert "学生&lt;b&gt;" in html_str

    def test_flipped_shows_answer(self):
        html_str = render_flashcard(CARD, DisplayMode.ZH_TO_JA, flipped=True)
        assert "flashcard-answer" in html_str
        assert "がくせい" in html_str

    def test_meta_and_badge(self):
        html_str = render_flashcard(
            CARD, DisplayMode.JA_TO_ZH, flipped=False,
            status=CardStatus.MASTERED, position=(2, 10),
        )
        assert "2 / 10" in html_str
        assert "status-mastered" in html_str

    def test_badge_absent(self):
        assert render_status_badge(None) == ""

    def test_stats(self):
        html_str = render_stats(FlashcardStats(total_cards=7, mastered_cards=3))
        assert ">7<" in html_str
        assert ">3<" in html_str

    def test_answer_feedback(self):
        assert "input-error" in render_answer_feedback(ComparisonStatus.ERROR, "たべろ")

    def test_answer_feedback_focus_ring(self):
        assert "focus-error" in render_answer_feedback(ComparisonStatus.ERROR, "たべろ")
        assert "focus-correct" in render_answer_feedback(ComparisonStatus.CORRECT, "たべる")
        assert "focus-default" in render_answer_feedback(ComparisonStatus.PARTIAL, "たべ")

    def test_words_to_rows(self):
        rows = words_to_rows([CARD], hide_meaning=True)
        assert rows == [{"日汉字": "学生", "平假名": "がくせい", "中文": ""}]


class FakeResponse:
    audio_content = b"mp3-bytes"


class FakeClient:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = 0

    def synthesize_speech(self, input, voice, audio_config):
        self.calls += 1
        if self.fail:
            raise RuntimeError("quota")
        return FakeResponse()


def fake_synthesize(self, client, text):
    return client.synthesize_speech(None, None, None).audio_content


class TestSpeech:
    """Test speech callbacks."""

    def test_null_speech(self):
        errors = []
        assert not NullSpeech().speak("ほん", on_error=errors.append)
        assert len(errors) == 1
        assert not NullSpeech().is_available()

    def test_google_speech_success(self, monkeypatch):
        monkeypatch.setattr(GoogleCloudSpeech, "_synthesize", fake_synthesize)
        audio = []
        events = []
        speech = GoogleCloudSpeech(client=FakeClient(), on_audio=audio.append)
        ok = speech.speak(
            "ほん",
            on_start=lambda: events.append("start"),
            on_end=lambda: events.append("end"),
            on_error=lambda e: events.append("error"),
        )
        assert ok
        assert events == ["start", "end"]
        assert audio == [b"mp3-bytes"]

    def test_google_speech_caches(self, monkeypatch):
        monkeypatch.setattr(GoogleCloudSpeech, "_synthesize", fake_synthesize)
        client = FakeClient()
        speech = GoogleCloudSpeech(client=client)
        speech.speak("ほん")
        speech.speak("ほん")
        assert client.calls == 1
        assert speech.last_audio == b"mp3-bytes"

    def test_google_speech_failure(self, monkeypatch):
        monkeypatch.setattr(GoogleCloudSpeech, "_synthesize", fake_synthesize)
        events = []
        speech = GoogleCloudSpeech(client=FakeClient(fail=True))
        ok = speech.speak(
            "ほん",
            on_start=lambda: events.append("start"),
            on_end=lambda: events.append("end"),
            on_error=lambda e: events.append("error"),
        )
        assert not ok
        assert events == ["error"]
        assert speech.last_audio is None

    def test_google_speech_without_client(self, monkeypatch):
        monkeypatch.setattr("kotoba.viewer.speech.get_tts_client", lambda: None)
        errors = []
        speech = GoogleCloudSpeech()
        assert not speech.is_available()
        assert not speech.speak("ほん", on_error=errors.append)
        assert len(errors) == 1

    def test_empty_text(self):
        errors = []
        assert not GoogleCloudSpeech(client=FakeClient()).speak("", on_error=errors.append)
        assert len(errors) == 1
