"""
Speech - Text-to-speech capability for reading Japanese aloud.

Provides:
- SpeechService protocol with start/end/error callbacks
- GoogleCloudSpeech: synthesizes MP3 via Google Cloud TTS
- NullSpeech: always reports an error (no TTS configured)

Callbacks fire at most once per speak() call; on_end and on_error are
mutually exclusive.
"""

import logging
from typing import Callable, Optional, Protocol

from kotoba.settings import get_tts_voice


logger = logging.getLogger(__name__)


class SpeechService(Protocol):
    def speak(
        self,
        text: str,
        on_start: Optional[Callable[[], None]] = None,
        on_end: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> bool:
        ...

    def cancel(self) -> None:
        ...

    def is_available(self) -> bool:
        ...


class NullSpeech:
    """Speech service used when no TTS backend is configured."""

    def speak(self, text, on_start=None, on_end=None, on_error=None) -> bool:
        logger.error("Speech service not available")
        if on_error:
            on_error(RuntimeError("Speech service not available"))
        return False

    def cancel(self) -> None:
        pass

    def is_available(self) -> bool:
        return False


def get_tts_client():
    """Get Google Cloud TTS client, or None if it cannot be created."""
    try:
        from google.cloud import texttospeech
        return texttospeech.TextToSpeechClient()
    except Exception as e:
        logger.error(f"Failed to initialize Google Cloud TTS client: {e}")
        logger.error("Make sure GOOGLE_APPLICATION_CREDENTIALS is set or you're authenticated via gcloud")
        return None


class GoogleCloudSpeech:
    """
    Synthesize Japanese speech with Google Cloud TTS.

    Synthesis is synchronous; the MP3 bytes go to the on_audio sink (e.g.
    st.audio) and are cached per text so replays cost nothing.
    """

    def __init__(
        self,
        client=None,
        on_audio: Optional[Callable[[bytes], None]] = None,
        voice_name: Optional[str] = None,
        speaking_rate: float = 0.9,
        pitch: float = 0.0,
    ):
        """
        Args:
            client: TextToSpeechClient (default: created lazily on first use)
            on_audio: Receives synthesized MP3 bytes
            voice_name: Google Cloud TTS voice (default: KOTOBA_TTS_VOICE or ja-JP-Neural2-B)
            speaking_rate: 1.0 is normal speed
            pitch: Pitch shift in semitones
        """
        self._client = client
        self._client_failed = False
        self.on_audio = on_audio
        self.voice_name = voice_name or get_tts_voice()
        self.speaking_rate = speaking_rate
        self.pitch = pitch
        self._cache: dict[str, bytes] = {}
        self.last_audio: Optional[bytes] = None

    def _get_client(self):
        if self._client is None and not self._client_failed:
            self._client = get_tts_client()
            self._client_failed = self._client is None
        return self._client

    def is_available(self) -> bool:
        return self._get_client() is not None

    def _synthesize(self, client, text: str) -> bytes:
        from google.cloud import texttospeech

        response = client.synthesize_speech(
            input=texttospeech.SynthesisInput(text=text),
            voice=texttospeech.VoiceSelectionParams(
                language_code="ja-JP",
                name=self.voice_name,
            ),
            audio_config=texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding.MP3,
                speaking_rate=self.speaking_rate,
                pitch=self.pitch,
            ),
        )
        return response.audio_content

    def speak(
        self,
        text: str,
        on_start: Optional[Callable[[], None]] = None,
        on_end: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> bool:
        """Speak text. Returns False if synthesis could not be done."""
        self.cancel()

        if not text:
            if on_error:
                on_error(ValueError("Nothing to speak"))
            return False

        if text not in self._cache:
            client = self._get_client()
            if client is None:
                if on_error:
                    on_error(RuntimeError("Google Cloud TTS client not available"))
                return False
            try:
                self._cache[text] = self._synthesize(client, text)
            except Exception as e:
                logger.error(f"TTS synthesis failed for {text!r}: {e}")
                if on_error:
                    on_error(e)
                return False

        if on_start:
            on_start()
        self.last_audio = self._cache[text]
        if self.on_audio:
            self.on_audio(self.last_audio)
        logger.debug(f"Spoke: {text}")
        if on_end:
            on_end()
        return True

    def cancel(self) -> None:
        self.last_audio = None
