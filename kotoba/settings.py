"""
Settings for Kotoba.

Module-level defaults with environment overrides. Overrides are read at call
time so a .env loaded by the app (python-dotenv) takes effect.
"""

import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_STORAGE_DIR = Path.home() / ".kotoba"
DEFAULT_STORAGE_DB = DEFAULT_STORAGE_DIR / "storage.db"

# Storage keys for the two persisted blobs
CONFIG_KEY = "flashcard_config"
PROGRESS_KEY = "flashcard_progress"

# Delay before auto-advancing after a mark action
ADVANCE_DELAY_MS = 2000

DEFAULT_TTS_VOICE = "ja-JP-Neural2-B"


def get_data_dir() -> Path:
    """Vocabulary data directory (KOTOBA_DATA_DIR overrides)."""
    value = os.environ.get("KOTOBA_DATA_DIR")
    return Path(value) if value else DEFAULT_DATA_DIR


def get_storage_db() -> Path:
    """SQLite key/value storage path (KOTOBA_STORAGE_DB overrides)."""
    value = os.environ.get("KOTOBA_STORAGE_DB")
    return Path(value) if value else DEFAULT_STORAGE_DB


def get_tts_voice() -> str:
    return os.environ.get("KOTOBA_TTS_VOICE") or DEFAULT_TTS_VOICE
