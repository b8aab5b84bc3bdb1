"""
Kotoba Classroom - Runtime components for studying vocabulary.

This module provides:
- CatalogLoader: Load vocabulary books
- ProgressStore: Persist config and per-word progress
- FlashcardNavigator: Study queue, navigation and marking
- DictationSession: Without-repeat dictation practice
"""

from .storage import (
    KeyValueStorage,
    MemoryStorage,
    SQLiteStorage,
    StorageResult,
)

from .loader import (
    CatalogLoader,
    BOOKS_FILE,
    BOOKS_SUBDIR,
)

from .progress import (
    ProgressStore,
    create_progress,
    update_progress,
)

from .scheduler import (
    Scheduler,
    TimerScheduler,
    ManualScheduler,
    monotonic_scheduler,
)

from .navigator import (
    FlashcardNavigator,
    SessionState,
    build_study_queue,
    partition_by_status,
)

from .dictation import DictationSession

__all__ = [
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "StorageResult",
    # Loader
    "CatalogLoader",
    "BOOKS_FILE",
    "BOOKS_SUBDIR",
    # Progress
    "ProgressStore",
    "create_progress",
    "update_progress",
    # Scheduler
    "Scheduler",
    "TimerScheduler",
    "ManualScheduler",
    "monotonic_scheduler",
    # Navigator
    "FlashcardNavigator",
    "SessionState",
    "build_study_queue",
    "partition_by_status",
    # Dictation
    "DictationSession",
]
