"""
Scheduler - Cancellable delayed tasks for auto-advance.

Provides:
- TimerScheduler: real delays on a background timer thread
- ManualScheduler: caller-driven clock, for tests and rerun-based UIs
"""

import threading
import time
from typing import Callable, Optional, Protocol


class TaskHandle(Protocol):
    def cancel(self) -> None:
        ...

    @property
    def pending(self) -> bool:
        ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TaskHandle:
        ...


# -----------------------------------------------------------------------------
# Timer-thread scheduler
# -----------------------------------------------------------------------------

class TimerTask:
    """Handle for a threading.Timer task."""

    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._fired = False
        self._cancelled = False

    def _mark_fired(self):
        self._fired = True

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def pending(self) -> bool:
        return not (self._fired or self._cancelled)


class TimerScheduler:
    """Runs callbacks on a daemon timer thread after delay_ms."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerTask:
        task: Optional[TimerTask] = None

        def run():
            task._mark_fired()
            callback()

        timer = threading.Timer(delay_ms / 1000.0, run)
        timer.daemon = True
        task = TimerTask(timer)
        timer.start()
        return task


# -----------------------------------------------------------------------------
# Manual scheduler
# -----------------------------------------------------------------------------

class ManualTask:
    """Handle for a ManualScheduler task."""

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self._done = False

    def cancel(self) -> None:
        self._done = True

    @property
    def pending(self) -> bool:
        return not self._done


class ManualScheduler:
    """
    Scheduler whose clock only moves when told to.

    Due callbacks run synchronously inside advance() / run_due(), on the
    caller's thread. With clock=time.monotonic it can be polled from a
    rerun loop.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock
        self._now_ms = 0.0
        self._tasks: list[ManualTask] = []

    def now_ms(self) -> float:
        if self._clock is not None:
            return self._clock() * 1000.0
        return self._now_ms

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(self.now_ms() + delay_ms, callback)
        self._tasks.append(task)
        return task

    def advance(self, delta_ms: float) -> int:
        """Move the internal clock forward and run due tasks."""
        self._now_ms += delta_ms
        return self.run_due()

    def run_due(self) -> int:
        """Run every pending task whose due time has passed. Returns count run."""
        now = self.now_ms()
        due = sorted(
            (t for t in self._tasks if t.pending and t.due_ms <= now),
            key=lambda t: t.due_ms,
        )
        ran = 0
        for task in due:
            # A callback may cancel later tasks in the same batch
            if not task.pending:
                continue
            task.cancel()
            task.callback()
            ran += 1
        self._tasks = [t for t in self._tasks if t.pending]
        return ran

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self._tasks if t.pending)


def monotonic_scheduler() -> ManualScheduler:
    """ManualScheduler on the process monotonic clock."""
    return ManualScheduler(clock=time.monotonic)
