"""Interruptible waiting for a single run."""

import threading

from core.exceptions import RunInterruptedError


class CancellationToken:
    """Blocking sleep that another thread can cut short.

    Calling ``cancel()`` wakes any pending ``sleep()`` which then raises
    RunInterruptedError.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        if self._event.is_set():
            raise RunInterruptedError("Run was cancelled")

    def sleep(self, seconds: float) -> None:
        if self._event.wait(timeout=max(seconds, 0)):
            raise RunInterruptedError("Run was cancelled")
