"""
Prompt timeouts.

``AlarmTimer`` uses SIGALRM, which only exists on POSIX and only reaches
the main thread. Anywhere else it does nothing, and prompts simply wait;
control flow is otherwise identical.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable
from typing import Any

from prompter.adapters.base import Timer

logger = logging.getLogger(__name__)


class AlarmTimer(Timer):
    """One-shot SIGALRM timeout around a blocking read."""

    def __init__(self) -> None:
        self._armed = False
        self._previous: Any = None

    @property
    def available(self) -> bool:
        return (
            hasattr(signal, "SIGALRM")
            and threading.current_thread() is threading.main_thread()
        )

    def arm(self, seconds: int, on_expire: Callable[[], None]) -> None:
        if seconds <= 0 or not self.available:
            return
        self.disarm()

        def _expired(signum: int, frame: Any) -> None:
            self.disarm()
            on_expire()

        self._previous = signal.signal(signal.SIGALRM, _expired)
        signal.alarm(int(seconds))
        self._armed = True

    def disarm(self) -> None:
        if not self._armed:
            return
        signal.alarm(0)
        signal.signal(signal.SIGALRM, self._previous or signal.SIG_DFL)
        self._previous = None
        self._armed = False


class NullTimer(Timer):
    """Timer that never fires."""

    def arm(self, seconds: int, on_expire: Callable[[], None]) -> None:
        logger.debug("Timeout of %ss requested; timeouts are disabled", seconds)

    def disarm(self) -> None:
        return None
