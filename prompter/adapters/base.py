"""
Collaborator contracts — everything the engine needs from the outside world.

The core never touches a tty, a clock, a date library or a database
directly. It talks to these interfaces, and the adapters in this package
(or a caller's own) implement them.

    Terminal        line-oriented read/write + echo control
    Reflow          wrap text to a column width
    DateEngine      parse text → epoch seconds, format epoch → text
    DatabaseHandle  run a query, get back a list of strings
    Timer           arm/disarm a one-shot timeout around a blocking read
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class Terminal(ABC):
    """Line terminal used for all prompting."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text without a trailing newline."""

    def write_line(self, text: str = "") -> None:
        self.write(text.rstrip("\n") + "\n")

    @abstractmethod
    def read_line(self) -> str:
        """Read one line, without its newline.

        Raises:
            EndOfInput: If the input stream is exhausted.
        """

    @abstractmethod
    def width(self) -> int:
        """Current terminal width in columns."""

    @abstractmethod
    def set_echo(self, visible: bool) -> None:
        """Show or hide typed characters for subsequent reads."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class Reflow(ABC):
    """Text formatter for user-facing messages."""

    @abstractmethod
    def wrap(self, text: str, right_margin: int, left_indent: int = 0) -> str:
        """Reflow text so no line passes ``right_margin``.

        Every line is indented by ``left_indent`` spaces. The result ends
        without a newline.
        """


class DateEngine(ABC):
    """Date parsing and formatting."""

    @abstractmethod
    def parse(self, value: Any, time_zone: str) -> int:
        """Convert a date string (or date object) into epoch seconds.

        Raises:
            DateParseError: If the value is not recognizable as a date.
        """

    @abstractmethod
    def format(self, epoch: int, pattern: str, time_zone: str) -> str:
        """Render epoch seconds with a strftime-style pattern."""

    @abstractmethod
    def knows_zone(self, time_zone: str) -> bool:
        """Whether ``time_zone`` names a zone this engine can use."""


class DatabaseHandle(ABC):
    """Minimal query surface needed by the SQL-backed check."""

    @abstractmethod
    def query(self, sql: str) -> list[Any]:
        """Run ``sql`` and return the first column of every row.

        Values are text, except date and datetime values, which are
        returned as objects.
        """


class Timer(ABC):
    """One-shot timeout around a blocking read."""

    @abstractmethod
    def arm(self, seconds: int, on_expire: Callable[[], None]) -> None:
        """Call ``on_expire`` once if ``disarm`` is not called in time."""

    @abstractmethod
    def disarm(self) -> None:
        """Cancel a pending timeout. Safe to call when nothing is armed."""
