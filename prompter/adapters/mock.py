"""
Test doubles — scripted terminal and canned database.

Used by the test suite and handy for exercising prompts without a tty.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from prompter.adapters.base import DatabaseHandle, Terminal
from prompter.core.errors import EndOfInput


class ScriptedTerminal(Terminal):
    """Terminal that replays a fixed list of input lines.

    Everything written is captured in ``output``; every read is logged in
    ``echo_log`` together with the echo state at the time of the read.
    """

    def __init__(self, lines: Iterable[str] = (), columns: int = 80):
        self._lines = list(lines)
        self._columns = columns
        self._echo = True
        self._chunks: list[str] = []
        self.echo_log: list[bool] = []

    @property
    def output(self) -> str:
        return "".join(self._chunks)

    @property
    def remaining(self) -> int:
        """Lines not yet consumed."""
        return len(self._lines)

    @property
    def reads(self) -> int:
        return len(self.echo_log)

    def feed(self, *lines: str) -> None:
        self._lines.extend(lines)

    def write(self, text: str) -> None:
        self._chunks.append(text)

    def read_line(self) -> str:
        if not self._lines:
            raise EndOfInput("Scripted input exhausted")
        self.echo_log.append(self._echo)
        line = self._lines.pop(0)
        # a real terminal leaves the cursor on a new line after input
        self._chunks.append("\n")
        return line

    def width(self) -> int:
        return self._columns

    def set_echo(self, visible: bool) -> None:
        self._echo = visible


class StaticDatabase(DatabaseHandle):
    """Database handle that answers queries from a dict."""

    def __init__(self, results: dict[str, list[Any]]):
        self._results = results
        self.queries: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.queries)

    def query(self, sql: str) -> list[Any]:
        self.queries.append(sql)
        return list(self._results.get(sql, []))
