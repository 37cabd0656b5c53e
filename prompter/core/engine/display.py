"""
Display — everything the engine shows the user goes through here.

Messages are reflowed to ``term_width``. Prompts and notices are indented
four columns under the message they belong to:

    Letter grade: Enter a value or list of values delimited with commas.
        > X
        'X' is not a valid grade.
        >
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from prompter.adapters.base import Reflow, Terminal
from prompter.core.engine.coercer import ValueCoercer
from prompter.core.models.config import RequestConfig

NOTICE_INDENT = 4

_PLACEHOLDER = re.compile(r"%s")


class Display:
    """Writes messages, prompts and check failures to the terminal."""

    def __init__(self, terminal: Terminal, reflow: Reflow, coercer: ValueCoercer):
        self._terminal = terminal
        self._reflow = reflow
        self._coercer = coercer

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    def message(self, text: str, config: RequestConfig) -> None:
        """Top-level message shown once before the first prompt."""
        self._terminal.write_line(self._reflow.wrap(text, config.term_width, 0))

    def notice(self, text: str, config: RequestConfig) -> None:
        """Indented line such as a failed check's explanation."""
        self._terminal.write_line(self._reflow.wrap(text, config.term_width, NOTICE_INDENT))

    def prompt(self, text: str, config: RequestConfig) -> None:
        """Indented prompt; the cursor stays on the same line."""
        self._terminal.write(self._reflow.wrap(text, config.term_width, NOTICE_INDENT))

    # ── Rendering helpers ───────────────────────────────────────

    def format_for_display(self, value: Any, config: RequestConfig) -> str:
        """Render a value or list of values the way the user typed them.

        Lists are joined with the configured delimiter (or ``", "``) and
        epoch dates are shown in ``date_format``.
        """
        if isinstance(value, (list, tuple)):
            return config.list_separator.join(
                self._coercer.display(v, config) for v in value
            )
        return self._coercer.display(value, config)

    def interpolate(self, template: str, config: RequestConfig, *args: Any) -> str:
        """Fill each ``%s`` in ``template`` with the next argument.

        The first placeholder is wrapped in ``echo_quote`` since it always
        receives the value being echoed back. Missing arguments render as
        empty strings; surplus arguments are ignored.
        """
        if "%s" not in template:
            return template
        quote = config.echo_quote
        if quote:
            template = template.replace("%s", f"{quote}%s{quote}", 1)
        rendered = iter([self.format_for_display(arg, config) for arg in args])
        return _PLACEHOLDER.sub(lambda _: next(rendered, ""), template)

    def quoted(self, values: Sequence[Any], config: RequestConfig) -> list[str]:
        """Display form of each value wrapped in ``echo_quote``."""
        quote = config.echo_quote
        return [f"{quote}{self._coercer.display(v, config)}{quote}" for v in values]
