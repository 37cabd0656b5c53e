"""
Click-backed terminal — the default Terminal for interactive use.

Output goes through ``click.echo`` so it lands wherever click is pointed
(including ``CliRunner`` during tests). Visible input is read a line at a
time from click's stdin stream; hidden input uses click's own hidden prompt.
"""

from __future__ import annotations

import shutil

import click

from prompter.adapters.base import Terminal
from prompter.core.errors import EndOfInput

# Width used when the output is not attached to a terminal
_FALLBACK_COLUMNS = 80


class ClickTerminal(Terminal):
    """Terminal that reads stdin and writes stdout via click."""

    def __init__(self) -> None:
        self._echo = True

    def write(self, text: str) -> None:
        click.echo(text, nl=False)

    def read_line(self) -> str:
        if not self._echo:
            try:
                return click.prompt(
                    "",
                    default="",
                    show_default=False,
                    prompt_suffix="",
                    hide_input=True,
                )
            except click.Abort as e:
                raise EndOfInput("End of input reached while reading a hidden value") from e

        line = click.get_text_stream("stdin").readline()
        if line == "":
            raise EndOfInput("End of input reached while waiting for a value")
        return line.rstrip("\r\n")

    def width(self) -> int:
        return shutil.get_terminal_size((_FALLBACK_COLUMNS, 24)).columns

    def set_echo(self, visible: bool) -> None:
        self._echo = visible
