"""
Prompt session — one interactive acquisition.

State machine:

    AwaitingInput → Coercing → Confirming → Checking → Done
          ↑             │           │           │
          └─────────────┴───────────┴───────────┘   (any rejection)

The message is shown once. The first read uses ``prompt``, every later
read uses ``reprompt`` (or ``prompt`` again). ``max_tries`` allows that
many retries after the first attempt; the next attempt raises instead of
prompting.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from prompter.adapters.base import Terminal, Timer
from prompter.core.checks.pipeline import CheckPipeline
from prompter.core.engine.coercer import ValueCoercer
from prompter.core.engine.display import Display
from prompter.core.errors import RetryableInputError, TimedOutError, TriesExceededError
from prompter.core.models.config import RequestConfig

logger = logging.getLogger(__name__)

_CONFIRM_HINT = "(Y|n)"


def obscure(values: Sequence[Any]) -> list[str]:
    """Mask hidden values for echoing; short ones all look the same."""
    masked = []
    for value in values:
        text = str(value)
        masked.append("******" if len(text) < 6 else "*" * len(text))
    return masked


class PromptSession:
    """Runs the prompt → read → coerce → confirm → check loop."""

    def __init__(
        self,
        config: RequestConfig,
        display: Display,
        coercer: ValueCoercer,
        pipeline: CheckPipeline,
        timer: Timer,
    ):
        self.config = config
        self._display = display
        self._coercer = coercer
        self._pipeline = pipeline
        self._timer = timer
        self.attempts = 0

    @property
    def _terminal(self) -> Terminal:
        return self._display.terminal

    def run(self) -> Any:
        """Acquire one value (or list of values) from the user.

        Raises:
            TriesExceededError: After ``max_tries`` rejected retries.
            TimedOutError: If a read outlives ``timeout``.
            EndOfInput: If the terminal runs out of input.
        """
        config = self.config
        self._show_message()

        while True:
            if config.max_tries and self.attempts > config.max_tries:
                logger.info("Giving up on %r after %d attempts", config.name, self.attempts)
                raise TriesExceededError(config.max_tries)
            self.attempts += 1

            prompt = config.prompt if self.attempts == 1 else config.reprompt or config.prompt
            line = self._read(prompt, hidden=config.hide_input)

            if line.strip() == "":
                if config.default is None:
                    continue
                if config.confirm and not self._confirm_default():
                    continue
                values = list(config.default)
                break

            try:
                values = self._coercer.split_and_normalize(line, config)
            except RetryableInputError as e:
                self._display.notice(str(e), config)
                continue

            if config.confirm and not self._confirm_values(values):
                continue

            checked = self._pipeline.run(values, config)
            if checked is None:
                continue
            values = checked
            break

        logger.debug("Accepted %r after %d attempts", values, self.attempts)
        return self._finish(values)

    # ── Steps ───────────────────────────────────────────────────

    def _show_message(self) -> None:
        config = self.config
        if not config.show_message:
            return
        if config.message is not None:
            args = [list(config.default)] if config.default is not None else []
            self._display.message(self._display.interpolate(config.message, config, *args), config)
        else:
            self._display.message(self.default_message(), config)

    def default_message(self) -> str:
        """[Name: ][The default … ]Enter a value[ or list …][ (NULL …)]."""
        config = self.config
        parts = []
        if config.name is not None:
            parts.append(f"{config.name}: ")

        enter = "Enter a value"
        if config.default:
            plural = config.is_list and len(config.default) > 1
            noun, verb = ("values", "are") if plural else ("value", "is")
            shown = self._display.format_for_display(self._default_for_display(), config)
            parts.append(
                f"The default {noun} {verb} {shown}.  Press ENTER to accept the default, or "
            )
            enter = "enter a value"
        parts.append(enter)

        if config.is_list:
            described = "commas" if config.delimiter == "," else config.delimiter
            parts.append(f" or list of values delimited with {described}")
            if config.allow_null:
                parts.append(" (use the word NULL to indicate any null values)")
        elif config.allow_null:
            parts.append(" (use the word NULL to indicate a null value)")

        return "".join(parts) + "."

    def _default_for_display(self) -> Any:
        default = list(self.config.default or ())
        return default if self.config.is_list else default[0]

    def _read(self, prompt: str, hidden: bool = False) -> str:
        config = self.config
        self._display.prompt(prompt, config)
        if hidden:
            self._terminal.set_echo(False)
        try:
            if config.timeout:
                self._timer.arm(config.timeout, self._expired)
            return self._terminal.read_line()
        finally:
            self._timer.disarm()
            if hidden:
                self._terminal.set_echo(True)

    def _expired(self) -> None:
        raise TimedOutError(self.config.timeout)

    def _confirm_default(self) -> bool:
        config = self.config
        noun = "values" if config.is_list and len(config.default or ()) > 1 else "value"
        shown = self._display.format_for_display(self._default_for_display(), config)
        return self._ask_yes_no(
            f"You accepted the default {noun}: {shown}.  Is this correct? {_CONFIRM_HINT} "
        )

    def _confirm_values(self, values: list[Any]) -> bool:
        config = self.config
        if config.hide_input:
            shown = obscure(values)
        else:
            shown = self._display.quoted(values, config)
        entered = config.list_separator.join(shown) if config.is_list else shown[0]
        return self._ask_yes_no(f"You entered: {entered}.  Is this correct? {_CONFIRM_HINT} ")

    def _ask_yes_no(self, question: str) -> bool:
        """Ask until the answer starts with y or n; empty means yes."""
        text = question
        while True:
            answer = self._read(text).strip().lower()
            if answer == "" or answer.startswith("y"):
                return True
            if answer.startswith("n"):
                return False
            text = f"{_CONFIRM_HINT} "

    def _finish(self, values: list[Any]) -> Any:
        result = self._coercer.format_for_return(values, self.config)
        if self.config.is_list:
            return result
        return result[0]
