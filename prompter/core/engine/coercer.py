"""
Value coercion — raw input line → ordered list of typed tokens, and back.

Every value moves through the engine as a non-empty list, even when the
caller did not configure a delimiter. Tokens are strings, epoch-second
integers (``type=date``), or the null sentinel ``NULL`` as typed.

Order of operations for one input line:
    split on delimiter → min / max / unique → case fold → date parse
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import date
from typing import Any

from prompter.adapters.base import DateEngine
from prompter.core.errors import ConfigurationError, DateParseError, RetryableInputError
from prompter.core.models.config import CaseFold, RequestConfig

logger = logging.getLogger(__name__)

NULL_SENTINEL = "NULL"

# A date already expressed as epoch seconds
EPOCH_RE = re.compile(r"^-?\d+$")
# An epoch value tagged as such inside a candidate list: "epoch 1012521600"
TAGGED_EPOCH_RE = re.compile(r"^\s*epoch\s+(-?\d+)\s*$", re.IGNORECASE)

_DASHED_DATE = re.compile(r"^(\s*\d{2})-(\d{2})-(\d{4})")


def default_date_preprocess(text: str) -> str:
    """Rewrite ``DD-DD-DDDD`` as ``DD/DD/DDDD`` before parsing.

    Dash-separated month-day-year strings are otherwise open to being read
    as a different field order by date parsers.
    """
    return _DASHED_DATE.sub(r"\1/\2/\3", text)


def is_null(value: Any, config: RequestConfig) -> bool:
    """Whether ``value`` is the null sentinel and nulls are allowed."""
    return (
        config.allow_null
        and isinstance(value, str)
        and value.upper() == NULL_SENTINEL
    )


def fold_case(value: str, case: CaseFold) -> str:
    if case == CaseFold.UPPER:
        return value.upper()
    if case == CaseFold.LOWER:
        return value.lower()
    if case == CaseFold.CAPITALIZE:
        return value[:1].upper() + value[1:]
    return value


class ValueCoercer:
    """Converts between what the user types and what checks evaluate."""

    def __init__(self, dates: DateEngine):
        self._dates = dates

    # ── Input → internal ────────────────────────────────────────

    def split_and_normalize(self, line: str, config: RequestConfig) -> list[Any]:
        """Turn one non-empty input line into a list of typed tokens.

        Raises:
            RetryableInputError: On an element-count, uniqueness or date
                violation. The message is meant for the user.
        """
        values = self.split(line, config)

        if config.is_list:
            self._enforce_elements(values, config)

        if config.case != CaseFold.NONE:
            values = [fold_case(v, config.case) for v in values]

        if config.is_date:
            values = self.coerce_dates(values, config)

        return values

    def split(self, line: str, config: RequestConfig) -> list[str]:
        line = line.strip()
        delimiter = config.delimiter
        if delimiter is None or delimiter not in line:
            return [line]

        quoted = re.escape(delimiter)
        if config.delimiter_spacing_auto:
            # a stray leading delimiter is dropped
            line = re.sub(rf"^{quoted}\s*", "", line)
            pattern = rf"\s*{quoted}\s*"
        else:
            pattern = quoted

        values = re.split(pattern, line)
        while len(values) > 1 and values[-1] == "":
            values.pop()
        return values

    def _enforce_elements(self, values: Sequence[str], config: RequestConfig) -> None:
        delimiter = config.delimiter
        count = len(values)

        if config.min_elements is not None and count < config.min_elements:
            noun = "elements" if config.min_elements > 1 else "element"
            raise RetryableInputError(
                f"You must specify at least {config.min_elements} {noun} "
                f"in your '{delimiter}' delimited list"
            )
        if config.max_elements is not None and count > config.max_elements:
            noun = "elements" if config.max_elements > 1 else "element"
            raise RetryableInputError(
                f"You may specify at most {config.max_elements} {noun} "
                f"in your '{delimiter}' delimited list"
            )
        if config.unique_elements and len(set(values)) != count:
            raise RetryableInputError(
                f"Each element of the '{delimiter}' delimited list must be unique."
            )

    def coerce_dates(self, values: Sequence[Any], config: RequestConfig) -> list[Any]:
        """Parse every non-null element into epoch seconds.

        Raises:
            RetryableInputError: Naming the first element that is not a date.
        """
        coerced: list[Any] = []
        for value in values:
            if is_null(value, config):
                coerced.append(value)
                continue
            try:
                coerced.append(self.parse_input(value, config))
            except DateParseError as e:
                quote = config.echo_quote
                raise RetryableInputError(f"{quote}{value}{quote} is not a valid date") from e
        return coerced

    def parse_input(self, value: Any, config: RequestConfig) -> int:
        """Epoch seconds for a value typed by the user.

        Text always goes through the date parser, so ``20020312`` is a date
        and not an epoch offset. Integers are already epoch seconds.
        """
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, date):
            return self._dates.parse(value, config.time_zone)
        preprocess = config.date_preprocess or default_date_preprocess
        return self._dates.parse(preprocess(str(value)), config.time_zone)

    def to_epoch(self, value: Any, config: RequestConfig) -> int:
        """Epoch seconds for an int, an epoch string, or a parseable date.

        Raises:
            DateParseError: If ``value`` is none of those.
        """
        if isinstance(value, bool):
            raise DateParseError(f"Could not recognize {value!r} as a date")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if EPOCH_RE.match(value):
                return int(value)
            tagged = TAGGED_EPOCH_RE.match(value)
            if tagged:
                return int(tagged.group(1))
            preprocess = config.date_preprocess or default_date_preprocess
            value = preprocess(value)
        return self._dates.parse(value, config.time_zone)

    def require_epoch(
        self,
        value: Any,
        config: RequestConfig,
        what: str,
        literal_epochs: bool = True,
    ) -> int:
        """``to_epoch`` for programmer-supplied values.

        With ``literal_epochs`` off, digit strings are parsed as dates
        rather than taken as epoch seconds (used for database rows).

        Raises:
            ConfigurationError: If the value is not a date.
        """
        convert = self.to_epoch if literal_epochs else self.parse_input
        try:
            return convert(value, config)
        except DateParseError as e:
            raise ConfigurationError(f"Could not recognize {what} {value!r} as a date!") from e

    def normalize_values(self, value: Any, config: RequestConfig) -> list[Any]:
        """Prepare a caller-supplied value for a stand-alone check.

        Raises:
            ConfigurationError: If ``value`` is neither a scalar nor a list.
            RetryableInputError: If ``type=date`` and an element is not a date.
        """
        if isinstance(value, (list, tuple)):
            values = list(value)
        elif isinstance(value, (dict, set, frozenset)):
            raise ConfigurationError("Value to check must be a list or a scalar")
        else:
            values = [value]

        if config.is_date:
            return self.coerce_dates(values, config)
        return [v if isinstance(v, str) else str(v) for v in values]

    # ── Internal → output ───────────────────────────────────────

    def format_for_return(self, values: Sequence[Any], config: RequestConfig) -> list[Any]:
        """Apply ``date_format_return`` to epoch values; others pass through."""
        if not (config.is_date and config.date_format_return):
            return list(values)
        return [
            value if is_null(value, config) or not self._is_epoch(value)
            else self._dates.format(int(value), config.date_format_return, config.time_zone)
            for value in values
        ]

    def display(self, value: Any, config: RequestConfig) -> str:
        """A single value as the user should see it."""
        if config.is_date and config.date_format and self._is_epoch(value):
            return self._dates.format(int(value), config.date_format, config.time_zone)
        return str(value)

    @staticmethod
    def _is_epoch(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and bool(EPOCH_RE.match(value))
