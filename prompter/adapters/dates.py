"""
Date engine backed by python-dateutil.

Free-form strings are parsed with ``dateutil.parser``; missing fields are
filled from midnight of the current day in the configured zone. Naive
results are placed in that zone before conversion to epoch seconds.
Formatting uses ``strftime`` patterns, plus ``%s`` for raw epoch seconds.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from functools import lru_cache
from typing import Any

from dateutil import parser, tz

from prompter.adapters.base import DateEngine
from prompter.core.errors import DateParseError

logger = logging.getLogger(__name__)

EPOCH_PATTERN = "%s"


@lru_cache(maxsize=32)
def _zone(name: str) -> tzinfo | None:
    return tz.gettz(name)


class DateutilEngine(DateEngine):
    """Parse and format dates in an explicit time zone."""

    def parse(self, value: Any, time_zone: str) -> int:
        zone = self._require_zone(time_zone)

        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        else:
            text = str(value).strip()
            if not text:
                raise DateParseError("empty date string")
            midnight = datetime.now(zone).replace(
                hour=0, minute=0, second=0, microsecond=0, tzinfo=None,
            )
            try:
                parsed = parser.parse(text, default=midnight)
            except (ValueError, OverflowError) as e:
                raise DateParseError(f"Could not recognize {text!r} as a date") from e

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=zone)
        return int(parsed.timestamp())

    def format(self, epoch: int, pattern: str, time_zone: str) -> str:
        if pattern == EPOCH_PATTERN:
            return str(int(epoch))
        zone = self._require_zone(time_zone)
        return datetime.fromtimestamp(int(epoch), tz=zone).strftime(pattern)

    def knows_zone(self, time_zone: str) -> bool:
        return _zone(time_zone) is not None

    def _require_zone(self, time_zone: str) -> tzinfo:
        zone = _zone(time_zone)
        if zone is None:
            raise DateParseError(f"Unknown time zone: {time_zone}")
        return zone
