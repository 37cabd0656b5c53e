"""
Normalized check declarations.

Callers may declare a check as a bare value, a (value, message) pair, or a
list mixing both. Each built-in check folds those shapes into one tuple of
the rules below when the configuration is resolved, so evaluation only ever
sees one form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RegexRule:
    """Value must match ``pattern`` (search semantics)."""

    pattern: re.Pattern[str]
    template: str | None = None


@dataclass(frozen=True)
class ListRule:
    """Value must be one of ``candidates`` (exact match)."""

    candidates: tuple[Any, ...]
    template: str | None = None
    members: frozenset[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", frozenset(self.candidates))

    def __contains__(self, value: Any) -> bool:
        return value in self.members


@dataclass(frozen=True)
class CompareRule:
    """Value must satisfy ``value <operator> operand``.

    ``display`` is the comparison as shown in messages, e.g. ``"> 3"`` or
    ``"<= Mon Dec 31 00:00:00 2001"`` for dates.
    """

    operator: str
    operand: Any
    display: str
    template: str | None = None

    @property
    def numeric(self) -> bool:
        return self.operator in NUMERIC_OPERATORS


@dataclass(frozen=True)
class SqlQuery:
    """One lookup whose result rows become a candidate list."""

    sql: str
    template: str | None = None


@dataclass(frozen=True)
class SqlDeclaration:
    """A database handle plus the queries to run against it.

    ``source`` is the object the caller supplied; it keys the result cache.
    """

    source: Any
    handle: Any
    queries: tuple[SqlQuery, ...]


NUMERIC_OPERATORS = frozenset({"<", ">", "<=", ">=", "==", "!="})
STRING_OPERATORS = frozenset({"lt", "gt", "le", "ge", "eq", "ne"})
