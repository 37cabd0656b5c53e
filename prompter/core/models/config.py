"""
Configuration models — the engine's base layer and the per-call layer.

BaseConfig is built once when a Prompter is constructed and never changes.
RequestConfig is rebuilt for every public call by overlaying the call's
arguments onto the base (see ``prompter.core.config.resolver``).

Precedence, highest first:
    call argument  >  base configuration  >  field default below
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Suffix that marks a parameter key as a check declaration
CHECK_SUFFIX = "_check"


class ValueType(StrEnum):
    """How raw input is coerced."""

    PLAIN = "plain"
    DATE = "date"


class CaseFold(StrEnum):
    """Case adjustment applied to every input element."""

    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"
    CAPITALIZE = "capitalize"


_CASE_ALIASES = {
    "uc": CaseFold.UPPER,
    "lc": CaseFold.LOWER,
    "ucfirst": CaseFold.CAPITALIZE,
}


class BaseConfig(BaseModel):
    """Parameters supplied at engine construction, in declaration order."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pairs: tuple[tuple[str, Any], ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return dict(self.pairs)

    def check_names(self) -> list[str]:
        """Check keys in the order they were declared."""
        explicit = self.as_dict().get("ordered_checks")
        if explicit is not None:
            return list(explicit)
        return [key for key, _ in self.pairs if key.endswith(CHECK_SUFFIX)]


class RequestConfig(BaseModel):
    """Effective configuration for one acquisition or one check call.

    ``checks`` maps a check name to its normalized declaration; the shape
    of each declaration belongs to the check that produced it.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    name: str | None = None
    value_type: ValueType = ValueType.PLAIN
    allow_null: bool = False

    timeout: int = Field(default=600, ge=0)       # seconds, 0 = disabled
    max_tries: int = Field(default=20, ge=0)      # 0 = disabled

    message: str | None = None
    show_message: bool = True
    prompt: str = "> "
    reprompt: str | None = None

    case: CaseFold = CaseFold.NONE
    confirm: bool = False
    echo_quote: str = "'"
    hide_input: bool = False

    delimiter: str | None = None
    delimiter_spacing_auto: bool = True
    min_elements: int | None = Field(default=None, ge=0)
    max_elements: int | None = Field(default=None, ge=0)
    unique_elements: bool = False

    default: tuple[Any, ...] | None = None

    date_format: str | None = None
    date_format_return: str | None = None
    date_preprocess: Callable[[str], str] | None = None
    time_zone: str = "UTC"

    term_width: int = Field(default=72, gt=0)

    ordered_checks: tuple[str, ...] = ()
    checks: dict[str, Any] = Field(default_factory=dict)
    cache_sql_results: bool = False

    @field_validator("value_type", mode="before")
    @classmethod
    def _plain_when_unset(cls, value: Any) -> Any:
        if value is None or value == "":
            return ValueType.PLAIN
        return value

    @field_validator("case", mode="before")
    @classmethod
    def _case_aliases(cls, value: Any) -> Any:
        if value is None:
            return CaseFold.NONE
        if isinstance(value, str):
            return _CASE_ALIASES.get(value, value)
        return value

    @field_validator("default", mode="before")
    @classmethod
    def _default_as_tuple(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return tuple(value) or None
        if isinstance(value, (dict, set)):
            raise ValueError("default value may only be a list or a scalar")
        return (value,)

    # ── Convenience ─────────────────────────────────────────────

    @property
    def is_date(self) -> bool:
        return self.value_type == ValueType.DATE

    @property
    def is_list(self) -> bool:
        """Whether the caller receives a list (a delimiter is configured)."""
        return self.delimiter is not None

    @property
    def list_separator(self) -> str:
        """Separator used when rendering several values for display."""
        if self.delimiter is not None:
            return f"{self.delimiter} "
        return ", "

    def for_checks(self, **overrides: Any) -> RequestConfig:
        """Copy used for intermediate checks inside one acquisition."""
        return self.model_copy(update=overrides)
