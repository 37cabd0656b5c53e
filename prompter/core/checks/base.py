"""
Check base — the contract every validation step implements.

A check has two halves:

    normalize(declaration, config)  → canonical rules, at resolution time
    evaluate(values, rules, config) → True / False, per attempt

``apply`` glues them for the pipeline and for stand-alone calls: it looks
up the rules in ``config.checks``, evaluates, and returns the values (date
formatted for return if requested) or ``None`` on failure.

To add a check:
    1. Subclass Check
    2. Set ``name`` (must end in ``_check``) and implement evaluate
    3. Override normalize if the declaration needs reshaping
    4. Register it with ``Prompter.register_check``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from prompter.core.engine.coercer import ValueCoercer
from prompter.core.engine.display import Display
from prompter.core.errors import ConfigurationError
from prompter.core.models.config import RequestConfig

# Signature shared by checks and user-supplied check callables
CheckFunction = Callable[[list[Any], RequestConfig], "list[Any] | None"]


@dataclass
class CheckContext:
    """Collaborators a check may use while evaluating."""

    display: Display
    coercer: ValueCoercer
    sql_cache: Any = None


class Check(ABC):
    """Abstract base class for all checks."""

    name: str = ""

    def __init__(self, context: CheckContext):
        self.context = context

    def normalize(self, declaration: Any, config: RequestConfig) -> Any:
        """Fold a raw declaration into this check's rule form.

        Raises:
            ConfigurationError: If the declaration has an invalid shape.
        """
        return declaration

    @abstractmethod
    def evaluate(self, values: list[Any], rules: Any, config: RequestConfig) -> bool:
        """Whether every value satisfies every rule.

        On failure, print the failing rule's message (if it has one) and
        return False. Never raise for a bad value.
        """

    def apply(self, values: Sequence[Any], config: RequestConfig) -> list[Any] | None:
        rules = config.checks.get(self.name)
        if rules is None:
            raise ConfigurationError(
                f"{self.name} was invoked, but no {self.name} declaration was found!"
            )
        values = list(values)
        if not self.evaluate(values, rules, config):
            return None
        return self.context.coercer.format_for_return(values, config)

    def fail(self, template: str | None, config: RequestConfig, *args: Any) -> bool:
        """Report a failed rule and return False."""
        if template:
            self.context.display.notice(
                self.context.display.interpolate(template, config, *args), config
            )
        return False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class CustomCheck(Check):
    """Wraps a plain callable declared as ``<anything>_check=func``.

    The callable receives ``(values, config)`` and returns the accepted
    values or ``None``, the same contract as ``Check.apply``.
    """

    def __init__(self, context: CheckContext, name: str):
        super().__init__(context)
        self.name = name

    def normalize(self, declaration: Any, config: RequestConfig) -> CheckFunction:
        if not callable(declaration):
            raise ConfigurationError(
                f"{self.name} is not a built-in check, so its value must be callable"
            )
        return declaration

    def evaluate(self, values: list[Any], rules: CheckFunction, config: RequestConfig) -> bool:
        return rules(values, config) is not None

    def apply(self, values: Sequence[Any], config: RequestConfig) -> list[Any] | None:
        function: CheckFunction | None = config.checks.get(self.name)
        if function is None:
            raise ConfigurationError(
                f"{self.name} was invoked, but no {self.name} declaration was found!"
            )
        result = function(list(values), config)
        if result is None:
            return None
        if not isinstance(result, list):
            result = list(result) if isinstance(result, tuple) else [result]
        return result
