"""
compare_check — every value must satisfy every comparison.

A comparison is an operator followed by an operand, e.g. ``"> 3"`` or
``"eq boo far"``. Numeric operators ``< > <= >= == !=`` require the value
to look like a number; string operators ``lt gt le ge eq ne`` compare
lexically. ``<=>`` and ``cmp`` are rejected.

Accepted declarations:

    "> 3"                                  one comparison, silent failure
    ["> 3", "%s is not %s."]               comparison + message
    ["> 6", " < 11"]                       two comparisons
    [("> 12/31/2015", "%s is not %s!"), "< 11"]

A two-element list is read as comparison + message when its second item
does not itself start with an operator.
"""

from __future__ import annotations

import logging
import operator
import re
from typing import Any

from prompter.core.checks.base import Check
from prompter.core.engine.coercer import is_null
from prompter.core.errors import ConfigurationError
from prompter.core.models.checks import NUMERIC_OPERATORS, CompareRule
from prompter.core.models.config import RequestConfig

logger = logging.getLogger(__name__)

# word operators are followed by whitespace or the end of the string
OPERATOR_RE = re.compile(r"^\s*((?:lt|gt|le|ge|eq|ne|cmp)(?=\s|$)|<=>|<=|>=|==|!=|<|>)\s*")
NUMERIC_RE = re.compile(r"^[+-]?(?=\d|\.\d)\d*(\.\d*)?([Ee][+-]?\d+)?$")

_REJECTED = frozenset({"<=>", "cmp"})

_OPERATIONS = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
    "lt": operator.lt,
    "gt": operator.gt,
    "le": operator.le,
    "ge": operator.ge,
    "eq": operator.eq,
    "ne": operator.ne,
}


def _starts_with_operator(text: Any) -> bool:
    return isinstance(text, str) and OPERATOR_RE.match(text) is not None


class CompareCheck(Check):
    """Compare input against fixed operands."""

    name = "compare_check"

    def normalize(self, declaration: Any, config: RequestConfig) -> tuple[CompareRule, ...]:
        if isinstance(declaration, str):
            return (self.rule(declaration, None, config),)
        if isinstance(declaration, tuple):
            return (self.rule(*self._pair(declaration), config),)
        if not isinstance(declaration, list) or not declaration:
            raise ConfigurationError("compare_check must be a comparison or a list of them")

        if (
            len(declaration) == 2
            and all(isinstance(item, str) for item in declaration)
            and not _starts_with_operator(declaration[1])
        ):
            return (self.rule(declaration[0], declaration[1], config),)

        rules = []
        for item in declaration:
            if isinstance(item, (list, tuple)):
                rules.append(self.rule(*self._pair(item), config))
            else:
                rules.append(self.rule(item, None, config))
        return tuple(rules)

    @staticmethod
    def _pair(item: Any) -> tuple[Any, Any]:
        if len(item) != 2:
            raise ConfigurationError("Invalid number of elements in compare_check pair")
        return item[0], item[1]

    def rule(self, comparison: Any, template: Any, config: RequestConfig) -> CompareRule:
        if not isinstance(comparison, str):
            raise ConfigurationError(f"Invalid comparison: {comparison!r}")
        if template is not None and not isinstance(template, str):
            raise ConfigurationError(f"Invalid compare_check error message: {template!r}")

        match = OPERATOR_RE.match(comparison)
        if match is None:
            raise ConfigurationError(f"No comparison operator found in {comparison!r}")
        op = match.group(1)
        if op in _REJECTED:
            raise ConfigurationError(
                f"{op} is not an acceptable comparison operator for compare_check!"
            )
        operand: Any = comparison[match.end():]
        display = comparison.strip()

        if config.is_date:
            epoch = self.context.coercer.require_epoch(operand, config, "comparison value")
            shown = self.context.coercer.display(epoch, config)
            operand = epoch if op in NUMERIC_OPERATORS else str(epoch)
            display = f"{op} {shown}"
        elif op in NUMERIC_OPERATORS:
            if not NUMERIC_RE.match(operand.strip()):
                raise ConfigurationError(f"Comparison value {operand!r} is not numeric")
            operand = float(operand)

        return CompareRule(op, operand, display, template)

    def evaluate(
        self,
        values: list[Any],
        rules: tuple[CompareRule, ...],
        config: RequestConfig,
    ) -> bool:
        for value in values:
            if is_null(value, config):
                continue
            for rule in rules:
                if rule.numeric:
                    text = str(value)
                    if not NUMERIC_RE.match(text):
                        quote = config.echo_quote
                        self.context.display.notice(f"{quote}{text}{quote} is not numeric.", config)
                        return False
                    left: Any = float(text)
                else:
                    left = str(value)
                if _OPERATIONS[rule.operator](left, rule.operand):
                    continue
                logger.debug("compare_check: %r fails %s", value, rule.display)
                return self.fail(rule.template, config, value, rule.display)
        return True
