"""
regex_check — every value must match every pattern.

Accepted declarations:

    r"^\\d+$"                                   one pattern, silent failure
    re.compile(r"^\\d+$")                       same, precompiled
    (r"^\\d+$", "%s has non-digits!")           pattern + message
    [re.compile(r"^\\d+$"), "%s has non-digits!"]  same, as a list
    [(r"^\\d+", "%s doesn't start with digits!"), r"foo"]

A two-element list is read as pattern + message only when its first item
is a compiled pattern; otherwise a list is a list of rules.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from prompter.core.checks.base import Check
from prompter.core.engine.coercer import is_null
from prompter.core.errors import ConfigurationError
from prompter.core.models.checks import RegexRule
from prompter.core.models.config import RequestConfig

logger = logging.getLogger(__name__)


def _compile(pattern: Any) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise ConfigurationError(f"Not a regex: {pattern!r}")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid regex {pattern!r}: {e}") from e


def _rule(item: Any) -> RegexRule:
    if isinstance(item, (tuple, list)):
        if len(item) != 2:
            raise ConfigurationError("Invalid number of elements in regex_check pair")
        pattern, template = item
        if template is not None and not isinstance(template, str):
            raise ConfigurationError(f"Not a valid regex_check error message: {template!r}")
        return RegexRule(_compile(pattern), template)
    return RegexRule(_compile(item))


class RegexCheck(Check):
    """Match input against regular expressions."""

    name = "regex_check"

    def normalize(self, declaration: Any, config: RequestConfig) -> tuple[RegexRule, ...]:
        if config.is_date:
            raise ConfigurationError(
                "regex_check is not a valid option in conjunction with type 'date'!"
            )

        if isinstance(declaration, tuple):
            return (_rule(declaration),)
        if isinstance(declaration, list):
            if (
                len(declaration) == 2
                and isinstance(declaration[0], re.Pattern)
                and isinstance(declaration[1], str)
            ):
                return (_rule(declaration),)
            if not declaration:
                raise ConfigurationError("regex_check declaration is empty")
            return tuple(_rule(item) for item in declaration)
        return (_rule(declaration),)

    def evaluate(
        self,
        values: list[Any],
        rules: tuple[RegexRule, ...],
        config: RequestConfig,
    ) -> bool:
        for value in values:
            if is_null(value, config):
                continue
            for rule in rules:
                if rule.pattern.search(str(value)):
                    continue
                logger.debug("regex_check: %r does not match %r", value, rule.pattern.pattern)
                return self.fail(rule.template, config, value, rule.pattern.pattern)
        return True
