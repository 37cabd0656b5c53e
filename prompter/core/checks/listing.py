"""
list_check — every value must appear in every candidate list.

Accepted declarations:

    ["A", "B", "C"]                             one list, silent failure
    (["A", "B", "C"], "%s is not one of %s")    list + message
    [(["A", "B"], "%s is not A or B"), ["B", "C"]]

With ``type=date`` candidates are converted to epoch seconds once, when
the configuration is resolved, and messages show them in ``date_format``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from prompter.core.checks.base import Check
from prompter.core.engine.coercer import is_null
from prompter.core.errors import ConfigurationError
from prompter.core.models.checks import ListRule
from prompter.core.models.config import RequestConfig

logger = logging.getLogger(__name__)


def _is_scalar(item: Any) -> bool:
    return not isinstance(item, (list, tuple, dict, set, frozenset))


class ListCheck(Check):
    """Match input against lists of acceptable values."""

    name = "list_check"

    def normalize(self, declaration: Any, config: RequestConfig) -> tuple[ListRule, ...]:
        if not isinstance(declaration, (list, tuple)) or not declaration:
            raise ConfigurationError("No list_check list was given!")

        # flat list of candidates
        if all(_is_scalar(item) for item in declaration):
            return (self.rule(declaration, None, config),)

        # a single (candidates, message) pair
        if self._is_pair(declaration):
            return (self.rule(declaration[0], declaration[1], config),)

        rules = []
        for item in declaration:
            if self._is_pair(item):
                rules.append(self.rule(item[0], item[1], config))
            elif isinstance(item, (list, tuple)) and all(_is_scalar(c) for c in item):
                rules.append(self.rule(item, None, config))
            else:
                raise ConfigurationError(f"Invalid list_check element: {item!r}")
        return tuple(rules)

    def rule(self, candidates: Sequence[Any], template: Any, config: RequestConfig) -> ListRule:
        if template is not None and not isinstance(template, str):
            raise ConfigurationError(f"Invalid list_check error message: {template!r}")
        if config.is_date:
            coercer = self.context.coercer
            values = tuple(coercer.require_epoch(c, config, "list value") for c in candidates)
        else:
            values = tuple(c if isinstance(c, str) else str(c) for c in candidates)
        return ListRule(values, template)

    @staticmethod
    def _is_pair(item: Any) -> bool:
        return (
            isinstance(item, (list, tuple))
            and len(item) == 2
            and isinstance(item[0], (list, tuple))
            and all(_is_scalar(c) for c in item[0])
            and (item[1] is None or isinstance(item[1], str))
        )

    def evaluate(
        self,
        values: list[Any],
        rules: Sequence[ListRule],
        config: RequestConfig,
    ) -> bool:
        for value in values:
            if is_null(value, config):
                continue
            for rule in rules:
                if value in rule:
                    continue
                logger.debug("%s: %r not among %d candidates", self.name, value, len(rule.candidates))
                return self.fail(rule.template, config, value, list(rule.candidates))
        return True
