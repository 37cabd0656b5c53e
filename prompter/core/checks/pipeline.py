"""
Check pipeline — run the requested checks in declared order.

The first failing check ends the run. Each check sees the values returned
by the one before it, with dates kept as epoch seconds throughout.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from prompter.core.checks.registry import CheckRegistry
from prompter.core.models.config import RequestConfig

logger = logging.getLogger(__name__)


class CheckPipeline:
    """Ordered, short-circuiting chain of checks."""

    def __init__(self, registry: CheckRegistry):
        self._registry = registry

    def run(
        self,
        values: Sequence[Any],
        config: RequestConfig,
        cache_sql_results: bool = True,
    ) -> list[Any] | None:
        """Accepted values, or None as soon as one check rejects them.

        Dates stay epoch seconds; the caller formats the accepted values.
        """
        check_config = config.for_checks(
            date_format_return=None, cache_sql_results=cache_sql_results
        )
        current = list(values)
        for name in config.ordered_checks:
            result = self._registry.get(name).apply(current, check_config)
            if result is None:
                logger.debug("Pipeline stopped at %s for %r", name, current)
                return None
            current = result
        return current
