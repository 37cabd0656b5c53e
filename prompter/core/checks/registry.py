"""
Check registry — maps check names to Check instances.

The built-ins are registered by the engine. Any other ``*_check`` key that
shows up in a configuration is served by a ``CustomCheck`` wrapping the
callable the caller supplied, so the pipeline only ever sees ``Check``.
"""

from __future__ import annotations

import logging

from prompter.core.checks.base import Check, CheckContext, CustomCheck
from prompter.core.models.config import CHECK_SUFFIX

logger = logging.getLogger(__name__)


class CheckRegistry:
    """Registry of named checks sharing one CheckContext."""

    def __init__(self, context: CheckContext):
        self._context = context
        self._checks: dict[str, Check] = {}

    @property
    def context(self) -> CheckContext:
        return self._context

    def register(self, check: Check) -> None:
        """Register a check instance under its ``name``.

        Raises:
            ValueError: If the name does not end in ``_check``.
        """
        if not check.name.endswith(CHECK_SUFFIX):
            raise ValueError(f"Check names must end in '{CHECK_SUFFIX}': {check.name!r}")
        if check.name in self._checks:
            logger.warning("Overwriting existing check: %s", check.name)
        self._checks[check.name] = check
        logger.debug("Registered check: %s", check.name)

    def unregister(self, name: str) -> None:
        self._checks.pop(name, None)

    def get(self, name: str) -> Check:
        """The registered check for ``name``, or a custom-callable wrapper."""
        check = self._checks.get(name)
        if check is None:
            return CustomCheck(self._context, name)
        return check

    def is_registered(self, name: str) -> bool:
        return name in self._checks

    def list_checks(self) -> list[str]:
        return list(self._checks.keys())
