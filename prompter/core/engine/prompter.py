"""
Prompter — the engine callers construct and talk to.

    prompter = Prompter(max_tries=5, date_format="%d-%b-%Y")
    grade = prompter.get(
        name="Letter grade",
        delimiter=",",
        list_check=["A", "B", "C", "D", "F"],
    )

Construction parameters form the base configuration; every call overlays
its own parameters on top of it. The same checks used while prompting can
be called directly (``regex_check``, ``list_check`` …) to validate values
that did not come from a terminal.

Collaborators default to the real ones (click terminal, textwrap reflow,
dateutil, SIGALRM timer) and can be replaced for tests or embedding.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from prompter.adapters.base import DateEngine, Reflow, Terminal, Timer
from prompter.adapters.dates import DateutilEngine
from prompter.adapters.reflow import TextReflow
from prompter.adapters.terminal import ClickTerminal
from prompter.adapters.timer import AlarmTimer
from prompter.core.checks import (
    BUILTIN_CHECKS,
    Check,
    CheckContext,
    CheckPipeline,
    CheckRegistry,
    SqlResultCache,
)
from prompter.core.config.loader import load_parameters
from prompter.core.config.resolver import ParameterResolver, call_pairs, split_requests
from prompter.core.engine.coercer import ValueCoercer
from prompter.core.engine.display import Display
from prompter.core.engine.session import PromptSession
from prompter.core.errors import RetryableInputError
from prompter.core.models.config import BaseConfig, RequestConfig

logger = logging.getLogger(__name__)


class Prompter:
    """Interactive value acquisition with declarative validation."""

    def __init__(
        self,
        *args: Any,
        terminal: Terminal | None = None,
        reflow: Reflow | None = None,
        dates: DateEngine | None = None,
        timer: Timer | None = None,
        **params: Any,
    ):
        self._terminal = terminal or ClickTerminal()
        self._reflow = reflow or TextReflow()
        self._dates = dates or DateutilEngine()
        self._timer = timer or AlarmTimer()

        self._coercer = ValueCoercer(self._dates)
        self._display = Display(self._terminal, self._reflow, self._coercer)
        self._sql_cache = SqlResultCache()

        context = CheckContext(
            display=self._display,
            coercer=self._coercer,
            sql_cache=self._sql_cache,
        )
        self._registry = CheckRegistry(context)
        for check_class in BUILTIN_CHECKS:
            self._registry.register(check_class(context))

        self._resolver = ParameterResolver(
            self._registry,
            self._coercer,
            self._dates,
            self._terminal.width,
        )
        self._pipeline = CheckPipeline(self._registry)
        self._base = self._resolver.base(call_pairs(args, params))
        logger.debug("Prompter ready with %d base parameters", len(self._base.pairs))

    @classmethod
    def from_file(cls, path: Path | str, **collaborators: Any) -> Prompter:
        """Build a Prompter whose base configuration comes from a YAML file.

        Raises:
            ConfigurationError: If the file cannot be loaded or is invalid.
        """
        return cls(load_parameters(Path(path)), **collaborators)

    # ── Properties ──────────────────────────────────────────────

    @property
    def base(self) -> BaseConfig:
        return self._base

    @property
    def sql_cache(self) -> SqlResultCache:
        return self._sql_cache

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    # ── Acquisition ─────────────────────────────────────────────

    def get(self, *args: Any, **params: Any) -> Any:
        """Prompt for one value, or for each request in a list of requests.

        Accepts keyword parameters, a single mapping or sequence of pairs,
        or a list of such mappings. A list of requests returns a list of
        results in the same order.

        Raises:
            ConfigurationError: Before any prompting, if a request is invalid.
            TriesExceededError: When the user runs out of tries.
            TimedOutError: When the user takes longer than ``timeout``.
        """
        requests, multiple = split_requests(args, params)
        # resolve everything first so a bad second request fails before any I/O
        configs = [self._resolver.resolve(self._base, pairs) for pairs in requests]

        results = []
        for config in configs:
            session = PromptSession(
                config, self._display, self._coercer, self._pipeline, self._timer
            )
            results.append(session.run())

        if multiple:
            return results
        return results[0]

    # ── Stand-alone checks ──────────────────────────────────────

    def check(self, name: str, value: Any, *args: Any, **params: Any) -> Any:
        """Run one declared check against ``value``.

        Returns the value (a list if the caller passed a list or configured
        a delimiter) when it passes, ``None`` when it does not.
        """
        config = self._resolver.resolve(self._base, call_pairs(args, params))
        try:
            values = self._coercer.normalize_values(value, config)
        except RetryableInputError as e:
            self._display.notice(str(e), config)
            return None

        result = self._registry.get(name).apply(values, config)
        if result is None:
            return None
        if isinstance(value, (list, tuple)) or config.is_list:
            return result
        return result[0]

    def validate(self, value: Any, *args: Any, **params: Any) -> Any:
        """Run every declared check against ``value``, as ``get`` would.

        Checks share one resolved configuration and see dates as epoch
        seconds; ``date_format_return`` is applied once to the accepted
        value. Returns the value (a list if the caller passed a list or
        configured a delimiter), or ``None`` if a check rejects it.
        """
        config = self._resolver.resolve(self._base, call_pairs(args, params))
        try:
            values = self._coercer.normalize_values(value, config)
        except RetryableInputError as e:
            self._display.notice(str(e), config)
            return None

        checked = self._pipeline.run(values, config, config.cache_sql_results)
        if checked is None:
            return None
        result = self._coercer.format_for_return(checked, config)
        if isinstance(value, (list, tuple)) or config.is_list:
            return result
        return result[0]

    def regex_check(self, value: Any, *args: Any, **params: Any) -> Any:
        return self.check("regex_check", value, *args, **params)

    def list_check(self, value: Any, *args: Any, **params: Any) -> Any:
        return self.check("list_check", value, *args, **params)

    def compare_check(self, value: Any, *args: Any, **params: Any) -> Any:
        return self.check("compare_check", value, *args, **params)

    def sql_check(self, value: Any, *args: Any, **params: Any) -> Any:
        return self.check("sql_check", value, *args, **params)

    # ── Extension ───────────────────────────────────────────────

    def register_check(self, check: Check | type[Check]) -> Check:
        """Register a Check subclass (or instance) for this engine."""
        if isinstance(check, type):
            check = check(self._registry.context)
        self._registry.register(check)
        return check

    def config(self, *args: Any, **params: Any) -> RequestConfig:
        """The effective configuration a call with these parameters would use."""
        return self._resolver.resolve(self._base, call_pairs(args, params))
