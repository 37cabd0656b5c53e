"""
Parameter resolver — base configuration + call arguments → RequestConfig.

Call arguments arrive as keyword arguments, a mapping, or a sequence of
``(key, value)`` pairs. All three keep their order, which matters for
check keys: checks run in the order they were declared, base checks
first, then any new ones from the call. An explicit ``ordered_checks``
in the call replaces that order outright.

Resolution happens before any I/O, so configuration mistakes surface as
``ConfigurationError`` and are never confused with bad user input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from prompter.adapters.base import DateEngine
from prompter.core.checks.registry import CheckRegistry
from prompter.core.engine.coercer import ValueCoercer, default_date_preprocess
from prompter.core.errors import ConfigurationError
from prompter.core.models.config import CHECK_SUFFIX, BaseConfig, RequestConfig

logger = logging.getLogger(__name__)

Pairs = list[tuple[str, Any]]

DEFAULT_DATE_FORMAT = "%c"

# Short names accepted for compatibility with older call sites
ALIASES = {
    "type": "value_type",
    "msg": "message",
    "maxtries": "max_tries",
    "re_prompt": "reprompt",
    "min_elem": "min_elements",
    "max_elem": "max_elements",
    "unique_elem": "unique_elements",
}

# read_mode values that mean "do not echo"
_HIDDEN_READ_MODES = ("noecho", 2)


def _is_pair(item: Any) -> bool:
    return isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[0], str)


def as_pairs(arg: Any) -> Pairs:
    """Ordered pairs from a mapping or a sequence of pairs.

    Raises:
        ConfigurationError: For anything else.
    """
    if isinstance(arg, Mapping):
        return list(arg.items())
    if isinstance(arg, (list, tuple)) and all(_is_pair(item) for item in arg):
        return [(item[0], item[1]) for item in arg]
    raise ConfigurationError(f"invalid arg: {arg!r}")


def call_pairs(args: Sequence[Any], params: Mapping[str, Any]) -> Pairs:
    """Pairs for one request: an optional positional mapping/pairs plus kwargs."""
    if len(args) > 1:
        raise ConfigurationError(
            "Pass parameters as keywords, one mapping, or one sequence of pairs"
        )
    pairs = as_pairs(args[0]) if args else []
    return pairs + list(params.items())


def split_requests(args: Sequence[Any], params: Mapping[str, Any]) -> tuple[list[Pairs], bool]:
    """Split ``get`` arguments into requests.

    Returns:
        (requests, multiple). ``multiple`` is True when the caller passed a
        list of requests and therefore expects a list of results.
    """
    if len(args) == 1 and not params:
        arg = args[0]
        if (
            isinstance(arg, (list, tuple))
            and arg
            and not all(_is_pair(item) for item in arg)
        ):
            return [as_pairs(item) for item in arg], True
    return [call_pairs(args, params)], False


def canonical(pairs: Pairs) -> Pairs:
    """Replace alias keys with their canonical names."""
    result = []
    for key, value in pairs:
        if not isinstance(key, str):
            raise ConfigurationError(f"Parameter names must be strings, got {key!r}")
        result.append((ALIASES.get(key, key), value))
    return result


def _dedupe(names: Sequence[str]) -> list[str]:
    seen: list[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen


class ParameterResolver:
    """Builds the effective configuration for each public call."""

    def __init__(
        self,
        registry: CheckRegistry,
        coercer: ValueCoercer,
        dates: DateEngine,
        terminal_width: Callable[[], int],
    ):
        self._registry = registry
        self._coercer = coercer
        self._dates = dates
        self._terminal_width = terminal_width

    def base(self, pairs: Pairs) -> BaseConfig:
        """Freeze construction parameters, validating them by resolving once."""
        base = BaseConfig(pairs=tuple(canonical(pairs)))
        self.resolve(base, [])
        return base

    def resolve(self, base: BaseConfig, pairs: Pairs) -> RequestConfig:
        """Overlay ``pairs`` on ``base`` and normalize every declared check.

        Raises:
            ConfigurationError: On unknown keys, invalid values, undeclared
                checks, malformed check declarations or unparseable dates.
        """
        call = canonical(pairs)
        call_map = dict(call)

        merged = base.as_dict()
        merged.update(call_map)

        if "ordered_checks" in call_map:
            names = list(call_map["ordered_checks"] or [])
        else:
            names = base.check_names()
            names.extend(key for key, _ in call if key.endswith(CHECK_SUFFIX))
        names = _dedupe(names)

        order = []
        declarations = {}
        for name in names:
            if name not in merged:
                raise ConfigurationError(f"{name} was requested, but no {name} declaration was found!")
            if merged[name] is None:
                continue
            order.append(name)
            declarations[name] = merged[name]

        fields = {
            key: value
            for key, value in merged.items()
            if not key.endswith(CHECK_SUFFIX) and key != "ordered_checks"
        }
        config = self._build(fields, tuple(order))
        config = self._apply_environment(config)

        checks = {
            name: self._registry.get(name).normalize(declaration, config)
            for name, declaration in declarations.items()
        }
        logger.debug(
            "Resolved request %r: type=%s checks=%s",
            config.name, config.value_type, list(order),
        )
        return config.model_copy(update={"checks": checks})

    def _build(self, fields: dict[str, Any], order: tuple[str, ...]) -> RequestConfig:
        if "message" in fields:
            message = fields["message"]
            if message is not None and not message:
                fields["message"] = None
                fields["show_message"] = False
            elif message is not None:
                fields["message"] = str(message)

        if "read_mode" in fields:
            mode = fields.pop("read_mode")
            fields.setdefault("hide_input", mode is True or mode in _HIDDEN_READ_MODES)

        if "delimiter_spacing" in fields:
            spacing = fields.pop("delimiter_spacing")
            fields["delimiter_spacing_auto"] = spacing if isinstance(spacing, bool) else spacing == "auto"

        try:
            return RequestConfig(**fields, ordered_checks=order)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _apply_environment(self, config: RequestConfig) -> RequestConfig:
        """Terminal width clamp, time zone check and date defaults."""
        updates: dict[str, Any] = {}

        width = self._terminal_width()
        if 0 < width < config.term_width:
            updates["term_width"] = width

        if not self._dates.knows_zone(config.time_zone):
            raise ConfigurationError(f"Unknown time zone: {config.time_zone}")

        if config.is_date:
            if config.date_preprocess is None:
                updates["date_preprocess"] = default_date_preprocess
            if config.date_format is None:
                updates["date_format"] = DEFAULT_DATE_FORMAT
            if config.default is not None:
                interim = config.model_copy(update=updates)
                updates["default"] = tuple(
                    self._coercer.require_epoch(value, interim, "default value")
                    for value in config.default
                )

        if not updates:
            return config
        return config.model_copy(update=updates)
