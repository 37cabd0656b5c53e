"""
Configuration loader — reads prompter.yml into base parameters.

A project can keep its house style for prompts (date formats, tries,
timeouts, prompt strings, shared checks) in one YAML file:

    prompter:
      prompt: "? "
      max_tries: 5
      date_format: "%d-%b-%Y"

The mapping may also be flat. Key order is kept, so checks declared in
the file run in file order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from prompter.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "prompter.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for prompter.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to prompter.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_parameters(path: Path) -> list[tuple[str, Any]]:
    """Load base parameters from a YAML file.

    Returns:
        Ordered (key, value) pairs, ready for ``Prompter``.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping.
    """
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    logger.debug("Loading prompter config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "prompter" key or be flat
    params = data.get("prompter", data)
    if params is None:
        return []
    if not isinstance(params, dict):
        raise ConfigurationError(f"'prompter' in {path} must be a mapping")

    pairs = [(str(key), value) for key, value in params.items()]
    logger.info("Loaded %d prompter parameters from %s", len(pairs), path)
    return pairs
