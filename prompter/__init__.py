"""
prompter — interactive value acquisition with declarative validation.

    from prompter import Prompter

    prompter = Prompter(max_tries=5)
    answer = prompter.get(name="Colour", list_check=["red", "green", "blue"])
"""

from prompter.core.engine.prompter import Prompter
from prompter.core.errors import (
    ConfigurationError,
    EndOfInput,
    NoRowsError,
    PrompterError,
    TimedOutError,
    TriesExceededError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EndOfInput",
    "NoRowsError",
    "Prompter",
    "PrompterError",
    "TimedOutError",
    "TriesExceededError",
    "__version__",
]
