"""
Error taxonomy for the acquisition engine.

Two families:
    fatal        → ConfigurationError, NoRowsError, TriesExceededError,
                   TimedOutError, EndOfInput. Raised to the caller.
    recoverable  → RetryableInputError. Raised by the coercer, caught by
                   the prompt session, shown to the user, then re-prompted.

Check predicates never raise. They return ``None`` and the session loops.
"""

from __future__ import annotations


class PrompterError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PrompterError, ValueError):
    """Raised when call arguments or check declarations are malformed.

    Always raised at resolution time, before any prompt is written, so a
    bad configuration is never mistaken for a bad answer.
    """


class NoRowsError(PrompterError, LookupError):
    """Raised when a SQL-backed check's query returns no rows."""

    def __init__(self, sql: str):
        super().__init__(f"This SQL statement did not return any rows: {sql}")
        self.sql = sql


class RetryableInputError(PrompterError):
    """User input was rejected; the message is shown and the prompt repeats."""


class TriesExceededError(PrompterError):
    """The user exhausted ``max_tries`` without giving an acceptable value."""

    def __init__(self, max_tries: int):
        super().__init__("You have exceeded the maximum number of allowable tries")
        self.max_tries = max_tries


class TimedOutError(PrompterError):
    """No line arrived before the prompt's timeout expired."""

    def __init__(self, seconds: int):
        super().__init__("Timed out waiting for user input!")
        self.seconds = seconds


class EndOfInput(PrompterError, EOFError):
    """The terminal reached end of input while a value was still needed."""


class DateParseError(ValueError):
    """The date engine could not recognize a string as a date."""
