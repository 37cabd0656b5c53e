"""
Checks — validation steps composed by the pipeline.
"""

from prompter.core.checks.base import Check, CheckContext, CustomCheck
from prompter.core.checks.compare import CompareCheck
from prompter.core.checks.listing import ListCheck
from prompter.core.checks.pipeline import CheckPipeline
from prompter.core.checks.regex import RegexCheck
from prompter.core.checks.registry import CheckRegistry
from prompter.core.checks.sql import SqlCheck, SqlResultCache

BUILTIN_CHECKS = (RegexCheck, ListCheck, CompareCheck, SqlCheck)

__all__ = [
    "BUILTIN_CHECKS",
    "Check",
    "CheckContext",
    "CheckPipeline",
    "CheckRegistry",
    "CompareCheck",
    "CustomCheck",
    "ListCheck",
    "RegexCheck",
    "SqlCheck",
    "SqlResultCache",
]
