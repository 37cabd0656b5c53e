"""
Domain models — configuration layers and normalized check rules.

    from prompter.core.models import RequestConfig, ValueType, RegexRule
"""

from prompter.core.models.checks import (
    NUMERIC_OPERATORS,
    STRING_OPERATORS,
    CompareRule,
    ListRule,
    RegexRule,
    SqlDeclaration,
    SqlQuery,
)
from prompter.core.models.config import (
    CHECK_SUFFIX,
    BaseConfig,
    CaseFold,
    RequestConfig,
    ValueType,
)

__all__ = [
    # config.py
    "BaseConfig",
    "CHECK_SUFFIX",
    "CaseFold",
    # checks.py
    "CompareRule",
    "ListRule",
    "NUMERIC_OPERATORS",
    "RegexRule",
    "RequestConfig",
    "STRING_OPERATORS",
    "SqlDeclaration",
    "SqlQuery",
    "ValueType",
]
