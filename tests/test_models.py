"""
Tests for configuration models and normalized rules.
"""

import pytest
from pydantic import ValidationError

from prompter.core.models import (
    BaseConfig,
    CaseFold,
    CompareRule,
    ListRule,
    RequestConfig,
    ValueType,
)


class TestBaseConfig:
    def test_check_names_in_order(self):
        base = BaseConfig(pairs=(("list_check", ["a"]), ("prompt", "? "), ("regex_check", "a")))
        assert base.check_names() == ["list_check", "regex_check"]

    def test_explicit_order(self):
        base = BaseConfig(pairs=(("list_check", ["a"]), ("ordered_checks", ["x_check"])))
        assert base.check_names() == ["x_check"]

    def test_frozen(self):
        base = BaseConfig(pairs=(("prompt", "? "),))
        with pytest.raises(ValidationError):
            base.pairs = ()


class TestRequestConfig:
    def test_defaults(self):
        config = RequestConfig()
        assert config.value_type == ValueType.PLAIN
        assert config.case == CaseFold.NONE
        assert not config.is_list
        assert config.list_separator == ", "

    def test_list(self):
        config = RequestConfig(delimiter=";")
        assert config.is_list
        assert config.list_separator == "; "

    def test_none_value_type_is_plain(self):
        assert RequestConfig(value_type=None).value_type == ValueType.PLAIN

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            RequestConfig(colour="red")

    def test_set_default_rejected(self):
        with pytest.raises(ValidationError):
            RequestConfig(default={"a"})

    def test_for_checks_copies(self):
        config = RequestConfig(date_format_return="%Y")
        copy = config.for_checks(date_format_return=None)
        assert copy.date_format_return is None
        assert config.date_format_return == "%Y"


class TestRules:
    def test_list_rule_membership(self):
        rule = ListRule(("a", "b"))
        assert "a" in rule
        assert "c" not in rule
        assert rule.template is None

    def test_compare_rule_numeric(self):
        assert CompareRule(">", 3.0, "> 3").numeric
        assert not CompareRule("gt", "m", "gt m").numeric
