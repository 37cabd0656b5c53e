"""
Tests for parameter resolution — base + call layering, aliases, check order.
"""

import pytest

from prompter import ConfigurationError, Prompter
from prompter.adapters.mock import ScriptedTerminal
from prompter.adapters.timer import NullTimer
from prompter.core.config.resolver import as_pairs, call_pairs, canonical, split_requests
from prompter.core.engine.coercer import default_date_preprocess
from prompter.core.models import BaseConfig, CaseFold, RequestConfig, ValueType

# 2002-03-12 00:00:00 UTC
MAR_12_2002 = 1015891200


# ── Argument shapes ──────────────────────────────────────────────────


class TestArgumentShapes:
    def test_mapping_keeps_order(self):
        assert as_pairs({"b": 1, "a": 2}) == [("b", 1), ("a", 2)]

    def test_pair_sequence(self):
        assert as_pairs([("b", 1), ["a", 2]]) == [("b", 1), ("a", 2)]

    def test_invalid_arg(self):
        with pytest.raises(ConfigurationError, match="invalid arg"):
            as_pairs(["not", "pairs", "here"])

    def test_positional_then_keywords(self):
        assert call_pairs([{"a": 1}], {"b": 2}) == [("a", 1), ("b", 2)]

    def test_too_many_positionals(self):
        with pytest.raises(ConfigurationError):
            call_pairs([{"a": 1}, {"b": 2}], {})

    def test_single_request_from_keywords(self):
        requests, multiple = split_requests([], {"name": "x"})
        assert requests == [[("name", "x")]]
        assert multiple is False

    def test_list_of_mappings_is_multiple(self):
        requests, multiple = split_requests([[{"name": "a"}, {"name": "b"}]], {})
        assert requests == [[("name", "a")], [("name", "b")]]
        assert multiple is True

    def test_single_mapping_in_list_is_still_multiple(self):
        _, multiple = split_requests([[{"name": "a"}]], {})
        assert multiple is True

    def test_list_of_pairs_is_one_request(self):
        requests, multiple = split_requests([[("name", "a"), ("prompt", "? ")]], {})
        assert requests == [[("name", "a"), ("prompt", "? ")]]
        assert multiple is False

    def test_aliases(self):
        pairs = canonical([("type", "date"), ("msg", "hi"), ("maxtries", 3), ("min_elem", 1)])
        assert pairs == [
            ("value_type", "date"),
            ("message", "hi"),
            ("max_tries", 3),
            ("min_elements", 1),
        ]


# ── Layering ─────────────────────────────────────────────────────────


class TestLayering:
    def test_defaults(self, prompter):
        config = prompter.config()
        assert isinstance(config, RequestConfig)
        assert config.max_tries == 20
        assert config.timeout == 600
        assert config.prompt == "> "
        assert config.term_width == 72
        assert config.time_zone == "UTC"
        assert config.value_type == ValueType.PLAIN
        assert config.show_message is True

    def test_call_overrides_base(self, make_prompter):
        p = make_prompter(max_tries=5, prompt="? ")
        assert p.config(max_tries=2).max_tries == 2
        assert p.config().max_tries == 5
        assert p.config().prompt == "? "

    def test_base_is_frozen_pairs(self, make_prompter):
        p = make_prompter(max_tries=5)
        assert isinstance(p.base, BaseConfig)
        assert p.base.as_dict() == {"max_tries": 5}

    def test_alias_in_call(self, prompter):
        config = prompter.config(type="date", msg="When?", maxtries=3)
        assert config.is_date
        assert config.message == "When?"
        assert config.max_tries == 3

    def test_case_aliases(self, prompter):
        assert prompter.config(case="uc").case == CaseFold.UPPER
        assert prompter.config(case="ucfirst").case == CaseFold.CAPITALIZE

    def test_empty_message_hides_message(self, prompter):
        config = prompter.config(message="")
        assert config.show_message is False
        assert config.message is None

    def test_delimiter_spacing(self, prompter):
        assert prompter.config(delimiter=",").delimiter_spacing_auto is True
        assert prompter.config(delimiter=",", delimiter_spacing="none").delimiter_spacing_auto is False

    def test_scalar_default_becomes_tuple(self, prompter):
        assert prompter.config(default="x").default == ("x",)

    def test_empty_list_default_means_no_default(self, prompter):
        assert prompter.config(default=[]).default is None

    def test_terminal_width_clamps(self):
        p = Prompter(terminal=ScriptedTerminal(columns=40), timer=NullTimer())
        assert p.config().term_width == 40
        assert p.config(term_width=30).term_width == 30


class TestConfigurationErrors:
    def test_unknown_key(self, prompter):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            prompter.config(colour="red")

    def test_bad_base_fails_at_construction(self, make_prompter):
        with pytest.raises(ConfigurationError):
            make_prompter(max_tries=-1)

    def test_bad_value_type(self, prompter):
        with pytest.raises(ConfigurationError):
            prompter.config(value_type="number")

    def test_mapping_default_rejected(self, prompter):
        with pytest.raises(ConfigurationError):
            prompter.config(default={"a": 1})

    def test_unknown_time_zone(self, prompter):
        with pytest.raises(ConfigurationError, match="Unknown time zone"):
            prompter.config(time_zone="Mars/Olympus_Mons")

    def test_custom_check_must_be_callable(self, prompter):
        with pytest.raises(ConfigurationError, match="must be callable"):
            prompter.config(odd_check="yes")

    def test_unparseable_date_default(self, prompter):
        with pytest.raises(ConfigurationError, match="default value"):
            prompter.config(value_type="date", default="not a date at all")


# ── Check order ──────────────────────────────────────────────────────


class TestCheckOrder:
    def test_base_then_call(self, make_prompter):
        p = make_prompter(regex_check=r"^\w", list_check=["a", "b"])
        config = p.config(compare_check="gt a")
        assert config.ordered_checks == ("regex_check", "list_check", "compare_check")

    def test_call_redeclaring_base_check_keeps_position(self, make_prompter):
        p = make_prompter(regex_check=r"^\w", list_check=["a", "b"])
        config = p.config(regex_check=r"^a")
        assert config.ordered_checks == ("regex_check", "list_check")

    def test_explicit_order(self, make_prompter):
        p = make_prompter(regex_check=r"^\w", list_check=["a", "b"])
        config = p.config(ordered_checks=["list_check", "regex_check"])
        assert config.ordered_checks == ("list_check", "regex_check")

    def test_explicit_order_can_skip_checks(self, make_prompter):
        p = make_prompter(regex_check=r"^\w", list_check=["a", "b"])
        assert p.config(ordered_checks=["list_check"]).ordered_checks == ("list_check",)

    def test_undeclared_check_in_order(self, prompter):
        with pytest.raises(ConfigurationError, match="no regex_check declaration"):
            prompter.config(ordered_checks=["regex_check"])

    def test_none_disables_check(self, make_prompter):
        p = make_prompter(regex_check=r"^\w", list_check=["a", "b"])
        config = p.config(regex_check=None)
        assert config.ordered_checks == ("list_check",)
        assert "regex_check" not in config.checks

    def test_pairs_preserve_order(self, prompter):
        config = prompter.config([("list_check", ["a"]), ("regex_check", "^a")])
        assert config.ordered_checks == ("list_check", "regex_check")

    def test_checks_are_normalized(self, prompter):
        config = prompter.config(list_check=["a", "b"])
        (rule,) = config.checks["list_check"]
        assert rule.candidates == ("a", "b")


# ── Dates ────────────────────────────────────────────────────────────


class TestDateDefaults:
    def test_date_type_gets_format_and_preprocess(self, prompter):
        config = prompter.config(value_type="date")
        assert config.date_format == "%c"
        assert config.date_preprocess is default_date_preprocess

    def test_explicit_format_kept(self, prompter):
        assert prompter.config(value_type="date", date_format="%Y").date_format == "%Y"

    def test_default_converted_to_epoch(self, prompter):
        config = prompter.config(value_type="date", default="03/12/2002")
        assert config.default == (MAR_12_2002,)

    def test_epoch_default_kept(self, prompter):
        config = prompter.config(value_type="date", default=MAR_12_2002)
        assert config.default == (MAR_12_2002,)

    def test_plain_type_has_no_date_format(self, prompter):
        assert prompter.config().date_format is None

    def test_read_mode_alias(self, prompter):
        assert prompter.config(read_mode="noecho").hide_input is True
        assert prompter.config(read_mode=2).hide_input is True
        assert prompter.config(read_mode=1).hide_input is False

    def test_non_callable_preprocess(self, prompter):
        with pytest.raises(ConfigurationError):
            prompter.config(value_type="date", date_preprocess="not callable")
