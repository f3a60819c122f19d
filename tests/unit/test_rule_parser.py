"""Tests for rule chain parsing."""

from violin.parser import (
    RuleSpec,
    get_rule_args,
    get_rule_name,
    parse_chain,
    parse_rule,
    rule_has_args,
    split_chain,
)


class TestSplitChain:
    """Test splitting rule chains into tokens."""

    def test_single_rule(self):
        assert split_chain("required") == ["required"]

    def test_multiple_rules_keep_order(self):
        assert split_chain("required|int|between(1,5)") == ["required", "int", "between(1,5)"]


class TestRuleHasArgs:
    """Test detection of argument syntax."""

    def test_plain_rule(self):
        assert rule_has_args("required") is False

    def test_rule_with_args(self):
        assert rule_has_args("between(1,5)") is True

    def test_quoted_args(self):
        assert rule_has_args("matches('password')") is True

    def test_empty_parentheses(self):
        assert rule_has_args("max()") is False

    def test_missing_name(self):
        assert rule_has_args("(1,5)") is False


class TestParseRule:
    """Test parsing single tokens."""

    def test_name_only(self):
        spec = parse_rule("required")
        assert spec == RuleSpec(name="required", args=[])

    def test_args_are_strings(self):
        spec = parse_rule("between(1,5)")
        assert spec.name == "between"
        assert spec.args == ["1", "5"]

    def test_whitespace_removed(self):
        assert get_rule_args("between( 1 , 5 )") == ["1", "5"]

    def test_rule_name_stops_at_parenthesis(self):
        assert get_rule_name("max(10,number)") == "max"

    def test_empty_parentheses_yield_no_args(self):
        spec = parse_rule("max()")
        assert spec.name == "max"
        assert spec.args == []

    def test_str(self):
        assert str(parse_rule("between(1, 5)")) == "between(1,5)"
        assert str(parse_rule("int")) == "int"


class TestParseChain:
    """Test parsing complete chains."""

    def test_parse_chain(self):
        specs = parse_chain("required|min(3)|alpha")

        assert [spec.name for spec in specs] == ["required", "min", "alpha"]
        assert specs[1].args == ["3"]
