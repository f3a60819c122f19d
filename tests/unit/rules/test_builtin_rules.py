"""Tests for built-in validation rules."""

import unicodedata
from datetime import datetime

import pytest

from violin.rules.builtin import (
    AlnumDashRule,
    AlnumRule,
    AlphaRule,
    ArrayRule,
    BetweenRule,
    BoolRule,
    CheckedRule,
    DateRule,
    EmailRule,
    IntRule,
    IpRule,
    MatchesRule,
    MaxRule,
    MinRule,
    NumberRule,
    RegexRule,
    RequiredRule,
    UrlRule,
    to_number,
)
from violin.validator import Violin


class TestToNumber:
    """Test numeric coercion helper."""

    @pytest.mark.parametrize("value,expected", [
        (5, 5.0),
        (2.5, 2.5),
        ("42", 42.0),
        (" -3.5 ", -3.5),
        ("1e3", 1000.0),
    ])
    def test_numbers(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [True, None, "abc", "", "nan", [1]])
    def test_not_numbers(self, value):
        assert to_number(value) is None


class TestRequiredRule:

    @pytest.mark.parametrize("value", ["billy", 0, False, [1], {"a": 1}])
    def test_present(self, value):
        assert RequiredRule().run(value, {}, []) is True

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}])
    def test_missing(self, value):
        assert RequiredRule().run(value, {}, []) is False


class TestNumericRules:

    def test_int(self):
        rule = IntRule()
        assert rule.run("20", {}, []) is True
        assert rule.run(20, {}, []) is True
        assert rule.run("20.0", {}, []) is True
        assert rule.run("20.5", {}, []) is False
        assert rule.run("abc", {}, []) is False
        assert rule.run(True, {}, []) is False

    def test_number(self):
        rule = NumberRule()
        assert rule.run("20.5", {}, []) is True
        assert rule.run("abc", {}, []) is False

    def test_between(self):
        rule = BetweenRule()
        assert rule.run(3, {}, ["1", "5"]) is True
        assert rule.run("5", {}, ["1", "5"]) is True
        assert rule.run(6, {}, ["1", "5"]) is False
        assert rule.run("x", {}, ["1", "5"]) is False
        assert rule.run(3, {}, ["1"]) is False

    def test_max_length_and_number(self):
        rule = MaxRule()
        assert rule.run("abc", {}, ["3"]) is True
        assert rule.run("abcd", {}, ["3"]) is False
        assert rule.run(10, {}, ["5"]) is False
        assert rule.run("10", {}, ["20", "number"]) is True
        assert rule.run("10", {}, ["2"]) is True

    def test_min_length_and_number(self):
        rule = MinRule()
        assert rule.run("ab", {}, ["3"]) is False
        assert rule.run([1, 2, 3], {}, ["3"]) is True
        assert rule.run("7", {}, ["5", "number"]) is True
        assert rule.run(None, {}, ["1"]) is False


class TestLargeIntegers:
    """Integers beyond float range are compared exactly."""

    HUGE = 10**400

    def test_int_and_number(self):
        assert IntRule().run(self.HUGE, {}, []) is True
        assert NumberRule().run(self.HUGE, {}, []) is True
        assert IntRule().run(str(self.HUGE), {}, []) is True

    def test_between(self):
        assert BetweenRule().run(self.HUGE, {}, ["1", "5"]) is False
        assert BetweenRule().run(self.HUGE, {}, ["1", str(self.HUGE)]) is True

    def test_min_and_max(self):
        assert MaxRule().run(self.HUGE, {}, ["3"]) is False
        assert MinRule().run(self.HUGE, {}, ["3"]) is True
        assert MaxRule().run(str(self.HUGE), {}, ["3", "number"]) is False

    def test_chain_records_failures_instead_of_raising(self):
        violin = Violin()

        violin.validate({"n": self.HUGE}, {"n": "int|number|between(1,5)|max(3)"})

        assert violin.errors().to_dict() == {
            "n": ["n must be between 1 and 5.", "n must be a maximum of 3"],
        }


class TestStringRules:

    def test_alpha(self):
        assert AlphaRule().run("billy", {}, []) is True
        assert AlphaRule().run("éclair", {}, []) is True
        assert AlphaRule().run("billy1", {}, []) is False

    def test_alpha_accepts_combining_marks(self):
        decomposed = unicodedata.normalize("NFD", "José")

        assert AlphaRule().run(decomposed, {}, []) is True
        assert AlphaRule().run("", {}, []) is False

    def test_alnum(self):
        assert AlnumRule().run("billy1", {}, []) is True
        assert AlnumRule().run("billy-1", {}, []) is False

    def test_alnum_dash(self):
        assert AlnumDashRule().run("billy-the_kid1", {}, []) is True
        assert AlnumDashRule().run("billy kid", {}, []) is False
        assert AlnumDashRule().run("", {}, []) is False

    def test_email(self):
        assert EmailRule().run("billy@example.com", {}, []) is True
        assert EmailRule().run("billy@", {}, []) is False
        assert EmailRule().run("billy.example.com", {}, []) is False

    def test_ip(self):
        assert IpRule().run("127.0.0.1", {}, []) is True
        assert IpRule().run("::1", {}, []) is True
        assert IpRule().run("300.1.1.1", {}, []) is False

    def test_url(self):
        assert UrlRule().run("https://example.com/path", {}, []) is True
        assert UrlRule().run("example.com", {}, []) is False
        assert UrlRule().run("http://exa mple.com", {}, []) is False

    def test_regex(self):
        assert RegexRule().run("abc123", {}, ["'[a-z]+[0-9]+'"]) is True
        assert RegexRule().run("123abc", {}, ["[a-z]+[0-9]+"]) is False
        assert RegexRule().run("abc", {}, []) is False


class TestOtherRules:

    def test_matches_uses_other_field(self):
        data = {"password": "secret", "password_again": "secret"}
        assert MatchesRule().run("secret", data, ["password"]) is True
        assert MatchesRule().run("other", data, ["password"]) is False
        assert MatchesRule().run("secret", data, ["missing"]) is False

    def test_array(self):
        assert ArrayRule().run([1, 2], {}, []) is True
        assert ArrayRule().run({"a": 1}, {}, []) is True
        assert ArrayRule().run("1,2", {}, []) is False

    def test_bool(self):
        assert BoolRule().run(False, {}, []) is True
        assert BoolRule().run(0, {}, []) is False

    def test_date(self):
        assert DateRule().run("2024-02-29", {}, []) is True
        assert DateRule().run("29/02/2024", {}, []) is True
        assert DateRule().run(datetime(2024, 1, 1), {}, []) is True
        assert DateRule().run("2023-02-29", {}, []) is False
        assert DateRule().run("tomorrow-ish", {}, []) is False

    @pytest.mark.parametrize("value", ["yes", "on", "1", "true", True, 1])
    def test_checked(self, value):
        assert CheckedRule().run(value, {}, []) is True

    @pytest.mark.parametrize("value", ["no", "", None, False, 0])
    def test_not_checked(self, value):
        assert CheckedRule().run(value, {}, []) is False

    def test_rules_are_callable(self):
        assert RequiredRule()("x", {}, []) is True
