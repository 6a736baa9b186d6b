"""Tests for the string validator and named patterns."""

import re

import pytest

from dataknobs_ensure import ContractError, StringValidator, ValidationErrors, length, patterns


class TestStringPredicates:
    """Test string predicate checks."""

    @pytest.mark.parametrize(
        "validator, good, bad, message",
        [
            (StringValidator().equals("a"), "a", "b", 'string must equal "a"'),
            (StringValidator().does_not_equal("a"), "b", "a", 'string must not equal "a"'),
            (StringValidator().starts_with("ab"), "abc", "cab", 'string must start with "ab"'),
            (
                StringValidator().does_not_start_with("ab"),
                "cab",
                "abc",
                'string must not start with "ab"',
            ),
            (StringValidator().ends_with("yz"), "xyz", "yzx", 'string must end with "yz"'),
            (
                StringValidator().does_not_end_with("yz"),
                "yzx",
                "xyz",
                'string must not end with "yz"',
            ),
            (StringValidator().contains("mid"), "amidst", "edge", 'string must contain "mid"'),
            (
                StringValidator().does_not_contain("mid"),
                "edge",
                "amidst",
                'string must not contain "mid"',
            ),
            (
                StringValidator().is_one_of(["red", "green"]),
                "red",
                "blue",
                "string must be one of the permitted values",
            ),
            (
                StringValidator().is_not_one_of(["red", "green"]),
                "blue",
                "red",
                "string must not be one of the prohibited values",
            ),
        ],
    )
    def test_predicate(self, validator, good, bad, message):
        """Test each predicate passes and fails with its message."""
        assert validator.validate(good) is None
        assert str(validator.validate(bad)) == message


class TestStringMatches:
    """Test regular expression checks."""

    def test_matches_searches(self):
        """Test unanchored patterns match anywhere in the string."""
        validator = StringValidator().matches("b+")

        assert validator.validate("abbc") is None
        assert str(validator.validate("ac")) == "string does not match expected pattern"

    def test_compiled_pattern(self):
        """Test a precompiled pattern is accepted."""
        validator = StringValidator().matches(re.compile(r"^\d{3}$"))

        assert validator.validate("123") is None
        assert validator.validate("1234") is not None

    def test_invalid_pattern(self):
        """Test an invalid regex fails at construction."""
        with pytest.raises(ContractError, match="could not compile regex"):
            StringValidator().matches("(unclosed")

    @pytest.mark.parametrize(
        "pattern, good, bad",
        [
            (patterns.ALPHA, "Bob", "Bob 5"),
            (patterns.ALPHA_NUM, "bob42", "bob-42"),
            (patterns.NUMBERS, "0042", "4.2"),
            (patterns.DECIMAL, "4.2", "42"),
            (patterns.UUID4, "9b2f1c7e-3a4d-4e5f-8a9b-0c1d2e3f4a5b", "not-a-uuid"),
            (patterns.IPV4, "192.168.0.1", "256.1.1.1"),
            (patterns.EMAIL, "user@example.com", "user@"),
            (patterns.MD5, "d41d8cd98f00b204e9800998ecf8427e", "d41d8cd9"),
        ],
    )
    def test_named_patterns(self, pattern, good, bad):
        """Test the common patterns."""
        validator = StringValidator().matches(pattern)

        assert validator.validate(good) is None
        assert validator.validate(bad) is not None

    @pytest.mark.parametrize(
        "pattern, value",
        [
            (patterns.ALPHA, "abc\n"),
            (patterns.ALPHA_NUM, "abc1\n"),
            (patterns.NUMBERS, "123\n"),
            (patterns.NUMBERS, "٣٤"),
            (patterns.DECIMAL, "٣.٤"),
            (patterns.UUID4, "9b2f1c7e-3a4d-4e5f-8a9b-0c1d2e3f4a5b\n"),
            (patterns.IPV4, "10.0.0.1\n"),
            (patterns.EMAIL, "user@example.com\n"),
            (patterns.SHA1, "da39a3ee5e6b4b0d3255bfef95601890afd80709\n"),
            (patterns.ALPHA, "ſ"),
        ],
    )
    def test_named_patterns_reject_trailing_newline_and_unicode(self, pattern, value):
        """Test anchors cover the whole string and classes stay ASCII."""
        assert StringValidator().matches(pattern).validate(value) is not None


class TestStringLength:
    """Test grouped length checks on strings."""

    def test_length_checks(self):
        """Test the length constraints and messages."""
        assert str(StringValidator().is_not_empty().validate("")) == "must not be empty"
        assert str(StringValidator().is_empty().validate("a")) == "must be empty"
        assert StringValidator().has_length(3).validate("abc") is None
        assert StringValidator().is_longer_than(3).validate("abc") is not None
        assert StringValidator().is_shorter_than(3).validate("ab") is None

    def test_length_where(self):
        """Test an int validator over the string length."""
        validator = StringValidator().has_length_where(length().is_in_range(3, 6))

        assert validator.validate("abc") is None
        assert str(validator.validate("ab")) == "number must be in the range [3, 6); got 2"
        assert validator.validate("abcdef") is not None

    def test_collect_all_mixes_length_and_predicates(self, collect_all):
        """Test collect-all reports length and predicate failures together."""
        validator = StringValidator().is_longer_than(5).matches(patterns.ALPHA).is_shorter_than(3)
        err = validator.validate("abc1", collect_all)

        assert isinstance(err, ValidationErrors)
        assert len(err.validation_errors()) == 3

    def test_modes_agree(self, fail_fast, collect_all):
        """Test fail-fast and collect-all agree on pass or fail."""
        validator = StringValidator().is_not_empty().matches(patterns.ALPHA)

        for value in ("", "abc", "ab1"):
            assert (validator.validate(value, fail_fast) is None) == (
                validator.validate(value, collect_all) is None
            )

    def test_type_name(self):
        """Test the type tag."""
        assert StringValidator().type_name == "str"
