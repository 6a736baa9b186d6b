"""Tests for validation options."""

import pytest

from dataknobs_ensure import AnyOptions, ContractError, ValidationOptions, options
from dataknobs_ensure.options import DEFAULT_ANY_ERROR, DEFAULT_OPTIONS, resolve_options


class TestValidationOptions:
    """Test ValidationOptions construction."""

    def test_defaults_fail_fast(self):
        """Test absent options default to fail-fast."""
        assert options().collect_all_errors is False
        assert resolve_options(None) is DEFAULT_OPTIONS
        assert resolve_options(None).collect_all_errors is False

    def test_options_helper(self):
        """Test the keyword helper."""
        opts = options(collect_all_errors=True)

        assert opts.collect_all_errors is True
        assert resolve_options(opts) is opts

    def test_from_dict(self):
        """Test building options from a mapping."""
        opts = ValidationOptions.from_dict({"collect_all_errors": True})

        assert opts.collect_all_errors is True
        assert opts.to_dict() == {"collect_all_errors": True}
        assert ValidationOptions.from_dict(None) is DEFAULT_OPTIONS

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, True),
            (False, False),
            ("true", True),
            ("false", False),
            ("No", False),
            ("1", True),
        ],
    )
    def test_from_dict_parses_booleans(self, value, expected):
        """Test boolean strings from environment-style config."""
        opts = ValidationOptions.from_dict({"collect_all_errors": value})

        assert opts.collect_all_errors is expected

    @pytest.mark.parametrize("value", ["maybe", 1, None, [True]])
    def test_from_dict_rejects_non_booleans(self, value):
        """Test values that are not booleans are rejected."""
        with pytest.raises(ContractError, match="must be a boolean"):
            ValidationOptions.from_dict({"collect_all_errors": value})

    def test_from_dict_rejects_unknown(self):
        """Test unknown option names are rejected."""
        with pytest.raises(ContractError, match="Unknown validation options"):
            ValidationOptions.from_dict({"collect_all": True})


class TestAnyOptions:
    """Test AnyOptions."""

    def test_defaults(self):
        """Test default message and empty pass-through set."""
        opts = AnyOptions()

        assert opts.default_error == DEFAULT_ANY_ERROR
        assert opts.default_error == "none of the required validators passed"
        assert not opts.pass_through_errors_from(0)

    def test_updates_return_copies(self):
        """Test with_* methods leave the original untouched."""
        opts = AnyOptions()
        updated = opts.with_default_error("pick one").with_pass_through([2, 0])

        assert updated.default_error == "pick one"
        assert updated.pass_through_errors_from(0)
        assert updated.pass_through_errors_from(2)
        assert not updated.pass_through_errors_from(1)
        assert opts.pass_through == frozenset()
