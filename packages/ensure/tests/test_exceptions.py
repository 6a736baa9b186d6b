"""Tests for the error hierarchy and aggregation."""

import pytest

from dataknobs_ensure import (
    ContractError,
    EnsureError,
    TypeMismatchError,
    ValidationError,
    ValidationErrors,
    as_validation_errors,
)


class TestEnsureError:
    """Test the base error."""

    def test_message_and_context(self):
        """Test message and context are stored."""
        err = EnsureError("bad value", context={"field": "name"})

        assert str(err) == "bad value"
        assert err.message == "bad value"
        assert err.context == {"field": "name"}
        assert repr(err) == "EnsureError('bad value')"

    def test_context_defaults_to_empty(self):
        """Test context defaults to an empty dict."""
        assert ValidationError("x").context == {}

    def test_hierarchy(self):
        """Test all errors share the base class."""
        for cls in (ValidationError, TypeMismatchError, ContractError, ValidationErrors):
            assert issubclass(cls, EnsureError)

    def test_type_mismatch_from_types(self):
        """Test type mismatch message format."""
        err = TypeMismatchError.from_types("int", "str")

        assert str(err) == 'expected "int"; got "str"'
        assert err.context == {"expected": "int", "actual": "str"}


class TestValidationErrors:
    """Test the flat error aggregate."""

    def test_empty(self):
        """Test an empty aggregate."""
        errs = ValidationErrors()

        assert not errs.has_errors()
        assert len(errs) == 0
        assert str(errs) == "there were no validation errors"

    def test_append_dispatch(self):
        """Test errors are sorted into the matching list."""
        errs = ValidationErrors()
        errs.append(None)
        errs.append(TypeMismatchError.from_types("int", "str"))
        errs.append(ValidationError("must not be empty"))
        errs.append(ValueError("plain error"))
        errs.append("a message")

        assert errs.has_type_errors()
        assert len(errs.type_errors()) == 1
        assert [str(e) for e in errs.validation_errors()] == [
            "must not be empty",
            "plain error",
            "a message",
        ]
        assert all(isinstance(e, ValidationError) for e in errs.validation_errors())

    def test_flattening(self):
        """Test merging an aggregate never nests it."""
        inner = ValidationErrors(
            TypeMismatchError("type problem"),
            ValidationError("first"),
            ValidationError("second"),
        )
        outer = ValidationErrors(ValidationError("zeroth"))

        outer.append(inner)

        assert len(outer.type_errors()) == 1
        assert len(outer.validation_errors()) == 3
        assert not any(isinstance(e, ValidationErrors) for e in outer)

    def test_str_prefers_validation_errors(self):
        """Test the summary is the first validation error."""
        errs = ValidationErrors(TypeMismatchError("hidden"), ValidationError("shown"))

        assert str(errs) == "shown"

    def test_str_hides_type_details(self):
        """Test a type-only aggregate does not leak type names."""
        errs = ValidationErrors(TypeMismatchError.from_types("myapp.Secret", "str"))

        assert "type error" in str(errs)
        assert "myapp.Secret" not in str(errs)

    def test_iteration_order(self):
        """Test validation errors are yielded before type errors."""
        type_err = TypeMismatchError("t")
        val_err = ValidationError("v")
        errs = ValidationErrors(type_err, val_err)

        assert list(errs) == [val_err, type_err]


class TestAsValidationErrors:
    """Test unwrapping aggregates from generic errors."""

    def test_direct(self):
        """Test an aggregate is returned as is."""
        errs = ValidationErrors(ValidationError("x"))
        assert as_validation_errors(errs) is errs

    def test_chained(self):
        """Test an aggregate is found through the exception chain."""
        errs = ValidationErrors(ValidationError("x"))

        with pytest.raises(RuntimeError) as exc_info:
            try:
                raise errs
            except ValidationErrors as e:
                raise RuntimeError("request failed") from e

        assert as_validation_errors(exc_info.value) is errs

    def test_not_found(self):
        """Test None when no aggregate is present."""
        assert as_validation_errors(ValueError("x")) is None
        assert as_validation_errors(None) is None
