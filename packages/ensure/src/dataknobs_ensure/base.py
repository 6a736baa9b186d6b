"""Validator base classes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .checks import CheckList
from .exceptions import EnsureError, TypeMismatchError, ValidationError
from .options import ValidationOptions, resolve_options
from .type_tags import is_instance, type_name, type_name_of

logger = logging.getLogger(__name__)

T = TypeVar("T")
SelfV = TypeVar("SelfV", bound="CheckedValidator[Any]")

CheckFn = Callable[[Any], "Exception | str | None"]


class Validator(ABC, Generic[T]):
    """Interface shared by every validator.

    A validator is built once through chained calls and then only read, so
    a fully built validator can be reused across calls and threads.
    """

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Type tag of the values this validator accepts."""

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Whether ``value`` has the runtime type this validator expects."""

    @abstractmethod
    def validate(self, value: T, options: ValidationOptions | None = None) -> EnsureError | None:
        """Validate a value of the expected type.

        Args:
            value: Value to validate
            options: Validation options; fail-fast when omitted

        Returns:
            None on success, otherwise the error(s) found
        """

    def validate_untyped(
        self, value: Any, options: ValidationOptions | None = None
    ) -> EnsureError | None:
        """Validate a value of unknown type.

        Returns:
            A ``TypeMismatchError`` if the value has the wrong type, otherwise
            the result of ``validate``
        """
        if not self.accepts(value):
            return TypeMismatchError.from_types(self.type_name, type_name_of(value))
        return self.validate(value, options)

    def __call__(self, value: T, options: ValidationOptions | None = None) -> EnsureError | None:
        return self.validate(value, options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type_name})"


def as_error(result: Exception | str | None) -> EnsureError | None:
    """Normalize the return value of a user check function."""
    if result is None or isinstance(result, EnsureError):
        return result
    return ValidationError(str(result))


class CheckedValidator(Validator[T]):
    """Validator backed by a check list for a declared Python type."""

    def __init__(self, value_type: Any, checks: CheckList[T] | None = None):
        self._value_type = value_type
        self._type_name = type_name(value_type)
        self._checks: CheckList[T] = checks if checks is not None else CheckList()

    @property
    def type_name(self) -> str:
        return self._type_name

    def accepts(self, value: Any) -> bool:
        return is_instance(value, self._value_type)

    def validate(self, value: T, options: ValidationOptions | None = None) -> EnsureError | None:
        return self._checks.evaluate(value, resolve_options(options))

    def check(self: SelfV, fn: CheckFn) -> SelfV:
        """Add a custom check.

        Args:
            fn: Callable receiving the value and returning None on success,
                or an exception or message describing the failure

        Returns:
            Self for chaining
        """
        self._checks.append(lambda value, _: as_error(fn(value)))
        return self

    def satisfies(self: SelfV, predicate: Callable[[Any], bool], message: str) -> SelfV:
        """Add a boolean predicate check.

        Args:
            predicate: Callable returning True when the value is valid
            message: Error message used when the predicate returns False

        Returns:
            Self for chaining
        """

        def satisfies_predicate(value: Any, _: ValidationOptions) -> EnsureError | None:
            try:
                if predicate(value):
                    return None
            except Exception as e:
                logger.debug(f"Predicate for {self.type_name} raised: {e!s}")
                return ValidationError(f"{message} ({e!s})")
            return ValidationError(message)

        self._checks.append(satisfies_predicate)
        return self


__all__ = ["CheckedValidator", "Validator", "as_error"]
