"""Required and optional wrappers for values that may be ``None``."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from .base import Validator
from .exceptions import EnsureError, ValidationError
from .options import ValidationOptions

T = TypeVar("T")

REQUIRED_VALUE_MISSING = "required value cannot be missing"


class NullableValidator(Validator[Any], Generic[T]):
    """Wraps a validator for values declared as ``X | None``.

    A present value is validated exactly as the wrapped validator would. A
    missing value (``None``) fails unless the wrapper is optional.

    Args:
        parent: Validator for present values
        optional: If True, ``None`` is accepted
    """

    def __init__(self, parent: Validator[T], optional: bool = False):
        self.parent = parent
        self.optional = optional
        self._type_name = f"Optional[{parent.type_name}]"

    @property
    def type_name(self) -> str:
        return self._type_name

    def accepts(self, value: Any) -> bool:
        return value is None or self.parent.accepts(value)

    def validate(
        self, value: T | None, options: ValidationOptions | None = None
    ) -> EnsureError | None:
        if value is None:
            return None if self.optional else ValidationError(REQUIRED_VALUE_MISSING)
        return self.parent.validate(value, options)

    def validate_untyped(
        self, value: Any, options: ValidationOptions | None = None
    ) -> EnsureError | None:
        if value is None:
            return self.validate(None, options)
        return self.parent.validate_untyped(value, options)


def required(parent: Validator[T]) -> NullableValidator[T]:
    """Wrap ``parent`` so that ``None`` is a validation failure."""
    return NullableValidator(parent, optional=False)


def optional(parent: Validator[T]) -> NullableValidator[T]:
    """Wrap ``parent`` so that ``None`` is accepted."""
    return NullableValidator(parent, optional=True)


__all__ = ["REQUIRED_VALUE_MISSING", "NullableValidator", "optional", "required"]
