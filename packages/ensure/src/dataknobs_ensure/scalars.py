"""Number and boolean validators."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Union

from .base import CheckedValidator
from .exceptions import ContractError, ValidationError
from .options import ValidationOptions

Number = Union[int, float]


def is_even(value: Number) -> bool:
    """Parity check for ints and floats.

    A float is only even when it has no fractional component and the lowest
    bit of its integer value is unset. ``NaN`` and infinities are neither
    even nor odd.
    """
    if isinstance(value, float):
        if not value.is_integer():
            return False
        value = int(value)
    return (value & 1) == 0


def is_odd(value: Number) -> bool:
    """Parity check for ints and floats; see ``is_even``."""
    if isinstance(value, float):
        if not value.is_integer():
            return False
        value = int(value)
    return (value & 1) == 1


class NumberValidator(CheckedValidator[Number]):
    """Validator for ``int`` or ``float`` values.

    Example:
        ```python
        NumberValidator(int).is_in_range(1, 10).is_odd().validate(7)
        # None
        NumberValidator(float).is_positive().validate(-1.5)
        # ValidationError('number must be greater than 0; got -1.5')
        ```
    """

    def __init__(self, number_type: type = int):
        if number_type not in (int, float):
            raise ContractError(
                f"NumberValidator type must be int or float; got {number_type!r}",
                context={"number_type": repr(number_type)},
            )
        super().__init__(number_type)
        self._is_float = number_type is float

    def _fmt(self, value: Number) -> str:
        if self._is_float and isinstance(value, float):
            return f"{value:g}"
        return str(value)

    def _compare(
        self, ok: Callable[[Number], bool], message: str, target: Number
    ) -> NumberValidator:
        def compare(value: Number, _: ValidationOptions) -> ValidationError | None:
            if not ok(value):
                return ValidationError(
                    f"{message} {self._fmt(target)}; got {self._fmt(value)}"
                )
            return None

        self._checks.append(compare)
        return self

    def is_in_range(self, min: Number, max: Number) -> NumberValidator:
        """Require ``min <= value < max``.

        Raises:
            ContractError: If ``max`` is less than ``min``
        """
        if max < min:
            raise ContractError(
                "max cannot be less than min", context={"min": min, "max": max}
            )

        def in_range(value: Number, _: ValidationOptions) -> ValidationError | None:
            if (isinstance(value, float) and math.isnan(value)) or value < min or value >= max:
                return ValidationError(
                    f"number must be in the range [{self._fmt(min)}, {self._fmt(max)}); "
                    f"got {self._fmt(value)}"
                )
            return None

        self._checks.append(in_range)
        return self

    def equals(self, target: Number) -> NumberValidator:
        return self._compare(lambda v: v == target, "number must equal", target)

    def does_not_equal(self, target: Number) -> NumberValidator:
        return self._compare(lambda v: v != target, "number must not equal", target)

    def is_less_than(self, target: Number) -> NumberValidator:
        return self._compare(lambda v: v < target, "number must be less than", target)

    def is_less_than_or_equal_to(self, target: Number) -> NumberValidator:
        return self._compare(
            lambda v: v <= target, "number must be less than or equal to", target
        )

    def is_greater_than(self, target: Number) -> NumberValidator:
        return self._compare(lambda v: v > target, "number must be greater than", target)

    def is_greater_than_or_equal_to(self, target: Number) -> NumberValidator:
        return self._compare(
            lambda v: v >= target, "number must be greater than or equal to", target
        )

    def is_even(self) -> NumberValidator:
        def even(value: Number, _: ValidationOptions) -> ValidationError | None:
            if not is_even(value):
                return ValidationError(f"number must be even; got {self._fmt(value)}")
            return None

        self._checks.append(even)
        return self

    def is_odd(self) -> NumberValidator:
        def odd(value: Number, _: ValidationOptions) -> ValidationError | None:
            if not is_odd(value):
                return ValidationError(f"number must be odd; got {self._fmt(value)}")
            return None

        self._checks.append(odd)
        return self

    def is_positive(self) -> NumberValidator:
        return self.is_greater_than(0)

    def is_negative(self) -> NumberValidator:
        return self.is_less_than(0)

    def is_zero(self) -> NumberValidator:
        return self.equals(0)

    def is_not_zero(self) -> NumberValidator:
        return self.does_not_equal(0)

    def is_one_of(self, values: Iterable[Number]) -> NumberValidator:
        allowed = frozenset(values)
        return self.satisfies(
            lambda v: v in allowed, "number must be one of the permitted values"
        )

    def is_not_one_of(self, values: Iterable[Number]) -> NumberValidator:
        prohibited = frozenset(values)
        return self.satisfies(
            lambda v: v not in prohibited, "number must not be one of the prohibited values"
        )


def length() -> NumberValidator:
    """Shortcut for an ``int`` validator to use with ``has_length_where``."""
    return NumberValidator(int)


class BoolValidator(CheckedValidator[bool]):
    """Validator for ``bool`` values."""

    def __init__(self):
        super().__init__(bool)

    def is_true(self) -> BoolValidator:
        def true(value: bool, _: ValidationOptions) -> ValidationError | None:
            if value is not True:
                return ValidationError("expected true but got false")
            return None

        self._checks.append(true)
        return self

    def is_false(self) -> BoolValidator:
        def false(value: bool, _: ValidationOptions) -> ValidationError | None:
            if value is not False:
                return ValidationError("expected false but got true")
            return None

        self._checks.append(false)
        return self


__all__ = ["BoolValidator", "NumberValidator", "is_even", "is_odd", "length"]
