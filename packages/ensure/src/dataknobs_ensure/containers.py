"""List and dict validators."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from .base import CheckedValidator, Validator
from .checks import IterationChecks, mapping_pairs, sequence_pairs
from .exceptions import ContractError
from .type_tags import type_name

C = TypeVar("C", bound="_ContainerValidator")


def _require_type(role: str, expected: str, validator: Validator[Any]) -> None:
    if validator.type_name != expected:
        raise ContractError(
            f'container has {role} with type "{expected}", '
            f'got {role} validator with type "{validator.type_name}"',
            context={"expected": expected, "actual": validator.type_name},
        )


class _ContainerValidator(CheckedValidator[Any]):
    """Length constraints shared by list and dict validators."""

    _checks: IterationChecks[Any, Any, Any]

    def is_empty(self: C) -> C:
        self._checks.add_is_empty()
        return self

    def is_not_empty(self: C) -> C:
        self._checks.add_is_not_empty()
        return self

    def has_count(self: C, count: int) -> C:
        self._checks.add_has_length(count)
        return self

    def has_more_than(self: C, count: int) -> C:
        self._checks.add_is_longer_than(count)
        return self

    def has_fewer_than(self: C, count: int) -> C:
        self._checks.add_is_shorter_than(count)
        return self

    def has_length_where(self: C, validator: Validator[int]) -> C:
        self._checks.add_has_length_where(validator)
        return self


class ArrayValidator(_ContainerValidator):
    """Validator for ``list`` values with items of a declared type.

    Example:
        ```python
        tags = ArrayValidator(str).is_not_empty().each(StringValidator().is_shorter_than(16))
        tags.type_name
        # 'list[str]'
        ```
    """

    def __init__(self, item_type: Any):
        self._item_type_name = type_name(item_type)
        super().__init__(list[item_type], IterationChecks(sequence_pairs))

    def each(self, validator: Validator[Any]) -> ArrayValidator:
        """Validate every item with ``validator``.

        Raises:
            ContractError: If the validator's type does not match the item type
        """
        _require_type("items", self._item_type_name, validator)
        self._checks.add_value_validator(validator)
        return self

    def contains(self, item: Any) -> ArrayValidator:
        return self.satisfies(lambda items: item in items, f"array must contain {item!r}")

    def does_not_contain(self, item: Any) -> ArrayValidator:
        return self.satisfies(
            lambda items: item not in items, f"array must not contain {item!r}"
        )

    def contains_only(self, allowed: Iterable[Any]) -> ArrayValidator:
        """Require every item to be one of ``allowed``. Empty lists pass."""
        permitted = list(allowed)
        return self.satisfies(
            lambda items: all(item in permitted for item in items),
            "array must only contain permitted values",
        )

    def contains_no_duplicates(self) -> ArrayValidator:
        """Require items to be unique. Items must be hashable."""
        return self.satisfies(
            lambda items: len(set(items)) == len(items), "array must not contain duplicates"
        )


class MapValidator(_ContainerValidator):
    """Validator for ``dict`` values with declared key and value types."""

    def __init__(self, key_type: Any, value_type: Any):
        self._key_type_name = type_name(key_type)
        self._value_type_name = type_name(value_type)
        super().__init__(dict[key_type, value_type], IterationChecks(mapping_pairs))

    def each_key(self, validator: Validator[Any]) -> MapValidator:
        """Validate every key with ``validator``.

        Raises:
            ContractError: If the validator's type does not match the key type
        """
        _require_type("keys", self._key_type_name, validator)
        self._checks.add_key_validator(validator)
        return self

    def each_value(self, validator: Validator[Any]) -> MapValidator:
        """Validate every value with ``validator``.

        Raises:
            ContractError: If the validator's type does not match the value type
        """
        _require_type("values", self._value_type_name, validator)
        self._checks.add_value_validator(validator)
        return self


__all__ = ["ArrayValidator", "MapValidator"]
