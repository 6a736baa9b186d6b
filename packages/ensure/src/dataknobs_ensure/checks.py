"""Check lists: the evaluation engine shared by every validator.

A check is a callable ``(value, options) -> EnsureError | None``. A
``CheckList`` runs its checks in insertion order, either stopping at the
first failure or collecting every failure, depending on
``ValidationOptions.collect_all_errors``.

``LengthChecks`` and ``IterationChecks`` extend a check list for measurable
and iterable values. Each installs a single derived check into the parent
list the first time it is used, and afterwards only appends to its own
nested lists.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import ContractError, EnsureError, ValidationError, ValidationErrors
from .options import ValidationOptions

if TYPE_CHECKING:
    from .base import Validator

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

Check = Callable[[Any, ValidationOptions], "EnsureError | None"]
PairView = Callable[[Any], Iterable[tuple[Any, Any]]]


class CheckList(Generic[T]):
    """Ordered, append-only collection of checks for one value type."""

    def __init__(self, *checks: Check):
        self._checks: list[Check] = list(checks)

    def append(self, check: Check) -> None:
        self._checks.append(check)

    def __len__(self) -> int:
        return len(self._checks)

    def evaluate(self, value: T, options: ValidationOptions) -> EnsureError | None:
        """Run every check against a value.

        Args:
            value: Value to check
            options: Validation options; decides fail-fast or collect-all

        Returns:
            None if all checks pass. In fail-fast mode, the first error.
            In collect-all mode, a ``ValidationErrors`` with every error.
        """
        if options.collect_all_errors:
            errors = ValidationErrors()
            for check in self._checks:
                errors.append(check(value, options))
            return errors if errors.has_errors() else None

        for check in self._checks:
            err = check(value, options)
            if err is not None:
                return err
        return None


def _require_int_validator(validator: Validator[Any]) -> None:
    if validator.type_name != "int":
        raise ContractError(
            f'length validator must have type "int"; got "{validator.type_name}"',
            context={"type_name": validator.type_name},
        )


class LengthChecks(CheckList[T]):
    """Check list for values with a length (strings, lists, dicts).

    All length constraints share one slot in this list: the first call to
    ``add_length_check`` installs a check that evaluates the nested
    ``length_checks`` list against ``len(value)``.
    """

    def __init__(self, *checks: Check):
        super().__init__(*checks)
        self.length_checks: CheckList[int] = CheckList()

    def add_length_check(self, check: Check) -> None:
        if len(self.length_checks) == 0:
            length_checks = self.length_checks
            self.append(lambda value, opts: length_checks.evaluate(len(value), opts))
        self.length_checks.append(check)

    def add_is_empty(self) -> None:
        def is_empty(length: int, _: ValidationOptions) -> EnsureError | None:
            if length != 0:
                return ValidationError("must be empty")
            return None

        self.add_length_check(is_empty)

    def add_is_not_empty(self) -> None:
        def is_not_empty(length: int, _: ValidationOptions) -> EnsureError | None:
            if length == 0:
                return ValidationError("must not be empty")
            return None

        self.add_length_check(is_not_empty)

    def add_has_length(self, expected: int) -> None:
        def has_length(length: int, _: ValidationOptions) -> EnsureError | None:
            if length != expected:
                return ValidationError(f"length must equal {expected}; got {length}")
            return None

        self.add_length_check(has_length)

    def add_is_longer_than(self, bound: int) -> None:
        def is_longer_than(length: int, _: ValidationOptions) -> EnsureError | None:
            if length <= bound:
                return ValidationError(
                    f"must have a length greater than {bound}; got {length}"
                )
            return None

        self.add_length_check(is_longer_than)

    def add_is_shorter_than(self, bound: int) -> None:
        def is_shorter_than(length: int, _: ValidationOptions) -> EnsureError | None:
            if length >= bound:
                return ValidationError(f"must have a length less than {bound}; got {length}")
            return None

        self.add_length_check(is_shorter_than)

    def add_has_length_where(self, validator: Validator[int]) -> None:
        """Evaluate an ``int`` validator against the length.

        Raises:
            ContractError: If the validator does not validate ``int`` values
        """
        _require_int_validator(validator)
        self.add_length_check(lambda length, opts: validator.validate(length, opts))


def sequence_pairs(value: Sequence[Any]) -> Iterable[tuple[int, Any]]:
    """Pair view of a sequence: (index, item)."""
    return enumerate(value)


def mapping_pairs(value: Mapping[Any, Any]) -> Iterable[tuple[Any, Any]]:
    """Pair view of a mapping: (key, value)."""
    return value.items()


class IterationChecks(LengthChecks[T], Generic[T, K, V]):
    """Check list that also checks every key and value of a container.

    Args:
        to_pairs: Function returning the (key, value) pairs of a container,
            such as ``sequence_pairs`` or ``mapping_pairs``
    """

    def __init__(self, to_pairs: PairView):
        super().__init__()
        self.key_checks: CheckList[K] = CheckList()
        self.value_checks: CheckList[V] = CheckList()
        self._to_pairs = to_pairs
        self._iteration_check_added = False

    def _add_iteration_check(self) -> None:
        if self._iteration_check_added:
            return

        key_checks = self.key_checks
        value_checks = self.value_checks
        to_pairs = self._to_pairs

        def each_pair(container: Any, opts: ValidationOptions) -> EnsureError | None:
            if opts.collect_all_errors:
                errors = ValidationErrors()
                for key, item in to_pairs(container):
                    errors.append(key_checks.evaluate(key, opts))
                    errors.append(value_checks.evaluate(item, opts))
                return errors if errors.has_errors() else None

            for key, item in to_pairs(container):
                err = key_checks.evaluate(key, opts)
                if err is not None:
                    return err
                err = value_checks.evaluate(item, opts)
                if err is not None:
                    return err
            return None

        self.append(each_pair)
        self._iteration_check_added = True

    def add_key_check(self, check: Check) -> None:
        self._add_iteration_check()
        self.key_checks.append(check)

    def add_key_validator(self, validator: Validator[K]) -> None:
        self.add_key_check(lambda key, opts: validator.validate(key, opts))

    def add_value_check(self, check: Check) -> None:
        self._add_iteration_check()
        self.value_checks.append(check)

    def add_value_validator(self, validator: Validator[V]) -> None:
        self.add_value_check(lambda item, opts: validator.validate(item, opts))


__all__ = [
    "Check",
    "CheckList",
    "IterationChecks",
    "LengthChecks",
    "mapping_pairs",
    "sequence_pairs",
]
