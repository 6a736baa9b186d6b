"""Exception hierarchy for dataknobs_ensure.

Validators never raise for bad input. Evaluation returns ``None`` on success
or one of the exception instances defined here on failure, so that callers
can inspect, aggregate, or raise them as they see fit. Only construction-time
contract violations are raised (``ContractError``).

The hierarchy distinguishes:
- ``ValidationError``: a single violated constraint; safe to show to users
- ``TypeMismatchError``: the value has the wrong runtime type for the
  validator; an internal wiring problem that should not be shown verbatim
- ``ValidationErrors``: a flat aggregate of both kinds, used when collecting
  every failure
- ``ContractError``: a validator was built incorrectly (raised, not returned)

Example:
    ```python
    from dataknobs_ensure import StringValidator, options

    err = StringValidator().is_not_empty().validate("")
    if err is not None:
        print(err)
        # 'must not be empty'

    errs = StringValidator().is_not_empty().matches("^a").validate(
        "", options(collect_all_errors=True)
    )
    errs.validation_errors()
    # [ValidationError('must not be empty'), ValidationError(...)]
    ```
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Dict


class EnsureError(Exception):
    """Base exception for all dataknobs_ensure errors.

    Attributes:
        context: Dictionary containing contextual information about the error

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, etc.)
    """

    def __init__(self, message: str, context: Dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(EnsureError):
    """A single failed validation check.

    These are generally safe to return to the user so they can correct
    their input(s).

    Example:
        ```python
        ValidationError("Name: must not be empty", context={"field": "Name"})
        ```
    """

    pass


class TypeMismatchError(EnsureError):
    """The type expected by a validator does not match the value passed to it.

    This indicates a programming error in how a validator tree was wired to
    the data and should generally not be passed back to the user.
    """

    @classmethod
    def from_types(cls, want: str, got: str) -> TypeMismatchError:
        """Create an error from the wanted and actual type tags.

        Args:
            want: Type tag the validator expects
            got: Type tag of the value received

        Returns:
            TypeMismatchError describing the mismatch
        """
        return cls(f'expected "{want}"; got "{got}"', context={"expected": want, "actual": got})


class ContractError(EnsureError):
    """Raised when a validator is constructed incorrectly.

    Contract violations are programmer errors: binding a validator to a
    field of a different type, an accessor that takes arguments, a range
    whose max is below its min, an invalid regular expression, or an
    invalid factory configuration. They abort construction immediately.
    """

    pass


class ValidationErrors(EnsureError):
    """Flat aggregate of type mismatches and validation errors.

    Appending another ``ValidationErrors`` merges its contents instead of
    nesting it, so arbitrarily deep validator trees report a single flat
    list of problems.
    """

    def __init__(self, *errors: BaseException | str | None):
        super().__init__("validation errors")
        self._type_errors: list[TypeMismatchError] = []
        self._validation_errors: list[ValidationError] = []
        for err in errors:
            self.append(err)

    def append(self, err: BaseException | str | None) -> None:
        """Add an error, sorting it into the matching list.

        Args:
            err: Error to add. ``None`` is ignored, aggregates are merged,
                type mismatches are kept apart, and anything else is
                stored as a ``ValidationError``.
        """
        if err is None:
            return
        if isinstance(err, ValidationErrors):
            self.extend(err)
        elif isinstance(err, TypeMismatchError):
            self._type_errors.append(err)
        elif isinstance(err, ValidationError):
            self._validation_errors.append(err)
        else:
            self._validation_errors.append(ValidationError(str(err)))

    def extend(self, other: ValidationErrors | None) -> None:
        """Merge the contents of another aggregate into this one."""
        if other is None:
            return
        self._type_errors.extend(other._type_errors)
        self._validation_errors.extend(other._validation_errors)

    def has_errors(self) -> bool:
        return self.has_type_errors() or self.has_validation_errors()

    def has_type_errors(self) -> bool:
        return len(self._type_errors) > 0

    def type_errors(self) -> list[TypeMismatchError]:
        return list(self._type_errors)

    def has_validation_errors(self) -> bool:
        return len(self._validation_errors) > 0

    def validation_errors(self) -> list[ValidationError]:
        return list(self._validation_errors)

    def __len__(self) -> int:
        return len(self._type_errors) + len(self._validation_errors)

    def __iter__(self) -> Iterator[EnsureError]:
        yield from self._validation_errors
        yield from self._type_errors

    def __str__(self) -> str:
        if self._validation_errors:
            return str(self._validation_errors[0])
        if self._type_errors:
            # only the count; type errors describe internal shapes
            count = len(self._type_errors)
            return f"encountered {count} type error{'s' if count != 1 else ''}"
        return "there were no validation errors"

    def __repr__(self) -> str:
        return (
            f"ValidationErrors(validation_errors={len(self._validation_errors)}, "
            f"type_errors={len(self._type_errors)})"
        )


def as_validation_errors(err: BaseException | None) -> ValidationErrors | None:
    """Find a ``ValidationErrors`` in an error or its exception chain.

    Useful for callers that receive errors through a generic channel, for
    example after ``raise SomeError(...) from errs``.

    Args:
        err: Any caught exception, or None

    Returns:
        The aggregate if ``err`` is one or wraps one, otherwise None
    """
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, ValidationErrors):
            return err
        seen.add(id(err))
        err = err.__cause__ or err.__context__
    return None


__all__ = [
    "EnsureError",
    "ValidationError",
    "TypeMismatchError",
    "ContractError",
    "ValidationErrors",
    "as_validation_errors",
]
