"""Validator combinators."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from .base import Validator
from .exceptions import ContractError, EnsureError, ValidationError, ValidationErrors
from .options import AnyOptions, ValidationOptions, resolve_options

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnyValidator(Validator[T]):
    """Passes when at least one of several alternative validators passes.

    Validators are tried in order and the first success short-circuits the
    rest. When all fail, the error reported depends on ``AnyOptions``:

    - Fail-fast: the error of the first pass-through validator (lowest index)
      that failed, else the default error message.
    - Collect-all: every error from the pass-through validators in one
      ``ValidationErrors``, else the default error message.

    Example:
        ```python
        # Skip the detailed checks when the record is disabled
        AnyValidator(
            RecordValidator(Job).has_fields({"enabled": BoolValidator().is_false()}),
            RecordValidator(Job).has_fields({"name": StringValidator().is_not_empty()}),
        ).with_options(pass_through_errors_from=[1])
        ```

    Raises:
        ContractError: If no validators are given or their types differ
    """

    def __init__(self, *validators: Validator[T], any_options: AnyOptions | None = None):
        if not validators:
            raise ContractError("AnyValidator requires at least one validator")
        type_names = {v.type_name for v in validators}
        if len(type_names) > 1:
            raise ContractError(
                f"AnyValidator validators must share one type; got {', '.join(sorted(type_names))}",
                context={"type_names": sorted(type_names)},
            )
        self._validators: tuple[Validator[T], ...] = tuple(validators)
        self._type_name = validators[0].type_name
        self._options = any_options or AnyOptions()
        logger.debug(f"Created AnyValidator over {len(validators)} {self._type_name} validators")

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def any_options(self) -> AnyOptions:
        return self._options

    def accepts(self, value: Any) -> bool:
        return self._validators[0].accepts(value)

    def with_error(self, message: str) -> AnyValidator[T]:
        """Set the default error message returned when every validator fails."""
        self._options = self._options.with_default_error(message)
        return self

    def with_options(
        self,
        default_error: str | None = None,
        pass_through_errors_from: Iterable[int] = (),
    ) -> AnyValidator[T]:
        """Update the error reporting policy.

        Args:
            default_error: Message returned when no pass-through error applies
            pass_through_errors_from: Indices of validators whose errors
                are returned instead of the default message

        Returns:
            Self for chaining
        """
        if default_error is not None:
            self._options = self._options.with_default_error(default_error)
        self._options = self._options.with_pass_through(pass_through_errors_from)
        return self

    def validate(self, value: T, options: ValidationOptions | None = None) -> EnsureError | None:
        opts = resolve_options(options)
        failures: dict[int, EnsureError] = {}

        for index, validator in enumerate(self._validators):
            err = validator.validate(value, opts)
            if err is None:
                return None
            failures[index] = err

        passed_through = [
            failures[index]
            for index in sorted(self._options.pass_through)
            if index in failures
        ]

        if not opts.collect_all_errors:
            if passed_through:
                return passed_through[0]
            return ValidationError(self._options.default_error)

        errors = ValidationErrors(*passed_through)
        if errors.has_errors():
            return errors
        return ValidationError(self._options.default_error)


__all__ = ["AnyValidator"]
