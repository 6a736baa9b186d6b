"""Record validator: validates a class instance field by field.

A record is any user-defined class with annotated attributes: dataclasses,
``NamedTuple`` classes, attrs classes or plain annotated classes. Each
binding is checked when it is registered, so a validator bound to the wrong
field type fails while the validator is being built, never during
validation.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

from .base import CheckedValidator, Validator
from .exceptions import (
    ContractError,
    EnsureError,
    TypeMismatchError,
    ValidationError,
    ValidationErrors,
)
from .nullable import REQUIRED_VALUE_MISSING
from .options import ValidationOptions, resolve_options
from .type_tags import type_name

logger = logging.getLogger(__name__)

R = TypeVar("R")

_MISSING = object()


@dataclass(frozen=True)
class BoundField:
    """A record field and the validator bound to it."""

    name: str
    display_name: str
    validator: Validator[Any]


@dataclass(frozen=True)
class BoundGetter:
    """A record accessor (property or no-argument method) and its validator.

    Properties are read from the instance; methods are called with the
    instance as their only argument.
    """

    name: str
    display_name: str
    validator: Validator[Any]
    func: Callable[[Any], Any]
    is_property: bool

    def read(self, record: Any) -> Any:
        return self.func(record)


def qualify(display_name: str, err: EnsureError) -> EnsureError:
    """Prefix an error message with the name of the field that produced it.

    Aggregates are qualified member by member so they stay flat. Type
    mismatches remain ``TypeMismatchError``.
    """
    if isinstance(err, ValidationErrors):
        qualified = ValidationErrors()
        for member in err:
            qualified.append(qualify(display_name, member))
        return qualified

    context = dict(getattr(err, "context", {}))
    context["path"] = [display_name, *context.get("path", [])]
    message = f"{display_name}: {err}"
    if isinstance(err, TypeMismatchError):
        return TypeMismatchError(message, context=context)
    return ValidationError(message, context=context)


def _resolve_hints(target: Any, describe: str) -> dict[str, Any]:
    try:
        return get_type_hints(target)
    except (NameError, TypeError) as e:
        raise ContractError(
            f"cannot resolve type annotations of {describe}: {e}",
            context={"target": describe},
        ) from e


def _display_names(
    validators: Mapping[str, Validator[Any]],
    display_names: Mapping[str, str] | None,
    kind: str,
) -> dict[str, str]:
    aliases = dict(display_names or {})
    for name in aliases:
        if name not in validators:
            raise ContractError(
                f'cannot set display name for {kind} "{name}"; '
                f"{kind} is not in list of validators",
                context={kind: name},
            )
    return aliases


class RecordValidator(CheckedValidator[R]):
    """Validator for instances of a record class.

    Evaluation runs the record's own checks first, then the field
    validators, then the getter validators, each in registration order.
    Errors are reported as ``"<display name>: <message>"``.

    Example:
        ```python
        @dataclass
        class User:
            name: str
            age: int

            @property
            def initials(self) -> str:
                return self.name[:1]

        users = RecordValidator(User).has_fields(
            {
                "name": StringValidator().is_not_empty(),
                "age": NumberValidator(int).is_in_range(0, 150),
            },
            display_names={"name": "Name"},
        ).has_getters({"initials": StringValidator().matches(patterns.ALPHA)})

        users.validate(User(name="", age=30))
        # ValidationError('Name: must not be empty')
        ```

    Args:
        record_type: The record class to validate

    Raises:
        ContractError: If ``record_type`` is not a user-defined class or its
            annotations cannot be resolved
    """

    def __init__(self, record_type: type):
        if not inspect.isclass(record_type) or record_type.__module__ == "builtins":
            raise ContractError(
                f"RecordValidator type must be a record class; got {record_type!r}",
                context={"record_type": repr(record_type)},
            )
        super().__init__(record_type)
        self.record_type = record_type
        self._hints = _resolve_hints(record_type, self.type_name)
        self._fields: list[BoundField] = []
        self._getters: list[BoundGetter] = []

    @property
    def fields(self) -> list[BoundField]:
        return list(self._fields)

    @property
    def getters(self) -> list[BoundGetter]:
        return list(self._getters)

    def has_fields(
        self,
        validators: Mapping[str, Validator[Any]],
        display_names: Mapping[str, str] | None = None,
    ) -> RecordValidator[R]:
        """Bind validators to record fields.

        Args:
            validators: Field name to validator
            display_names: Optional field name to human-readable name, used
                in error messages (e.g. ``{"dob": "Date of Birth"}``)

        Returns:
            Self for chaining

        Raises:
            ContractError: If a field does not exist, its declared type does
                not match the validator's type, or a display name is given
                for a field without a validator
        """
        aliases = _display_names(validators, display_names, "field")

        for name, validator in validators.items():
            if name not in self._hints:
                raise ContractError(
                    f"field {name} does not exist in record {self.type_name}",
                    context={"field": name, "record": self.type_name},
                )

            declared = type_name(self._hints[name])
            if declared != validator.type_name:
                raise ContractError(
                    f"field {name} is type [{declared}] but validator expects "
                    f"[{validator.type_name}]",
                    context={"field": name, "expected": declared, "actual": validator.type_name},
                )

            self._fields.append(BoundField(name, aliases.get(name, name), validator))
            logger.debug(f"Bound {validator.type_name} validator to {self.type_name}.{name}")

        return self

    def has_getters(
        self,
        validators: Mapping[str, Validator[Any]],
        display_names: Mapping[str, str] | None = None,
    ) -> RecordValidator[R]:
        """Bind validators to properties or no-argument methods.

        Args:
            validators: Property or method name to validator
            display_names: Optional name to human-readable name mapping

        Returns:
            Self for chaining

        Raises:
            ContractError: If the accessor does not exist, takes arguments
                besides ``self``, has no return annotation, returns a tuple,
                or returns a type that does not match the validator's type
        """
        aliases = _display_names(validators, display_names, "method")

        for name, validator in validators.items():
            getter = self._resolve_getter(name, validator, aliases.get(name, name))
            self._getters.append(getter)
            logger.debug(f"Bound {validator.type_name} validator to {self.type_name}.{name}()")

        return self

    def _resolve_getter(
        self, name: str, validator: Validator[Any], display_name: str
    ) -> BoundGetter:
        attr = inspect.getattr_static(self.record_type, name, None)

        if isinstance(attr, property) and attr.fget is not None:
            func, is_property = attr.fget, True
        elif inspect.isfunction(attr):
            func, is_property = attr, False
        else:
            raise ContractError(
                f"method {name}() does not exist in record {self.type_name}",
                context={"method": name, "record": self.type_name},
            )

        args = list(inspect.signature(func).parameters.values())[1:]
        if args:
            raise ContractError(
                f"method {name}() has {len(args)} args but validator expects none "
                f"besides the receiver",
                context={"method": name},
            )

        hints = _resolve_hints(func, f"{self.type_name}.{name}")
        if "return" not in hints:
            raise ContractError(
                f"method {name}() has no return annotation", context={"method": name}
            )

        returns = hints["return"]
        if get_origin(returns) is tuple:
            raise ContractError(
                f"method {name}() has {len(get_args(returns))} return values "
                f"but validator expects 1",
                context={"method": name},
            )

        declared = type_name(returns)
        if declared != validator.type_name:
            raise ContractError(
                f"return value for method {name}() is type [{declared}] but validator "
                f"expects [{validator.type_name}]",
                context={"method": name, "expected": declared, "actual": validator.type_name},
            )

        return BoundGetter(name, display_name, validator, func, is_property)

    def _validate_field(
        self, field: BoundField, record: Any, opts: ValidationOptions
    ) -> EnsureError | None:
        current = getattr(record, field.name, _MISSING)
        if current is _MISSING:
            # never assigned on the instance; absent optional fields read as None
            if field.validator.accepts(None):
                return field.validator.validate_untyped(None, opts)
            return ValidationError(REQUIRED_VALUE_MISSING, context={"field": field.name})
        return field.validator.validate_untyped(current, opts)

    def validate(self, value: R, options: ValidationOptions | None = None) -> EnsureError | None:
        opts = resolve_options(options)
        errors = ValidationErrors()

        err = self._checks.evaluate(value, opts)
        if err is not None:
            if not opts.collect_all_errors:
                return err
            errors.append(err)

        for field in self._fields:
            err = self._validate_field(field, value, opts)
            if err is not None:
                err = qualify(field.display_name, err)
                if not opts.collect_all_errors:
                    return err
                errors.append(err)

        for getter in self._getters:
            err = getter.validator.validate_untyped(getter.read(value), opts)
            if err is not None:
                err = qualify(getter.display_name, err)
                if not opts.collect_all_errors:
                    return err
                errors.append(err)

        return errors if errors.has_errors() else None


__all__ = ["BoundField", "BoundGetter", "RecordValidator", "qualify"]
