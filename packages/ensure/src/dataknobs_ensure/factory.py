"""Factory for building validators from configuration."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .base import Validator
from .combinators import AnyValidator
from .containers import ArrayValidator, MapValidator
from .exceptions import ContractError
from .nullable import optional, required
from .patterns import NAMED_PATTERNS
from .records import RecordValidator
from .scalars import BoolValidator, NumberValidator
from .strings import StringValidator

logger = logging.getLogger(__name__)

_KIND_ALIASES = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "array": "list",
    "map": "dict",
    "struct": "record",
}

_SCALAR_TYPES: dict[str, type] = {"str": str, "int": int, "float": float, "bool": bool}

# check name -> (validator method, parameter keys)
_STRING_CHECKS: dict[str, tuple[str, list[str]]] = {
    "equals": ("equals", ["value"]),
    "not_equals": ("does_not_equal", ["value"]),
    "starts_with": ("starts_with", ["value"]),
    "not_starts_with": ("does_not_start_with", ["value"]),
    "ends_with": ("ends_with", ["value"]),
    "not_ends_with": ("does_not_end_with", ["value"]),
    "contains": ("contains", ["value"]),
    "not_contains": ("does_not_contain", ["value"]),
    "one_of": ("is_one_of", ["values"]),
    "not_one_of": ("is_not_one_of", ["values"]),
    "pattern": ("matches", ["pattern"]),
    "empty": ("is_empty", []),
    "not_empty": ("is_not_empty", []),
    "length": ("has_length", ["length"]),
    "longer_than": ("is_longer_than", ["length"]),
    "shorter_than": ("is_shorter_than", ["length"]),
    "length_where": ("has_length_where", ["length_validator"]),
}

_NUMBER_CHECKS: dict[str, tuple[str, list[str]]] = {
    "range": ("is_in_range", ["min", "max"]),
    "equals": ("equals", ["value"]),
    "not_equals": ("does_not_equal", ["value"]),
    "less_than": ("is_less_than", ["value"]),
    "less_or_equal": ("is_less_than_or_equal_to", ["value"]),
    "greater_than": ("is_greater_than", ["value"]),
    "greater_or_equal": ("is_greater_than_or_equal_to", ["value"]),
    "even": ("is_even", []),
    "odd": ("is_odd", []),
    "positive": ("is_positive", []),
    "negative": ("is_negative", []),
    "zero": ("is_zero", []),
    "not_zero": ("is_not_zero", []),
    "one_of": ("is_one_of", ["values"]),
    "not_one_of": ("is_not_one_of", ["values"]),
}

_BOOL_CHECKS: dict[str, tuple[str, list[str]]] = {
    "true": ("is_true", []),
    "false": ("is_false", []),
}

_CONTAINER_CHECKS: dict[str, tuple[str, list[str]]] = {
    "empty": ("is_empty", []),
    "not_empty": ("is_not_empty", []),
    "count": ("has_count", ["count"]),
    "more_than": ("has_more_than", ["count"]),
    "fewer_than": ("has_fewer_than", ["count"]),
    "length_where": ("has_length_where", ["length_validator"]),
}

_ARRAY_CHECKS: dict[str, tuple[str, list[str]]] = {
    **_CONTAINER_CHECKS,
    "contains": ("contains", ["value"]),
    "not_contains": ("does_not_contain", ["value"]),
    "only": ("contains_only", ["values"]),
    "no_duplicates": ("contains_no_duplicates", []),
}

_CHECK_TABLES: dict[str, dict[str, tuple[str, list[str]]]] = {
    "str": _STRING_CHECKS,
    "int": _NUMBER_CHECKS,
    "float": _NUMBER_CHECKS,
    "bool": _BOOL_CHECKS,
    "list": _ARRAY_CHECKS,
    "dict": _CONTAINER_CHECKS,
}


def _kind(config: dict[str, Any]) -> str:
    kind = str(config.get("type", "")).lower()
    return _KIND_ALIASES.get(kind, kind)


def _sub_config(config: dict[str, Any], key: str, kind: str) -> dict[str, Any]:
    sub = config.get(key)
    if not isinstance(sub, dict):
        raise ContractError(
            f"{kind} validator configuration requires a '{key}' mapping",
            context={"kind": kind, "key": key},
        )
    return sub


def _indices(values: Any) -> list[int]:
    """Normalize pass-through indices, accepting ints or digit strings."""
    if values is None:
        return []
    if isinstance(values, (str, int)):
        values = [values]
    indices = []
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ContractError(
                f"pass_through indices must be integers; got {value!r}",
                context={"pass_through": repr(values)},
            )
        try:
            indices.append(int(value))
        except ValueError as e:
            raise ContractError(
                f"pass_through indices must be integers; got {value!r}",
                context={"pass_through": repr(values)},
            ) from e
    return indices


def _load_class(class_path: str) -> type:
    """Load a class from a dotted module path (e.g. ``"myapp.models.User"``)."""
    if not isinstance(class_path, str) or "." not in class_path:
        raise ContractError(f"Invalid class path: {class_path}", context={"class": class_path})

    module_path, class_name = class_path.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ContractError(
            f"Failed to import {class_path}: {e}", context={"class": class_path}
        ) from e

    if not hasattr(module, class_name):
        raise ContractError(
            f"Class {class_name} not found in {module_path}", context={"class": class_path}
        )
    cls: type = getattr(module, class_name)
    return cls


class ValidatorFactory:
    """Factory for creating validators from configuration.

    Configuration Options:
        type (str): Validator kind: str, int, float, bool, list, dict,
            record, any, optional or required
        checks (list): Check definitions, each with a ``type`` and its
            parameters (str, int, float, bool, list and dict only)
        items (dict): Item validator configuration (list)
        keys (dict): Key validator configuration (dict)
        values (dict): Value validator configuration (dict)
        class (str): Dotted path of the record class (record)
        fields (dict): Field name to validator configuration (record)
        getters (dict): Accessor name to validator configuration (record)
        display_names (dict): Field or accessor name to display name (record)
        validators (list): Alternative validator configurations (any)
        default_error (str): Message when every alternative fails (any)
        pass_through (list): Indices whose errors are passed through (any)
        validator (dict): Wrapped validator configuration (optional, required)

    Example Configuration:
        type: record
        class: myapp.models.Signup
        display_names:
          username: Username
        fields:
          username:
            type: str
            checks:
              - type: length_where
                checks:
                  - type: range
                    min: 3
                    max: 21
              - type: pattern
                named: alpha_num
          age:
            type: int
            checks:
              - type: range
                min: 13
                max: 121
          tags:
            type: list
            items:
              type: str
              checks:
                - type: not_empty

    Raises:
        ContractError: For unknown kinds or checks, checks the kind does not
            support, and missing parameters
    """

    def create(self, **config: Any) -> Validator[Any]:
        """Create a validator from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Validator instance
        """
        kind = _kind(config)
        logger.info(f"Creating {kind or 'untyped'} validator")

        if kind in _SCALAR_TYPES:
            validator = self._create_scalar(kind)
        elif kind == "list":
            validator = self._create_list(config)
        elif kind == "dict":
            validator = self._create_dict(config)
        elif kind == "record":
            validator = self._create_record(config)
        elif kind == "any":
            validator = self._create_any(config)
        elif kind in ("optional", "required"):
            inner = self.create(**_sub_config(config, "validator", kind))
            validator = optional(inner) if kind == "optional" else required(inner)
        else:
            raise ContractError(f"Unknown validator type: {kind}", context={"type": kind})

        self._apply_checks(validator, kind, config.get("checks") or [])
        return validator

    def python_type(self, config: dict[str, Any]) -> Any:
        """Resolve the declared Python type described by a configuration."""
        kind = _kind(config)
        if kind in _SCALAR_TYPES:
            return _SCALAR_TYPES[kind]
        if kind == "list":
            return list[self.python_type(_sub_config(config, "items", kind))]
        if kind == "dict":
            return dict[
                self.python_type(_sub_config(config, "keys", kind)),
                self.python_type(_sub_config(config, "values", kind)),
            ]
        if kind == "record":
            return _load_class(config.get("class", ""))
        if kind in ("optional", "required"):
            return Optional[self.python_type(_sub_config(config, "validator", kind))]
        if kind == "any":
            alternatives = config.get("validators") or []
            if not alternatives:
                raise ContractError("any validator configuration requires 'validators'")
            return self.python_type(alternatives[0])
        raise ContractError(f"Unknown validator type: {kind}", context={"type": kind})

    def _create_scalar(self, kind: str) -> Validator[Any]:
        if kind == "str":
            return StringValidator()
        if kind == "bool":
            return BoolValidator()
        return NumberValidator(_SCALAR_TYPES[kind])

    def _create_list(self, config: dict[str, Any]) -> Validator[Any]:
        items = _sub_config(config, "items", "list")
        return ArrayValidator(self.python_type(items)).each(self.create(**items))

    def _create_dict(self, config: dict[str, Any]) -> Validator[Any]:
        keys = _sub_config(config, "keys", "dict")
        values = _sub_config(config, "values", "dict")
        return (
            MapValidator(self.python_type(keys), self.python_type(values))
            .each_key(self.create(**keys))
            .each_value(self.create(**values))
        )

    def _create_record(self, config: dict[str, Any]) -> Validator[Any]:
        record = RecordValidator(_load_class(config.get("class", "")))
        display_names = config.get("display_names") or {}

        fields = config.get("fields") or {}
        if fields:
            record.has_fields(
                {name: self.create(**sub) for name, sub in fields.items()},
                {name: alias for name, alias in display_names.items() if name in fields},
            )

        getters = config.get("getters") or {}
        if getters:
            record.has_getters(
                {name: self.create(**sub) for name, sub in getters.items()},
                {name: alias for name, alias in display_names.items() if name in getters},
            )

        unused = set(display_names) - set(fields) - set(getters)
        if unused:
            raise ContractError(
                f"display names given for unknown bindings: {', '.join(sorted(unused))}",
                context={"unknown": sorted(unused)},
            )
        return record

    def _create_any(self, config: dict[str, Any]) -> Validator[Any]:
        alternatives = [self.create(**sub) for sub in config.get("validators") or []]
        validator = AnyValidator(*alternatives)
        return validator.with_options(
            default_error=config.get("default_error"),
            pass_through_errors_from=_indices(config.get("pass_through")),
        )

    def _apply_checks(
        self, validator: Validator[Any], kind: str, checks: list[dict[str, Any]]
    ) -> None:
        if not checks:
            return

        table = _CHECK_TABLES.get(kind)
        if table is None:
            raise ContractError(
                f"{kind} validators do not support checks", context={"type": kind}
            )

        for check_config in checks:
            check_type = str(check_config.get("type", "")).lower()
            if check_type not in table:
                raise ContractError(
                    f"Unknown check type for {kind} validator: {check_type}",
                    context={"type": kind, "check": check_type},
                )
            method_name, params = table[check_type]
            args = [self._check_arg(check_config, param, check_type) for param in params]
            getattr(validator, method_name)(*args)

    def _check_arg(self, check_config: dict[str, Any], param: str, check_type: str) -> Any:
        if param == "length_validator":
            return self.create(type="int", checks=check_config.get("checks") or [])

        if param == "pattern" and "named" in check_config:
            named = str(check_config["named"]).lower()
            if named not in NAMED_PATTERNS:
                raise ContractError(f"Unknown named pattern: {named}", context={"named": named})
            return NAMED_PATTERNS[named]

        if param not in check_config:
            raise ContractError(
                f"Check '{check_type}' requires parameter '{param}'",
                context={"check": check_type, "param": param},
            )
        return check_config[param]


def load_validator(path: str | Path) -> Validator[Any]:
    """Build a validator from a YAML configuration file.

    Args:
        path: Path to a YAML file containing one validator configuration

    Returns:
        Validator instance

    Raises:
        ContractError: If the file does not contain a mapping or the
            configuration is invalid
    """
    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ContractError(
            f"Validator configuration in {path} must be a mapping", context={"path": str(path)}
        )
    logger.info(f"Loading validator from {path}")
    return validator_factory.create(**config)


# Singleton instance for registration
validator_factory = ValidatorFactory()


__all__ = ["ValidatorFactory", "load_validator", "validator_factory"]
