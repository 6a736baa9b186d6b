"""Composable, type-aware validation for Python values.

This package provides:
- Chainable validators for strings, numbers, booleans, lists, dicts and
  record classes
- Fail-fast or collect-all evaluation through ``ValidationOptions``
- Flat error aggregation that keeps type mismatches apart from
  user-facing validation errors
- "Any of" combinators with configurable error pass-through
- Validators built from dict or YAML configuration

Validators return ``None`` on success and an error instance on failure.
Only incorrectly built validators raise (``ContractError``).
"""

from . import patterns
from .base import CheckedValidator, Validator
from .checks import CheckList, IterationChecks, LengthChecks
from .combinators import AnyValidator
from .containers import ArrayValidator, MapValidator
from .exceptions import (
    ContractError,
    EnsureError,
    TypeMismatchError,
    ValidationError,
    ValidationErrors,
    as_validation_errors,
)
from .factory import ValidatorFactory, load_validator, validator_factory
from .nullable import NullableValidator, optional, required
from .options import AnyOptions, ValidationOptions, options
from .records import RecordValidator
from .scalars import BoolValidator, NumberValidator, length
from .strings import StringValidator
from .type_tags import type_name

__version__ = "0.1.0"

__all__ = [
    # Errors
    "EnsureError",
    "ValidationError",
    "TypeMismatchError",
    "ContractError",
    "ValidationErrors",
    "as_validation_errors",
    # Options
    "ValidationOptions",
    "AnyOptions",
    "options",
    # Check lists
    "CheckList",
    "LengthChecks",
    "IterationChecks",
    # Validators
    "Validator",
    "CheckedValidator",
    "StringValidator",
    "NumberValidator",
    "BoolValidator",
    "ArrayValidator",
    "MapValidator",
    "RecordValidator",
    "NullableValidator",
    "AnyValidator",
    "required",
    "optional",
    "length",
    "patterns",
    "type_name",
    # Factories
    "ValidatorFactory",
    "validator_factory",
    "load_validator",
]
