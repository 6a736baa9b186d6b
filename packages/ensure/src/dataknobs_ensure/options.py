"""Validation options.

``ValidationOptions`` is passed unchanged through every evaluation call in a
validator tree. ``AnyOptions`` configures how an ``AnyValidator`` reports
failures.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from .exceptions import ContractError

DEFAULT_ANY_ERROR = "none of the required validators passed"

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ContractError(
        f"Option {name} must be a boolean; got {value!r}", context={"option": name}
    )


@dataclass(frozen=True)
class ValidationOptions:
    """Settings for a single validation run.

    Attributes:
        collect_all_errors: If True, every check is evaluated and all failures
            are returned in a ``ValidationErrors``. If False (the default),
            evaluation stops at the first failure.
    """

    collect_all_errors: bool = False

    @classmethod
    def from_dict(cls, config: Mapping[str, Any] | None) -> ValidationOptions:
        """Create options from a configuration mapping.

        Args:
            config: Mapping of option names to values

        Returns:
            ValidationOptions instance

        Raises:
            ContractError: If the mapping contains unknown options or a value
                that is not a boolean
        """
        if not config:
            return DEFAULT_OPTIONS
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ContractError(
                f"Unknown validation options: {', '.join(sorted(unknown))}",
                context={"unknown": sorted(unknown)},
            )
        value = config.get("collect_all_errors", False)
        return cls(collect_all_errors=_as_bool("collect_all_errors", value))

    def to_dict(self) -> dict[str, Any]:
        return {"collect_all_errors": self.collect_all_errors}


DEFAULT_OPTIONS = ValidationOptions()


def options(collect_all_errors: bool = False) -> ValidationOptions:
    """Build a ``ValidationOptions`` value.

    Example:
        ```python
        validator.validate(value, options(collect_all_errors=True))
        ```
    """
    return ValidationOptions(collect_all_errors=collect_all_errors)


def resolve_options(opts: ValidationOptions | None) -> ValidationOptions:
    """Return ``opts`` or the fail-fast defaults when none were given."""
    return opts if opts is not None else DEFAULT_OPTIONS


@dataclass(frozen=True)
class AnyOptions:
    """Error reporting policy for an ``AnyValidator``.

    Attributes:
        default_error: Message returned when every validator fails and no
            pass-through validator produced an error
        pass_through: Indices of validators whose own errors are surfaced
            instead of the default message
    """

    default_error: str = DEFAULT_ANY_ERROR
    pass_through: frozenset[int] = field(default_factory=frozenset)

    def pass_through_errors_from(self, index: int) -> bool:
        """Whether errors from the validator at ``index`` are passed through."""
        return index in self.pass_through

    def with_default_error(self, message: str) -> AnyOptions:
        return replace(self, default_error=message)

    def with_pass_through(self, indices: Iterable[int]) -> AnyOptions:
        return replace(self, pass_through=self.pass_through | frozenset(indices))


__all__ = [
    "DEFAULT_ANY_ERROR",
    "DEFAULT_OPTIONS",
    "AnyOptions",
    "ValidationOptions",
    "options",
    "resolve_options",
]
