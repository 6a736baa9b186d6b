"""String validator."""

from __future__ import annotations

import re
from collections.abc import Iterable
from re import Pattern as RegexPattern

from .base import CheckedValidator, Validator
from .checks import LengthChecks
from .exceptions import ContractError


class StringValidator(CheckedValidator[str]):
    """Validator for ``str`` values.

    Length constraints (``is_empty``, ``has_length``, ``is_longer_than``, ...)
    are grouped and evaluated together as a single check.

    Example:
        ```python
        from dataknobs_ensure import StringValidator, patterns

        username = StringValidator().is_longer_than(2).matches(patterns.ALPHA_NUM)
        username.validate("bob42")
        # None
        ```
    """

    def __init__(self):
        self._length: LengthChecks[str] = LengthChecks()
        super().__init__(str, self._length)

    def equals(self, same: str) -> StringValidator:
        return self.satisfies(lambda s: s == same, f'string must equal "{same}"')

    def does_not_equal(self, diff: str) -> StringValidator:
        return self.satisfies(lambda s: s != diff, f'string must not equal "{diff}"')

    def starts_with(self, prefix: str) -> StringValidator:
        return self.satisfies(
            lambda s: s.startswith(prefix), f'string must start with "{prefix}"'
        )

    def does_not_start_with(self, prefix: str) -> StringValidator:
        return self.satisfies(
            lambda s: not s.startswith(prefix), f'string must not start with "{prefix}"'
        )

    def ends_with(self, suffix: str) -> StringValidator:
        return self.satisfies(lambda s: s.endswith(suffix), f'string must end with "{suffix}"')

    def does_not_end_with(self, suffix: str) -> StringValidator:
        return self.satisfies(
            lambda s: not s.endswith(suffix), f'string must not end with "{suffix}"'
        )

    def contains(self, substr: str) -> StringValidator:
        return self.satisfies(lambda s: substr in s, f'string must contain "{substr}"')

    def does_not_contain(self, substr: str) -> StringValidator:
        return self.satisfies(lambda s: substr not in s, f'string must not contain "{substr}"')

    def is_one_of(self, values: Iterable[str]) -> StringValidator:
        allowed = frozenset(values)
        return self.satisfies(lambda s: s in allowed, "string must be one of the permitted values")

    def is_not_one_of(self, values: Iterable[str]) -> StringValidator:
        prohibited = frozenset(values)
        return self.satisfies(
            lambda s: s not in prohibited, "string must not be one of the prohibited values"
        )

    def matches(self, pattern: str | RegexPattern[str]) -> StringValidator:
        """Require the string to contain a match for a regular expression.

        Args:
            pattern: Regex pattern (string or compiled pattern); see
                ``dataknobs_ensure.patterns`` for common ones

        Raises:
            ContractError: If the pattern cannot be compiled
        """
        if isinstance(pattern, str):
            try:
                regex = re.compile(pattern)
            except re.error as e:
                raise ContractError(
                    f"could not compile regex: {e}", context={"pattern": pattern}
                ) from e
        else:
            regex = pattern
        return self.satisfies(
            lambda s: regex.search(s) is not None, "string does not match expected pattern"
        )

    def is_empty(self) -> StringValidator:
        self._length.add_is_empty()
        return self

    def is_not_empty(self) -> StringValidator:
        self._length.add_is_not_empty()
        return self

    def has_length(self, length: int) -> StringValidator:
        self._length.add_has_length(length)
        return self

    def is_longer_than(self, length: int) -> StringValidator:
        self._length.add_is_longer_than(length)
        return self

    def is_shorter_than(self, length: int) -> StringValidator:
        self._length.add_is_shorter_than(length)
        return self

    def has_length_where(self, validator: Validator[int]) -> StringValidator:
        """Validate the string length with an ``int`` validator.

        Example:
            ```python
            StringValidator().has_length_where(length().is_in_range(3, 21))
            ```
        """
        self._length.add_has_length_where(validator)
        return self


__all__ = ["StringValidator"]
