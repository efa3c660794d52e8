"""Error taxonomy for group validation.

Predicate and accessor failures are never wrapped: they propagate to the
caller unchanged. The exceptions below signal contract violations, i.e. a
caller handed the engine something it cannot interpret.
"""

from typing import Any


class GroupValidatorError(Exception):
    """Base class for all contract violations raised by the engine."""


class UnknownOperatorError(GroupValidatorError, ValueError):
    """Raised when an operator getter returns something other than AND/OR/XOR."""

    def __init__(self, operator: Any):
        self.operator = operator
        super().__init__(
            f"Unknown boolean operator {operator!r} (must be one of AND, OR, XOR)"
        )


class UnknownComparatorError(GroupValidatorError, ValueError):
    """Raised when a comparator getter returns an unsupported symbol."""

    def __init__(self, comparator: Any):
        self.comparator = comparator
        super().__init__(
            f"Unknown comparator {comparator!r} (must be one of ==, !=, >, >=, <, <=)"
        )


class InvalidItemResultError(GroupValidatorError, TypeError):
    """Raised when a predicate returns a value that cannot become an ItemResult."""

    def __init__(self, value: Any, message: str):
        self.value = value
        self.message = message
        super().__init__(f"Invalid item result {value!r}: {message}")
