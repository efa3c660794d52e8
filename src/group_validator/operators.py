"""
Boolean operator semantics shared by evaluation and diagnosis.

Every function takes a sequence of results exposing a ``valid`` attribute
(ItemResult, GroupResult or anything shaped like them). Item and child
results are pooled together; order does not matter for the outcome.

- AND: every result is true (empty sequence is true)
- OR: at least one result is true (empty sequence is false)
- XOR: exactly one result is true (empty sequence is false)
"""

from typing import Any, Sequence

from group_validator.errors import UnknownOperatorError
from group_validator.schemas import BooleanOperator


def coerce_operator(operator: Any) -> BooleanOperator:
    """
    Normalize an operator getter's return value.

    Args:
        operator: A BooleanOperator member or its string value ("AND", "OR", "XOR")

    Returns:
        The matching BooleanOperator

    Raises:
        UnknownOperatorError: If the value is not one of the three operators
    """
    if isinstance(operator, BooleanOperator):
        return operator
    try:
        return BooleanOperator(operator)
    except ValueError:
        raise UnknownOperatorError(operator) from None


def count_valid(responses: Sequence[Any]) -> int:
    """Number of results that are currently true."""
    return sum(1 for res in responses if res.valid)


def validate_and_response(responses: Sequence[Any]) -> bool:
    return all(res.valid for res in responses)


def validate_or_response(responses: Sequence[Any]) -> bool:
    return count_valid(responses) >= 1


def validate_xor_response(responses: Sequence[Any]) -> bool:
    return count_valid(responses) == 1


_OPERATOR_FUNCTIONS = {
    BooleanOperator.AND: validate_and_response,
    BooleanOperator.OR: validate_or_response,
    BooleanOperator.XOR: validate_xor_response,
}


def validate_responses(operator: Any, responses: Sequence[Any]) -> bool:
    """
    Combine results under an operator.

    Args:
        operator: BooleanOperator (or its string value)
        responses: Pooled item and child results

    Returns:
        The group outcome

    Raises:
        UnknownOperatorError: If operator is outside AND/OR/XOR
    """
    return _OPERATOR_FUNCTIONS[coerce_operator(operator)](responses)
