"""
Comparator extension: items as "operand1 <comparator> operand2".

Type contracts:
- ==, !=: deep structural equality (dicts, lists and tuples compare by content)
- >, >=, <, <=: both operands coerced to numbers first ("2" > "1" is True,
  None reads as 0); anything else that cannot be read as a number becomes
  NaN, so every ordering comparison involving it is False
"""

import inspect
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from numbers import Real
from typing import Any, Awaitable, Callable, Generic, NamedTuple, Optional, TypeVar, Union

from pydantic import BaseModel

from group_validator.errors import UnknownComparatorError
from group_validator.schemas import GroupResult, ItemResult
from group_validator.validator import (
    BooleanValidator,
    GroupAccessors,
    validate_groups,
    validate_groups_sync,
)

GroupT = TypeVar("GroupT")
ItemT = TypeVar("ItemT")


class Comparator(str, Enum):
    """Supported relational operators."""

    EQ = "=="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="


def coerce_comparator(comparator: Any) -> Comparator:
    """Normalize a comparator getter's return value ("==", Comparator.EQ, ...)."""
    if isinstance(comparator, Comparator):
        return comparator
    try:
        return Comparator(comparator)
    except ValueError:
        raise UnknownComparatorError(comparator) from None


Number = Union[int, float, Fraction]


def _parse_number(text: str) -> Number:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return math.nan


def to_number(value: Any) -> Number:
    """
    Coerce an operand to a number for ordering comparisons.

    Integers and fractions stay exact, so comparisons between them never
    lose precision or overflow.

    Args:
        value: Any operand value

    Returns:
        None -> 0, bool -> 0/1, int/Fraction/float unchanged, finite Decimal
        -> exact Fraction, numeric strings -> parsed int or float (blank
        string -> 0), anything else -> NaN
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Decimal):
        if value.is_finite():
            return Fraction(value)
        if value.is_nan():
            return math.nan
        return float(value)
    if isinstance(value, Real):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        return _parse_number(text)
    return math.nan


def is_equal_to(operand1: Any, operand2: Any) -> bool:
    return operand1 == operand2


def is_not_equal_to(operand1: Any, operand2: Any) -> bool:
    return not is_equal_to(operand1, operand2)


def is_greater_than(operand1: Any, operand2: Any) -> bool:
    return to_number(operand1) > to_number(operand2)


def is_greater_than_or_equal_to(operand1: Any, operand2: Any) -> bool:
    return to_number(operand1) >= to_number(operand2)


def is_less_than(operand1: Any, operand2: Any) -> bool:
    return to_number(operand1) < to_number(operand2)


def is_less_than_or_equal_to(operand1: Any, operand2: Any) -> bool:
    return to_number(operand1) <= to_number(operand2)


_COMPARISONS = {
    Comparator.EQ: is_equal_to,
    Comparator.NE: is_not_equal_to,
    Comparator.GT: is_greater_than,
    Comparator.GE: is_greater_than_or_equal_to,
    Comparator.LT: is_less_than,
    Comparator.LE: is_less_than_or_equal_to,
}


def validate_comparison(comparator: Any, operand1: Any, operand2: Any) -> bool:
    """
    Evaluate ``operand1 <comparator> operand2``.

    Raises:
        UnknownComparatorError: If comparator is not one of the six symbols
    """
    return _COMPARISONS[coerce_comparator(comparator)](operand1, operand2)


class OperandValues(NamedTuple):
    """The two operands of a comparison item."""

    operand1_value: Any
    operand2_value: Any


@dataclass(frozen=True)
class PropsGetterParams(Generic[ItemT]):
    """Arguments handed to a response_props_getter."""

    success: bool
    comparator: Comparator
    item: ItemT
    operand1: Any
    operand2: Any


OperandsGetter = Callable[[Any], Union[OperandValues, Awaitable[OperandValues]]]
PropsGetter = Callable[[PropsGetterParams], Optional[Mapping]]


@dataclass(frozen=True)
class ComparatorExtension(Generic[GroupT, ItemT]):
    """Configuration for validating groups whose items are comparisons.

    Attributes:
        group: Root group of the tree
        accessors: Operator/items/children accessors
        comparator_getter: Returns the item's comparator ("==", ">", ...)
        get_operand_values: Returns OperandValues for the item (a 2-tuple or a
            mapping with operand1_value/operand2_value keys also works). May
            return an awaitable for validate_comparisons.
        response_props_getter: Optional hook returning extra fields to attach
            to each ItemResult, based on the comparison outcome
    """

    group: GroupT
    accessors: GroupAccessors
    comparator_getter: Callable[[ItemT], Any]
    get_operand_values: OperandsGetter
    response_props_getter: Optional[PropsGetter] = None


def _unpack_operands(operands: Any) -> OperandValues:
    if isinstance(operands, Mapping):
        return OperandValues(operands["operand1_value"], operands["operand2_value"])
    operand1, operand2 = operands
    return OperandValues(operand1, operand2)


def _build_item_result(
    params: ComparatorExtension, comparator: Comparator, item: Any, operands: Any
) -> ItemResult:
    operand1, operand2 = _unpack_operands(operands)
    success = validate_comparison(comparator, operand1, operand2)

    props: dict = {}
    if params.response_props_getter is not None:
        extra = params.response_props_getter(
            PropsGetterParams(
                success=success,
                comparator=comparator,
                item=item,
                operand1=operand1,
                operand2=operand2,
            )
        )
        if isinstance(extra, BaseModel):
            extra = extra.model_dump()
        props.update(extra or {})

    # The comparison outcome always wins over a "valid" key from the hook
    props["valid"] = success
    return ItemResult.from_response(props)


def _to_validator(params: ComparatorExtension, validate_item) -> BooleanValidator:
    return BooleanValidator(
        group=params.group,
        accessors=params.accessors,
        validate_item=validate_item,
    )


async def validate_comparisons(params: ComparatorExtension) -> GroupResult:
    """
    Asynchronously validate a group tree of comparison items.

    Args:
        params: Group, accessors, comparator/operand getters and optional
            response props hook

    Returns:
        GroupResult tree; each ItemResult carries the hook's fields
    """

    async def validate_item(item: Any, group: Any) -> ItemResult:
        comparator = coerce_comparator(params.comparator_getter(item))
        operands = params.get_operand_values(item)
        if inspect.isawaitable(operands):
            operands = await operands
        return _build_item_result(params, comparator, item, operands)

    return await validate_groups(_to_validator(params, validate_item))


def validate_comparisons_sync(params: ComparatorExtension) -> GroupResult:
    """Synchronous counterpart of validate_comparisons.

    get_operand_values must return its operands directly.
    """

    def validate_item(item: Any, group: Any) -> ItemResult:
        comparator = coerce_comparator(params.comparator_getter(item))
        operands = params.get_operand_values(item)
        if inspect.isawaitable(operands):
            if inspect.iscoroutine(operands):
                operands.close()
            raise TypeError(
                "get_operand_values returned an awaitable; use validate_comparisons instead"
            )
        return _build_item_result(params, comparator, item, operands)

    return validate_groups_sync(_to_validator(params, validate_item))
