"""
Group evaluation engine.

Walks a caller-defined group tree and evaluates it to a GroupResult tree.
Groups and items are opaque: the engine only reaches them through the
accessors in GroupAccessors and the validate_item predicate.

Two scheduling variants share the same algorithm:
- validate_groups: items and child groups of each node are gathered
  concurrently; predicates may be coroutines
- validate_groups_sync: strictly sequential, predicates must return directly

Neither variant short-circuits: every item and every child group is always
evaluated, even once the group outcome is already known.
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar, Union

from group_validator.diagnostics import merge_diagnostics
from group_validator.errors import InvalidItemResultError
from group_validator.operators import coerce_operator, validate_responses
from group_validator.schemas import DiagnosedGroupResult, GroupResult, ItemResult

logger = logging.getLogger(__name__)

GroupT = TypeVar("GroupT")
ItemT = TypeVar("ItemT")

ItemResponse = Union[ItemResult, Mapping, bool]
ItemPredicate = Callable[[Any, Any], Union[ItemResponse, Awaitable[ItemResponse]]]


@dataclass(frozen=True)
class GroupAccessors(Generic[GroupT, ItemT]):
    """How the engine reads a caller's group.

    Attributes:
        operator_getter: Returns the group's BooleanOperator (or "AND"/"OR"/"XOR")
        items_getter: Returns the group's items, in order
        child_group_getter: Returns the group's child groups, in order
    """

    operator_getter: Callable[[GroupT], Any]
    items_getter: Callable[[GroupT], Sequence[ItemT]]
    child_group_getter: Callable[[GroupT], Sequence[GroupT]]

    @classmethod
    def for_mappings(
        cls,
        operator_key: str = "operator",
        items_key: str = "items",
        children_key: str = "child_groups",
    ) -> "GroupAccessors":
        """Accessors for groups stored as plain dicts.

        A missing items or children key reads as an empty list; a missing
        operator key raises KeyError.
        """
        return cls(
            operator_getter=lambda group: group[operator_key],
            items_getter=lambda group: group.get(items_key, []),
            child_group_getter=lambda group: group.get(children_key, []),
        )


@dataclass(frozen=True)
class BooleanValidator(Generic[GroupT, ItemT]):
    """Everything needed to evaluate one group tree.

    Attributes:
        group: Root group of the tree
        accessors: Operator/items/children accessors
        validate_item: Predicate called as validate_item(item, group). Returns
            an ItemResult, a mapping with a boolean "valid" key, or a bool.
            May return an awaitable for validate_groups.
    """

    group: GroupT
    accessors: GroupAccessors
    validate_item: ItemPredicate

    def with_group(self, group: GroupT) -> "BooleanValidator":
        """Same accessors and predicate, rooted at another group."""
        return replace(self, group=group)


def _read_group(accessors: GroupAccessors, group: Any):
    operator = coerce_operator(accessors.operator_getter(group))
    items = list(accessors.items_getter(group))
    children = list(accessors.child_group_getter(group))
    return operator, items, children


def _build_result(operator, group, item_results, child_results) -> GroupResult:
    valid = validate_responses(operator, [*item_results, *child_results])
    logger.debug(
        f"{operator.value} group evaluated: {len(item_results)} item(s), "
        f"{len(child_results)} child group(s) -> valid={valid}"
    )
    return GroupResult(
        valid=valid,
        group=group,
        operator=operator,
        item_results=item_results,
        child_results=child_results,
    )


async def _evaluate_item(validate_item: ItemPredicate, item: Any, group: Any) -> ItemResult:
    try:
        response = validate_item(item, group)
        if inspect.isawaitable(response):
            response = await response
    except Exception as e:
        logger.debug(f"Item predicate failed for {item!r}: {e}")
        raise
    return ItemResult.from_response(response)


async def _validate_group(params: BooleanValidator) -> GroupResult:
    group = params.group
    operator, items, children = _read_group(params.accessors, group)

    item_results, child_results = await asyncio.gather(
        asyncio.gather(
            *(_evaluate_item(params.validate_item, item, group) for item in items)
        ),
        asyncio.gather(*(_validate_group(params.with_group(child)) for child in children)),
    )
    return _build_result(operator, group, list(item_results), list(child_results))


async def validate_groups(params: BooleanValidator) -> GroupResult:
    """
    Asynchronously validate a group tree.

    Items of a group are dispatched concurrently, and so are its child
    groups; results keep input order regardless of completion order. The
    first predicate or accessor exception propagates to the caller; sibling
    evaluations already launched are not cancelled.

    Args:
        params: Root group, accessors and item predicate

    Returns:
        GroupResult tree mirroring the group tree
    """
    return await _validate_group(params)


async def validate_groups_full(params: BooleanValidator) -> DiagnosedGroupResult:
    """
    Run validate_groups and attach which items and children must be true or
    false for the root group to evaluate as true.
    """
    group_res = await validate_groups(params)
    return merge_diagnostics(group_res)


def _evaluate_item_sync(validate_item: ItemPredicate, item: Any, group: Any) -> ItemResult:
    try:
        response = validate_item(item, group)
    except Exception as e:
        logger.debug(f"Item predicate failed for {item!r}: {e}")
        raise
    if inspect.isawaitable(response):
        if inspect.iscoroutine(response):
            response.close()
        raise InvalidItemResultError(
            response, "predicate returned an awaitable; use validate_groups instead"
        )
    return ItemResult.from_response(response)


def _validate_group_sync(params: BooleanValidator) -> GroupResult:
    group = params.group
    operator, items, children = _read_group(params.accessors, group)

    item_results = [_evaluate_item_sync(params.validate_item, item, group) for item in items]

    child_results = [_validate_group_sync(params.with_group(child)) for child in children]

    return _build_result(operator, group, item_results, child_results)


def validate_groups_sync(params: BooleanValidator) -> GroupResult:
    """
    Synchronously validate a group tree.

    Items, then child groups, are evaluated one at a time in input order.
    Produces the same tree as validate_groups for the same inputs.

    Args:
        params: Root group, accessors and a synchronous item predicate

    Returns:
        GroupResult tree mirroring the group tree

    Raises:
        InvalidItemResultError: If the predicate returns an awaitable
    """
    return _validate_group_sync(params)


def validate_groups_full_sync(params: BooleanValidator) -> DiagnosedGroupResult:
    """Synchronous counterpart of validate_groups_full."""
    group_res = validate_groups_sync(params)
    return merge_diagnostics(group_res)
