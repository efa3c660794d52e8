"""Diagnosis of evaluated group trees.

Given a GroupResult, works out which direct item and child results would
have to change for the group to reach its success state:

- AND: every false result must become true.
- OR: only reported when every result is false; then all of them are
  candidates, any one becoming true is enough. A true OR reports nothing.
- XOR: with no true result, every false result is a candidate to become
  true. With exactly one true result nothing is reported. With two or more
  true results the true ones are reported as must-be-false instead.

Children that end up in a must-be set are diagnosed recursively.
"""

import logging
from typing import Dict, List

from group_validator.operators import coerce_operator
from group_validator.schemas import (
    BooleanOperator,
    DiagnosedGroupResult,
    DiagnosticResult,
    GroupResult,
    ItemResult,
)

logger = logging.getLogger(__name__)


def _empty_response() -> Dict[str, list]:
    return {
        "must_be_true_items": [],
        "must_be_false_items": [],
        "must_be_true_children": [],
        "must_be_false_children": [],
    }


def _get_and_must_response(
    item_responses: List[ItemResult],
    child_responses: List[GroupResult],
) -> Dict[str, list]:
    false_items = [res for res in item_responses if not res.valid]
    false_children = [res for res in child_responses if not res.valid]
    return {
        "must_be_true_items": false_items,
        "must_be_false_items": [],
        "must_be_true_children": [get_logical_error_responses(c) for c in false_children],
        "must_be_false_children": [],
    }


def _get_or_must_response(
    item_responses: List[ItemResult],
    child_responses: List[GroupResult],
) -> Dict[str, list]:
    total_length = len(item_responses) + len(child_responses)
    false_items = [res for res in item_responses if not res.valid]
    false_children = [res for res in child_responses if not res.valid]

    if len(false_items) + len(false_children) == total_length:
        return {
            "must_be_true_items": false_items,
            "must_be_false_items": [],
            "must_be_true_children": [get_logical_error_responses(c) for c in false_children],
            "must_be_false_children": [],
        }
    return _empty_response()


def _get_xor_must_response(
    item_responses: List[ItemResult],
    child_responses: List[GroupResult],
) -> Dict[str, list]:
    total_length = len(item_responses) + len(child_responses)
    false_items = [res for res in item_responses if not res.valid]
    false_children = [res for res in child_responses if not res.valid]
    false_length = len(false_items) + len(false_children)

    # No true result (covers the empty group): any false one may become true
    if false_length == total_length:
        return {
            "must_be_true_items": false_items,
            "must_be_false_items": [],
            "must_be_true_children": [get_logical_error_responses(c) for c in false_children],
            "must_be_false_children": [],
        }

    # Exactly one true result: already valid
    if false_length == total_length - 1:
        return _empty_response()

    # Too many true results: any of them may become false
    true_items = [res for res in item_responses if res.valid]
    true_children = [res for res in child_responses if res.valid]
    return {
        "must_be_true_items": [],
        "must_be_false_items": true_items,
        "must_be_true_children": [],
        "must_be_false_children": [get_logical_error_responses(c) for c in true_children],
    }


_MUST_RESPONSE_BUILDERS = {
    BooleanOperator.AND: _get_and_must_response,
    BooleanOperator.OR: _get_or_must_response,
    BooleanOperator.XOR: _get_xor_must_response,
}


def _diagnose_node(group_res: GroupResult) -> Dict[str, list]:
    operator = coerce_operator(group_res.operator)
    must = _MUST_RESPONSE_BUILDERS[operator](
        list(group_res.item_results), list(group_res.child_results)
    )
    logger.debug(
        f"Diagnosed {operator.value} group (valid={group_res.valid}): "
        f"{len(must['must_be_true_items'])} item(s) / "
        f"{len(must['must_be_true_children'])} child(ren) must be true, "
        f"{len(must['must_be_false_items'])} item(s) / "
        f"{len(must['must_be_false_children'])} child(ren) must be false"
    )
    return must


def get_logical_error_responses(group_res: GroupResult) -> DiagnosticResult:
    """
    Diagnose a GroupResult tree.

    Args:
        group_res: Result returned by validate_groups / validate_groups_sync

    Returns:
        DiagnosticResult listing the direct items and children that must
        change, with listed children diagnosed recursively

    Raises:
        UnknownOperatorError: If a node carries an operator outside AND/OR/XOR
    """
    return DiagnosticResult(
        group=group_res.group,
        operator=group_res.operator,
        valid=group_res.valid,
        **_diagnose_node(group_res),
    )


def merge_diagnostics(group_res: GroupResult) -> DiagnosedGroupResult:
    """Combine a GroupResult with the diagnosis of its root node."""
    return DiagnosedGroupResult(
        valid=group_res.valid,
        group=group_res.group,
        operator=group_res.operator,
        item_results=group_res.item_results,
        child_results=group_res.child_results,
        **_diagnose_node(group_res),
    )
