"""
Result Interpreter - flattens a diagnosed result tree.

The diagnostic engine answers "what must change" one node at a time. This
module walks the whole GroupResult tree and lists every required change
with its position, so callers can point at the exact item that blocks the
root group without walking nested diagnostics themselves.

Positions are tuples of indices: child group indices (into child_results)
from the root down, followed by the item index (into item_results) for item
changes. The root group itself has the empty path.
"""

from typing import Dict, List, Literal, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from group_validator.diagnostics import get_logical_error_responses
from group_validator.schemas import BooleanOperator, DiagnosticResult, GroupResult, ItemResult


class RequiredChange(BaseModel):
    """A single sub-result that has to flip."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: Tuple[int, ...] = Field(..., description="Child indices from the root, then item index")
    kind: Literal["item", "group"] = Field(..., description="Whether an item or a child group must change")
    required_value: bool = Field(..., description="Value the result must take")
    operator: BooleanOperator = Field(..., description="Operator of the group holding the result")
    result: Union[ItemResult, GroupResult] = Field(..., description="The result as currently evaluated")


def _flagged_indices(results: Sequence, must_true: Sequence, must_false: Sequence) -> List[Tuple[int, bool]]:
    # Diagnosis always lists every false result or every true result, in order
    if must_true:
        return [(i, True) for i, res in enumerate(results) if not res.valid]
    if must_false:
        return [(i, False) for i, res in enumerate(results) if res.valid]
    return []


def _collect(
    group_res: GroupResult,
    diagnostic: DiagnosticResult,
    path: Tuple[int, ...],
    changes: List[RequiredChange],
) -> None:
    for index, required in _flagged_indices(
        group_res.item_results, diagnostic.must_be_true_items, diagnostic.must_be_false_items
    ):
        changes.append(
            RequiredChange(
                path=path + (index,),
                kind="item",
                required_value=required,
                operator=group_res.operator,
                result=group_res.item_results[index],
            )
        )

    # Child diagnoses are listed in the same order as the flagged children
    child_diagnostics = diagnostic.must_be_true_children or diagnostic.must_be_false_children
    flagged_children = _flagged_indices(
        group_res.child_results, diagnostic.must_be_true_children, diagnostic.must_be_false_children
    )
    for (index, required), child_diagnostic in zip(flagged_children, child_diagnostics):
        child = group_res.child_results[index]
        changes.append(
            RequiredChange(
                path=path + (index,),
                kind="group",
                required_value=required,
                operator=group_res.operator,
                result=child,
            )
        )
        _collect(child, child_diagnostic, path + (index,), changes)


def collect_required_changes(group_res: GroupResult) -> List[RequiredChange]:
    """
    List every change the diagnosis asks for, depth-first.

    The tree is diagnosed once; only children that themselves must change
    are descended into.

    Args:
        group_res: Result of validate_groups (or any of its variants)

    Returns:
        RequiredChange entries; empty when nothing blocks the root group
    """
    changes: List[RequiredChange] = []
    _collect(group_res, get_logical_error_responses(group_res), (), changes)
    return changes


def summarize_required_changes(changes: Sequence[RequiredChange]) -> Dict[str, int]:
    """Count required changes by kind and target value."""
    summary = {
        "items_to_true": 0,
        "items_to_false": 0,
        "groups_to_true": 0,
        "groups_to_false": 0,
    }
    for change in changes:
        target = "true" if change.required_value else "false"
        summary[f"{change.kind}s_to_{target}"] += 1
    return summary
