"""Pydantic schemas for group validation results.

These schemas define the response tree produced by the evaluation engine
and the diagnostic records derived from it. The tree mirrors the caller's
group tree exactly: one GroupResult per group, one ItemResult per item, in
input order.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from group_validator.errors import InvalidItemResultError


class BooleanOperator(str, Enum):
    """Logical operator combining the results of a group."""

    AND = "AND"  # Every result true (empty group is true)
    OR = "OR"  # At least one result true (empty group is false)
    XOR = "XOR"  # Exactly one result true (empty group is false)


class ItemResult(BaseModel):
    """Outcome of a single item predicate.

    Only ``valid`` is read by the engine. Any other field supplied by the
    caller (error messages, operand details, ids) is kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    valid: StrictBool = Field(..., description="Whether the item condition holds")

    @classmethod
    def from_response(cls, response: Any) -> "ItemResult":
        """Normalize a predicate return value into an ItemResult.

        Accepts an ItemResult (returned unchanged), a mapping holding a
        boolean ``valid`` key plus optional annotation fields, or a bare bool.
        """
        if isinstance(response, ItemResult):
            return response
        if isinstance(response, bool):
            return cls(valid=response)
        if isinstance(response, Mapping):
            if "valid" not in response:
                raise InvalidItemResultError(response, "mapping has no 'valid' key")
            try:
                return cls(**response)
            except ValidationError as e:
                raise InvalidItemResultError(response, str(e)) from e
            except TypeError as e:
                # Non-string keys cannot become fields
                raise InvalidItemResultError(response, str(e)) from e
        raise InvalidItemResultError(
            response,
            f"expected ItemResult, mapping or bool, got {type(response).__name__}",
        )


class GroupResult(BaseModel):
    """Evaluation result for one group node of the tree."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    valid: bool = Field(
        ..., description="Operator applied to item_results + child_results"
    )
    group: Any = Field(..., description="The caller's group this result belongs to")
    operator: BooleanOperator = Field(..., description="Operator of the group")
    item_results: List[ItemResult] = Field(
        default_factory=list, description="One result per item, in input order"
    )
    child_results: List["GroupResult"] = Field(
        default_factory=list, description="One result per child group, in input order"
    )


class DiagnosticResult(BaseModel):
    """Which direct sub-results of a group have to change value.

    ``must_be_true_*`` entries are currently false and must become true;
    ``must_be_false_*`` entries are currently true and must become false.
    Children listed here are diagnosed recursively.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    group: Any = Field(..., description="The caller's group")
    operator: BooleanOperator = Field(..., description="Operator of the group")
    valid: bool = Field(..., description="Current outcome of the group")
    must_be_true_items: List[ItemResult] = Field(default_factory=list)
    must_be_false_items: List[ItemResult] = Field(default_factory=list)
    must_be_true_children: List["DiagnosticResult"] = Field(default_factory=list)
    must_be_false_children: List["DiagnosticResult"] = Field(default_factory=list)


class DiagnosedGroupResult(GroupResult):
    """A GroupResult merged with the diagnosis of its own node."""

    must_be_true_items: List[ItemResult] = Field(default_factory=list)
    must_be_false_items: List[ItemResult] = Field(default_factory=list)
    must_be_true_children: List[DiagnosticResult] = Field(default_factory=list)
    must_be_false_children: List[DiagnosticResult] = Field(default_factory=list)


class IfThenResponse(BaseModel):
    """Result of a condition/consequence evaluation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    if_response: GroupResult = Field(..., description="Result of the condition group")
    then_response: Optional[GroupResult] = Field(
        None, description="Result of the consequence group, None when it was skipped"
    )


GroupResult.model_rebuild()
DiagnosticResult.model_rebuild()
