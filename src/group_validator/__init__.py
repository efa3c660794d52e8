"""
Group Validator - boolean condition trees with "what must change" diagnostics.

This package provides:
- validator: async and sync evaluation of AND/OR/XOR group trees
- diagnostics: which items and child groups must flip for a group to pass
- comparator: items expressed as "operand1 <comparator> operand2"
- detailed_response: human-readable explanations for comparison failures
- if_then: evaluate a consequence group only when a condition group holds
- interpreter: flat list of required changes across a whole tree
"""

__version__ = "0.1.0"

from group_validator.comparator import (
    Comparator,
    ComparatorExtension,
    OperandValues,
    PropsGetterParams,
    validate_comparison,
    validate_comparisons,
    validate_comparisons_sync,
)
from group_validator.detailed_response import (
    DetailedResponse,
    DetailedResponseParams,
    ExplanationConfig,
    OperandIds,
    OperandInfo,
    OperandNames,
    detailed_error_props_getter,
    get_detailed_error,
    get_human_readable_message,
    get_translated_comparator,
)
from group_validator.diagnostics import get_logical_error_responses, merge_diagnostics
from group_validator.errors import (
    GroupValidatorError,
    InvalidItemResultError,
    UnknownComparatorError,
    UnknownOperatorError,
)
from group_validator.if_then import validate_if_then, validate_if_then_sync
from group_validator.interpreter import (
    RequiredChange,
    collect_required_changes,
    summarize_required_changes,
)
from group_validator.operators import (
    validate_and_response,
    validate_or_response,
    validate_responses,
    validate_xor_response,
)
from group_validator.schemas import (
    BooleanOperator,
    DiagnosedGroupResult,
    DiagnosticResult,
    GroupResult,
    IfThenResponse,
    ItemResult,
)
from group_validator.validator import (
    BooleanValidator,
    GroupAccessors,
    validate_groups,
    validate_groups_full,
    validate_groups_full_sync,
    validate_groups_sync,
)

__all__ = [
    "BooleanOperator",
    "BooleanValidator",
    "Comparator",
    "ComparatorExtension",
    "DetailedResponse",
    "DetailedResponseParams",
    "DiagnosedGroupResult",
    "DiagnosticResult",
    "ExplanationConfig",
    "GroupAccessors",
    "GroupResult",
    "GroupValidatorError",
    "IfThenResponse",
    "InvalidItemResultError",
    "ItemResult",
    "OperandIds",
    "OperandInfo",
    "OperandNames",
    "OperandValues",
    "PropsGetterParams",
    "RequiredChange",
    "UnknownComparatorError",
    "UnknownOperatorError",
    "collect_required_changes",
    "detailed_error_props_getter",
    "get_detailed_error",
    "get_human_readable_message",
    "get_logical_error_responses",
    "get_translated_comparator",
    "merge_diagnostics",
    "summarize_required_changes",
    "validate_and_response",
    "validate_comparison",
    "validate_comparisons",
    "validate_comparisons_sync",
    "validate_groups",
    "validate_groups_full",
    "validate_groups_full_sync",
    "validate_groups_sync",
    "validate_if_then",
    "validate_if_then_sync",
    "validate_or_response",
    "validate_responses",
    "validate_xor_response",
]
