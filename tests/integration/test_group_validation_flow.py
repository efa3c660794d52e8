"""Integration tests for comparison groups (evaluate → diagnose → explain).

Uses plain dict rules and the public package API only.
"""

import pytest

from group_validator import (
    ComparatorExtension,
    DetailedResponseParams,
    GroupAccessors,
    OperandIds,
    OperandNames,
    OperandValues,
    collect_required_changes,
    detailed_error_props_getter,
    get_logical_error_responses,
    merge_diagnostics,
    validate_comparisons,
    validate_comparisons_sync,
    validate_if_then,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_rule(operand1, comparator, operand2, name="value", expected="limit"):
    return {
        "operand1": operand1,
        "comparator": comparator,
        "operand2": operand2,
        "name": name,
        "expected": expected,
    }


def make_extension(group) -> ComparatorExtension:
    return ComparatorExtension(
        group=group,
        accessors=GroupAccessors.for_mappings(),
        comparator_getter=lambda rule: rule["comparator"],
        get_operand_values=lambda rule: OperandValues(rule["operand1"], rule["operand2"]),
        response_props_getter=detailed_error_props_getter(
            DetailedResponseParams(
                get_operand_ids=lambda rule: OperandIds(rule["name"], rule["expected"]),
                get_operand_display_names=lambda rule: OperandNames(
                    rule["name"], rule["expected"]
                ),
            )
        ),
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestComparisonFlow:
    """Evaluation, diagnosis and explanation of one tree."""

    def test_and_of_two_comparisons(self):
        group = {
            "operator": "AND",
            "items": [make_rule(1, "==", 1), make_rule(1, "==", 2, name="Doors", expected="Required doors")],
        }

        res = validate_comparisons_sync(make_extension(group))

        assert res.valid is False
        assert [r.valid for r in res.item_results] == [True, False]

        diagnostic = get_logical_error_responses(res)
        assert diagnostic.must_be_true_items == [res.item_results[1]]
        assert diagnostic.must_be_true_items[0].error_message == "Doors is NOT equal to Required doors"

    def test_nested_vehicle_rules(self):
        group = {
            "operator": "AND",
            "items": [make_rule("2019", ">=", 2015, name="Model year", expected="Oldest model year")],
            "child_groups": [
                {
                    "operator": "XOR",
                    "items": [
                        make_rule("petrol", "==", "petrol", name="Fuel", expected="Petrol"),
                        make_rule("petrol", "==", "diesel", name="Fuel", expected="Diesel"),
                    ],
                },
                {
                    "operator": "OR",
                    "items": [
                        make_rule(120000, "<", 100000, name="Mileage", expected="Mileage limit"),
                        make_rule(9, "<=", 8, name="Age", expected="Age limit"),
                    ],
                },
            ],
        }

        merged = merge_diagnostics(validate_comparisons_sync(make_extension(group)))

        assert merged.valid is False
        assert merged.item_results[0].valid is True
        assert [c.valid for c in merged.child_results] == [True, False]
        assert merged.must_be_true_items == []
        assert len(merged.must_be_true_children) == 1

        changes = collect_required_changes(merged)
        assert [(c.path, c.kind) for c in changes] == [((1,), "group"), ((1, 0), "item"), ((1, 1), "item")]
        assert [c.result.error_message for c in changes[1:]] == [
            "Mileage is NOT less than Mileage limit",
            "Age is NOT less than or equal to Age limit",
        ]

    @pytest.mark.asyncio
    async def test_if_then_with_comparisons(self):
        if_group = {"operator": "AND", "items": [make_rule("EV", "!=", "EV", name="Drive", expected="Electric")]}
        then_group = {"operator": "AND", "items": [make_rule(1, "==", 1)]}

        async def validate_group(group):
            return await validate_comparisons(make_extension(group))

        res = await validate_if_then(if_group, then_group, validate_group)

        assert res.if_response.valid is False
        assert res.if_response.item_results[0].error_message == "Drive is equal to Electric"
        assert res.then_response is None
