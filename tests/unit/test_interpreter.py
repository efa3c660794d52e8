"""Tests for the result interpreter."""

from group_validator import interpreter
from group_validator.diagnostics import get_logical_error_responses
from group_validator.interpreter import (
    RequiredChange,
    collect_required_changes,
    summarize_required_changes,
)
from group_validator.schemas import BooleanOperator
from group_test_helpers import make_group_result


class TestCollectRequiredChanges:
    """Flattening a diagnosed tree into positioned changes."""

    def test_valid_root_needs_nothing(self):
        res = make_group_result("AND", [True], [make_group_result("OR", [True, False])])
        assert collect_required_changes(res) == []

    def test_nested_and_failure(self):
        false_child = make_group_result("AND", [False, False], group="false-child")
        true_child = make_group_result("AND", [True], group="true-child")
        res = make_group_result("AND", [True, False], [true_child, false_child])

        changes = collect_required_changes(res)

        assert [(c.path, c.kind, c.required_value) for c in changes] == [
            ((1,), "item", True),
            ((1,), "group", True),
            ((1, 0), "item", True),
            ((1, 1), "item", True),
        ]
        assert all(isinstance(c, RequiredChange) for c in changes)
        assert changes[0].result is res.item_results[1]
        assert changes[1].result is false_child
        assert changes[0].operator == BooleanOperator.AND

    def test_item_paths_inside_children(self):
        child = make_group_result("OR", [False, False], group="child")
        res = make_group_result("AND", [], [child])

        changes = collect_required_changes(res)

        assert [c.path for c in changes] == [(0,), (0, 0), (0, 1)]
        assert changes[0].kind == "group"
        assert changes[1].operator == BooleanOperator.OR

    def test_xor_excess_requires_false(self):
        true_child = make_group_result("AND", [True], group="child")
        res = make_group_result("XOR", [True, False, True], [true_child])

        changes = collect_required_changes(res)

        assert [(c.path, c.kind, c.required_value) for c in changes] == [
            ((0,), "item", False),
            ((2,), "item", False),
            ((0,), "group", False),
        ]

    def test_valid_children_of_failing_group_not_descended(self):
        """A valid child that must stay as is contributes nothing."""
        inner = make_group_result("OR", [False], group="inner")
        child = make_group_result("OR", [True], [inner], group="child")
        res = make_group_result("AND", [False], [child])

        changes = collect_required_changes(res)

        assert [(c.path, c.kind) for c in changes] == [((0,), "item")]

    def test_tree_is_diagnosed_once(self, monkeypatch):
        calls = []

        def counting_diagnosis(group_res):
            calls.append(group_res)
            return get_logical_error_responses(group_res)

        monkeypatch.setattr(interpreter, "get_logical_error_responses", counting_diagnosis)

        node = make_group_result("OR", [False])
        for _ in range(6):
            node = make_group_result("AND", [True], [node])

        changes = collect_required_changes(node)

        assert calls == [node]
        assert [c.path for c in changes] == [
            (0,),
            (0, 0),
            (0, 0, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0, 0),
            (0, 0, 0, 0, 0, 0),
            (0, 0, 0, 0, 0, 0, 0),
        ]
        assert changes[-1].kind == "item"
        assert changes[-1].operator == BooleanOperator.OR


class TestSummarizeRequiredChanges:
    """Counting changes."""

    def test_empty(self):
        assert summarize_required_changes([]) == {
            "items_to_true": 0,
            "items_to_false": 0,
            "groups_to_true": 0,
            "groups_to_false": 0,
        }

    def test_counts(self):
        false_child = make_group_result("OR", [False, False])
        true_child = make_group_result("AND", [True])
        and_root = make_group_result("AND", [False], [false_child])
        xor_root = make_group_result("XOR", [True, True], [true_child])

        and_summary = summarize_required_changes(collect_required_changes(and_root))
        xor_summary = summarize_required_changes(collect_required_changes(xor_root))

        assert and_summary == {
            "items_to_true": 3,
            "items_to_false": 0,
            "groups_to_true": 1,
            "groups_to_false": 0,
        }
        assert xor_summary == {
            "items_to_true": 0,
            "items_to_false": 2,
            "groups_to_true": 0,
            "groups_to_false": 1,
        }
