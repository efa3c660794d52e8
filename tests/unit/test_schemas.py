"""Tests for result schemas."""

import pytest
from pydantic import ValidationError

from group_validator.errors import GroupValidatorError, InvalidItemResultError
from group_validator.schemas import BooleanOperator, GroupResult, IfThenResponse, ItemResult


class TestItemResultFromResponse:
    """Normalizing predicate return values."""

    def test_bool(self):
        assert ItemResult.from_response(True) == ItemResult(valid=True)
        assert ItemResult.from_response(False).valid is False

    def test_mapping_keeps_annotations(self):
        res = ItemResult.from_response({"valid": False, "error_message": "too old", "id": 7})
        assert res.valid is False
        assert res.error_message == "too old"
        assert res.id == 7

    def test_item_result_returned_unchanged(self):
        item = ItemResult(valid=True, note="kept")
        assert ItemResult.from_response(item) is item

    def test_mapping_without_valid(self):
        with pytest.raises(InvalidItemResultError) as exc_info:
            ItemResult.from_response({"error_message": "x"})
        assert exc_info.value.value == {"error_message": "x"}

    @pytest.mark.parametrize("valid", ["yes", 1, None])
    def test_non_bool_valid_rejected(self, valid):
        with pytest.raises(InvalidItemResultError):
            ItemResult.from_response({"valid": valid})

    @pytest.mark.parametrize("response", [None, 1, "true", [True]])
    def test_unsupported_types(self, response):
        with pytest.raises(InvalidItemResultError):
            ItemResult.from_response(response)

    def test_error_hierarchy(self):
        with pytest.raises(GroupValidatorError):
            ItemResult.from_response(None)
        with pytest.raises(TypeError):
            ItemResult.from_response(None)


class TestResultModels:
    """Immutability and defaults."""

    def test_item_result_is_frozen(self):
        res = ItemResult(valid=True)
        with pytest.raises(ValidationError):
            res.valid = False

    def test_group_result_is_frozen(self):
        res = GroupResult(valid=True, group="g", operator="AND")
        with pytest.raises(ValidationError):
            res.valid = False

    def test_group_result_defaults(self):
        res = GroupResult(valid=False, group=None, operator="OR")
        assert res.operator is BooleanOperator.OR
        assert res.item_results == []
        assert res.child_results == []

    def test_if_then_defaults_to_no_then(self):
        if_response = GroupResult(valid=False, group="if", operator="AND")
        res = IfThenResponse(if_response=if_response)
        assert res.then_response is None
