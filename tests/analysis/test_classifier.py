"""Tests for action classification and attribute diffing."""

import pytest
from planrisk.analysis.classifier import classify_action, diff_attributes
from planrisk.ingest.models import ActionType


class TestClassifyAction:
    """Test mapping raw verbs to a categorical action."""
    
    @pytest.mark.parametrize("actions,expected", [
        (["create"], ActionType.CREATE),
        (["update"], ActionType.UPDATE),
        (["delete"], ActionType.DELETE),
        (["read"], ActionType.READ),
        (["no-op"], ActionType.NO_OP),
        (["delete", "create"], ActionType.REPLACE),
        (["create", "delete"], ActionType.REPLACE),
        (["update", "create"], ActionType.CREATE),
        (["update", "delete"], ActionType.DELETE),
        (["read", "update"], ActionType.UPDATE),
        ([], ActionType.NO_OP),
        (["something-new"], ActionType.NO_OP),
    ])
    def test_precedence(self, actions, expected):
        """First matching rule wins."""
        assert classify_action(actions) == expected
    
    def test_order_and_duplicates_do_not_matter(self):
        """Only membership of verbs matters."""
        assert classify_action(["create", "create", "delete"]) == classify_action(["delete", "create"])
    
    def test_update_replace_is_update(self):
        """Unknown verbs are ignored; update still counts."""
        assert classify_action(["update", "replace"]) == ActionType.UPDATE


class TestDiffAttributes:
    """Test changed attribute detection."""
    
    def test_create_lists_all_after_keys(self):
        """Every key of after differs from an absent before."""
        assert diff_attributes(None, {"a": 1, "b": 2}) == ["a", "b"]
    
    def test_delete_lists_all_before_keys(self):
        """Every key of before differs from an absent after."""
        assert diff_attributes({"a": 1}, None) == ["a"]
    
    def test_both_absent(self):
        """Nothing to compare."""
        assert diff_attributes(None, None) == []
    
    def test_first_seen_order(self):
        """Before's keys first, then keys only in after."""
        before = {"z": 1, "a": 1, "m": 1}
        after = {"new": 1, "a": 2, "z": 2}
        assert diff_attributes(before, after) == ["z", "a", "m", "new"]
    
    def test_nested_key_order_ignored(self):
        """Structurally equal nested values are unchanged."""
        before = {"tags": {"a": "1", "b": "2"}}
        after = {"tags": {"b": "2", "a": "1"}}
        assert diff_attributes(before, after) == []
    
    def test_absent_and_null_differ(self):
        """A key set to null is not the same as a missing key."""
        assert diff_attributes({"a": None}, {}) == ["a"]
        assert diff_attributes({}, {"a": None}) == ["a"]
    
    def test_whole_float_equals_int(self):
        """1 and 1.0 are the same JSON number."""
        assert diff_attributes({"a": 1}, {"a": 1.0}) == []
        assert diff_attributes({"b": {"size": [50]}}, {"b": {"size": [50.0]}}) == []
        assert diff_attributes({"a": 1}, {"a": 1.5}) == ["a"]
    
    def test_bool_is_not_a_number(self):
        assert diff_attributes({"a": 1}, {"a": True}) == ["a"]
    
    def test_list_order_matters(self):
        """Lists are compared element by element."""
        assert diff_attributes({"ids": [1, 2]}, {"ids": [2, 1]}) == ["ids"]
