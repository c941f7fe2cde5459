"""
Unit tests for field-mask utilities.
"""

import pytest

from tuning_client.core.exceptions import AmbiguousUpdateError, TypeMismatchError
from tuning_client.utils.field_mask import (
    FieldMask,
    apply_update,
    field_mask,
    flatten_update_paths,
    get_path,
)


class TestFlattenUpdatePaths:
    """Test flattening of nested update mappings."""

    def test_nested_mapping(self):
        assert flatten_update_paths({"config": {"rate": 0.01}}) == {"config.rate": 0.01}

    def test_nested_and_dotted_are_equivalent(self):
        assert flatten_update_paths({"a": {"b": 1}}) == flatten_update_paths({"a.b": 1})

    def test_mixed_depths(self):
        updates = {
            "display_name": "New",
            "tuning_task": {"hyperparameters": {"epoch_count": 3, "batch_size": 2}},
        }
        assert flatten_update_paths(updates) == {
            "display_name": "New",
            "tuning_task.hyperparameters.epoch_count": 3,
            "tuning_task.hyperparameters.batch_size": 2,
        }

    def test_empty_mapping_is_a_leaf(self):
        assert flatten_update_paths({"metadata": {}}) == {"metadata": {}}

    def test_duplicate_path(self):
        with pytest.raises(AmbiguousUpdateError):
            flatten_update_paths({"a.b": 1, "a": {"b": 2}})


class TestApplyUpdate:
    """Test path-walking assignment."""

    def test_assigns_leaf(self):
        tree = {"a": {"b": 1, "c": 2}}
        apply_update(tree, "a.b", 10)
        assert tree == {"a": {"b": 10, "c": 2}}

    def test_creates_missing_intermediates(self):
        tree = {"name": "x"}
        apply_update(tree, "tuning_task.hyperparameters.epoch_count", 4)
        assert tree["tuning_task"] == {"hyperparameters": {"epoch_count": 4}}

    def test_non_mapping_intermediate(self):
        tree = {"display_name": "Old"}
        with pytest.raises(TypeMismatchError):
            apply_update(tree, "display_name.first", "x")

    def test_get_path(self):
        tree = {"a": {"b": {"c": 1}}}
        assert get_path(tree, "a.b.c") == 1
        assert get_path(tree, "a.x", "default") == "default"


class TestFieldMask:
    """Test the structural diff."""

    def test_changed_scalar(self):
        before = {"temperature": 0.5, "top_k": 3}
        after = {"temperature": 0.7, "top_k": 3}
        assert set(field_mask(before, after)) == {"temperature"}

    def test_identical_trees(self):
        tree = {"a": {"b": [1, 2]}, "c": "x"}
        assert len(field_mask(tree, dict(tree))) == 0

    def test_nested_changes_are_leaf_paths(self):
        before = {"tuning_task": {"hyperparameters": {"epoch_count": 5, "batch_size": 4}}}
        after = {"tuning_task": {"hyperparameters": {"epoch_count": 6, "batch_size": 4}}}
        assert set(field_mask(before, after)) == {"tuning_task.hyperparameters.epoch_count"}

    def test_added_and_removed_keys(self):
        before = {"display_name": "x", "description": "old"}
        after = {"display_name": "x", "top_p": 0.8}
        assert set(field_mask(before, after)) == {"description", "top_p"}

    def test_lists_compare_whole(self):
        before = {"snapshots": [{"step": 1}]}
        after = {"snapshots": [{"step": 1}, {"step": 2}]}
        assert set(field_mask(before, after)) == {"snapshots"}

    def test_subtree_on_one_side(self):
        before = {"base_model": "models/a"}
        after = {"tuned_model_source": {"tuned_model": "tunedModels/t", "base_model": "models/a"}}
        assert set(field_mask(before, after)) == {"base_model", "tuned_model_source"}

    def test_inputs_are_not_modified(self):
        before = {"a": {"b": 1}}
        after = {"a": {"b": 2}}
        field_mask(before, after)
        assert before == {"a": {"b": 1}}
        assert after == {"a": {"b": 2}}


class TestFieldMaskType:
    """Test the FieldMask container."""

    def test_deduplicates_and_keeps_order(self):
        mask = FieldMask(["b", "a", "b"])
        assert mask.paths == ["b", "a"]
        assert mask.to_string() == "b,a"

    def test_equality_ignores_order(self):
        assert FieldMask(["a", "b"]) == {"b", "a"}
        assert FieldMask(["a"]) == FieldMask(["a"])
