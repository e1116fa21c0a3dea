"""
Tests for core domain models

Covers:
    - Dependency kind resolution and aliases
    - Structural kind classification
    - Traversal edge direction
    - Dict round trips from store records
"""

import pytest

from triage_graph.core import (
    Dependency,
    DependencyKind,
    ItemStatus,
    ItemType,
    WorkItem,
    is_structural_kind,
)


class TestDependencyKind:
    """Tests for DependencyKind parsing."""

    @pytest.mark.parametrize("raw, expected", [
        ("blocks", DependencyKind.BLOCKS),
        ("BLOCKS", DependencyKind.BLOCKS),
        ("parent-child", DependencyKind.PARENT_CHILD),
        ("parent_child", DependencyKind.PARENT_CHILD),
        ("related", DependencyKind.RELATED),
        ("relates-to", DependencyKind.RELATED),
        ("discovered-from", DependencyKind.DISCOVERED_FROM),
    ])
    def test_from_string(self, raw, expected):
        assert DependencyKind.from_string(raw) is expected

    def test_unknown_kind_is_none(self):
        assert DependencyKind.from_string("duplicates") is None

    def test_structural_kinds(self):
        assert is_structural_kind(DependencyKind.BLOCKS)
        assert is_structural_kind("parent-child")
        assert not is_structural_kind("related")
        assert not is_structural_kind("relates-to")
        assert not is_structural_kind("something-else")
        assert not is_structural_kind(None)


class TestDependency:
    """Tests for the Dependency record."""

    def test_traversal_edge_runs_prerequisite_to_dependent(self):
        dep = Dependency(issue_id="A", depends_on_id="B")
        assert dep.traversal_edge == ("B", "A")

    def test_default_kind_is_blocks(self):
        assert Dependency("A", "B").kind is DependencyKind.BLOCKS
        assert Dependency("A", "B").is_structural

    def test_from_dict_embedded(self):
        dep = Dependency.from_dict({"depends_on_id": "bv-1", "type": "parent-child"}, issue_id="bv-2")
        assert dep == Dependency("bv-2", "bv-1", DependencyKind.PARENT_CHILD)

    def test_from_dict_keeps_unknown_kind_as_string(self):
        dep = Dependency.from_dict({"issue_id": "a", "depends_on_id": "b", "type": "mirrors"})
        assert dep.kind == "mirrors"
        assert not dep.is_structural

    def test_from_dict_missing_ids_raises(self):
        with pytest.raises(ValueError):
            Dependency.from_dict({"depends_on_id": "b"})

    def test_to_dict(self):
        assert Dependency("a", "b", DependencyKind.RELATED).to_dict() == {
            "issue_id": "a",
            "depends_on_id": "b",
            "type": "related",
        }


class TestWorkItem:
    """Tests for WorkItem construction."""

    def test_from_dict(self):
        item = WorkItem.from_dict({
            "id": "bv-2",
            "title": "Wire up cache",
            "status": "in_progress",
            "issue_type": "feature",
            "dependencies": [{"depends_on_id": "bv-1", "type": "blocks"}],
        })
        assert item.status is ItemStatus.IN_PROGRESS
        assert item.issue_type is ItemType.FEATURE
        assert item.dependencies == [Dependency("bv-2", "bv-1", DependencyKind.BLOCKS)]

    def test_unknown_status_carried_verbatim(self):
        item = WorkItem.from_dict({"id": "x", "status": "tombstone", "issue_type": "spike"})
        assert item.status == "tombstone"
        assert item.issue_type == "spike"

    def test_missing_id_raises(self):
        with pytest.raises(ValueError):
            WorkItem.from_dict({"title": "no id"})

    def test_to_dict(self):
        item = WorkItem("x", title="T", status=ItemStatus.BLOCKED, issue_type=ItemType.BUG)
        assert item.to_dict() == {
            "id": "x",
            "title": "T",
            "status": "blocked",
            "issue_type": "bug",
            "dependencies": [],
        }
