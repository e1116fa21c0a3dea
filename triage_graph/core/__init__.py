"""
Core Domain Model and Graph Builder
"""
from .models import (
    ItemStatus,
    ItemType,
    DependencyKind,
    STRUCTURAL_KINDS,
    is_structural_kind,
    Dependency,
    WorkItem,
)
from .graph_builder import (
    DroppedEdges,
    GraphSnapshot,
    build_snapshot,
)

__all__ = [
    "ItemStatus",
    "ItemType",
    "DependencyKind",
    "STRUCTURAL_KINDS",
    "is_structural_kind",
    "Dependency",
    "WorkItem",
    "DroppedEdges",
    "GraphSnapshot",
    "build_snapshot",
]
