"""
triage-graph

Graph-aware triage analytics for dependency-linked work items.

Usage:
    from triage_graph import InsightsService, WorkItem, Dependency

    items = [WorkItem("bv-1"), WorkItem("bv-2")]
    deps = [Dependency("bv-2", "bv-1", "blocks")]
    insights = InsightsService().analyze(items, deps, limit=5)
    insights.keystones[0].id
"""

from triage_graph.core import Dependency, DependencyKind, ItemStatus, ItemType, WorkItem, build_snapshot
from triage_graph.analysis import GraphStats, InsightItem, Insights, generate_insights, top_items
from triage_graph.config import AnalysisSettings
from triage_graph.services import InsightsService

__version__ = "1.0.0"

__all__ = [
    "Dependency",
    "DependencyKind",
    "ItemStatus",
    "ItemType",
    "WorkItem",
    "build_snapshot",
    "GraphStats",
    "InsightItem",
    "Insights",
    "generate_insights",
    "top_items",
    "AnalysisSettings",
    "InsightsService",
]
