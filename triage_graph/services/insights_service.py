"""
Insights Service

Entry point for one analytics request: builds a fresh snapshot from the
caller's items and dependencies, binds a new metrics cache to it and
packages the ranked insights.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from triage_graph.analysis.insights import Insights, generate_insights
from triage_graph.analysis.stats import GraphStats
from triage_graph.config.settings import AnalysisSettings
from triage_graph.core.graph_builder import build_snapshot
from triage_graph.core.models import Dependency, WorkItem

logger = logging.getLogger(__name__)


class InsightsService:
    """
    Orchestrates build_snapshot, GraphStats and generate_insights.

    Each call works on its own snapshot; nothing is shared between calls.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None) -> None:
        self.settings = settings or AnalysisSettings()

    def build_stats(
        self,
        items: Iterable[WorkItem],
        dependencies: Optional[Iterable[Dependency]] = None,
    ) -> GraphStats:
        """Build the snapshot and an empty metrics cache bound to it."""
        snapshot = build_snapshot(
            items,
            dependencies,
            allow_self_loops=self.settings.allow_self_loops,
        )
        logger.info(
            "Graph snapshot: %d nodes, %d structural edges (%d records dropped)",
            snapshot.number_of_nodes(),
            snapshot.number_of_edges(),
            snapshot.dropped_edges.total,
        )
        return GraphStats(snapshot, self.settings)

    def analyze(
        self,
        items: Iterable[WorkItem],
        dependencies: Optional[Iterable[Dependency]] = None,
        limit: Optional[int] = None,
    ) -> Insights:
        """
        Compute ranked insights for the given work items.

        *limit* defaults to the configured insight_limit; <= 0 returns
        every node in each list.
        """
        stats = self.build_stats(items, dependencies)
        if limit is None:
            limit = self.settings.insight_limit
        insights = generate_insights(stats, limit)
        logger.info(
            "Insights ready: %d cycles, density %.4f",
            len(insights.cycles), insights.cluster_density,
        )
        return insights
