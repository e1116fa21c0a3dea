"""
Graph Analytics

Centrality and structural metrics, the per-snapshot metrics cache and the
insights aggregator.
"""
from triage_graph.analysis.centrality import pagerank, betweenness, eigenvector, hits
from triage_graph.analysis.structural import (
    critical_path_scores,
    core_numbers,
    find_cycles,
    cyclic_nodes,
    density,
)
from triage_graph.analysis.stats import GraphStats
from triage_graph.analysis.insights import InsightItem, Insights, top_items, generate_insights

__all__ = [
    "pagerank", "betweenness", "eigenvector", "hits",
    "critical_path_scores", "core_numbers", "find_cycles", "cyclic_nodes", "density",
    "GraphStats",
    "InsightItem", "Insights", "top_items", "generate_insights",
]
