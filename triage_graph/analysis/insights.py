"""
Insights

Turns raw metric maps into ranked, reproducible summaries for the terminal
view and for robot (machine-readable) output.

Ranked lists:
    bottlenecks   betweenness    items many shortest dependency paths pass through
    keystones     critical path  items at the end of the deepest prerequisite chains
    influencers   eigenvector    items fed by other well-connected items
    hubs          HITS hub       items that depend on many strong prerequisites
    authorities   HITS authority foundational items many others depend on

Ordering is value descending, then id ascending. The tie-break is exact and
downstream automation relies on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from triage_graph.analysis.stats import GraphStats


@dataclass(frozen=True)
class InsightItem:
    """One ranked entry of an insight list."""
    id: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value}


@dataclass
class Insights:
    """High-level summary of one graph snapshot."""
    bottlenecks: List[InsightItem] = field(default_factory=list)
    keystones: List[InsightItem] = field(default_factory=list)
    influencers: List[InsightItem] = field(default_factory=list)
    hubs: List[InsightItem] = field(default_factory=list)
    authorities: List[InsightItem] = field(default_factory=list)
    orphans: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)
    cluster_density: float = 0.0
    stats: Optional[GraphStats] = field(default=None, repr=False, compare=False)

    def to_dict(self, include_stats: bool = False) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "bottlenecks": [i.to_dict() for i in self.bottlenecks],
            "keystones": [i.to_dict() for i in self.keystones],
            "influencers": [i.to_dict() for i in self.influencers],
            "hubs": [i.to_dict() for i in self.hubs],
            "authorities": [i.to_dict() for i in self.authorities],
            "orphans": list(self.orphans),
            "cycles": [list(c) for c in self.cycles],
            "cluster_density": self.cluster_density,
        }
        if include_stats and self.stats is not None:
            result["stats"] = self.stats.to_dict()
        return result

    def explain(self, node_id: str) -> Dict[str, Any]:
        """All metrics behind one node's placement in the lists."""
        if self.stats is None:
            raise KeyError(node_id)
        return self.stats.node_metrics(node_id)


def top_items(metric: Mapping[str, float], limit: int) -> List[InsightItem]:
    """
    Rank *metric* by value descending, id ascending on ties.

    A *limit* of zero or less returns every entry.
    """
    ranked = sorted(metric.items(), key=lambda kv: (-kv[1], kv[0]))
    if limit > 0:
        ranked = ranked[:limit]
    return [InsightItem(id=k, value=v) for k, v in ranked]


def generate_insights(stats: GraphStats, limit: int) -> Insights:
    """Build the five ranked lists plus cycles, orphans and density."""
    return Insights(
        bottlenecks=top_items(stats.betweenness(), limit),
        keystones=top_items(stats.critical_path_score(), limit),
        influencers=top_items(stats.eigenvector(), limit),
        hubs=top_items(stats.hubs(), limit),
        authorities=top_items(stats.authorities(), limit),
        orphans=sorted(stats.snapshot.isolated_nodes()),
        cycles=stats.cycles(),
        cluster_density=stats.density(),
        stats=stats,
    )
