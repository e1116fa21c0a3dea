"""
Graph Statistics (metrics cache)

GraphStats binds one GraphSnapshot to lazily computed metrics. Each metric
lives in its own slot guarded by its own lock:

    - the first caller computes and stores the value
    - concurrent first callers block on that slot only, then reuse the value
    - independent metrics may compute in parallel threads

Accessors return shallow copies so callers cannot corrupt the cache.
There is no invalidation: a changed data set means a new snapshot and a
new GraphStats.

Usage:
    stats = GraphStats(build_snapshot(items, deps))
    stats.pagerank()["bv-1"]
    stats.node_metrics("bv-1")
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from triage_graph.analysis.centrality import betweenness, eigenvector, hits, pagerank
from triage_graph.analysis.structural import (
    core_numbers,
    critical_path_scores,
    cyclic_nodes,
    density,
    find_cycles,
)
from triage_graph.config.settings import AnalysisSettings
from triage_graph.core.graph_builder import GraphSnapshot

_UNSET = object()


class _MetricSlot:
    """Compute-once holder for a single metric."""

    def __init__(self, compute: Callable[[], Any]) -> None:
        self._compute = compute
        self._lock = threading.Lock()
        self._value: Any = _UNSET

    @property
    def ready(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> Any:
        value = self._value
        if value is not _UNSET:
            return value
        with self._lock:
            if self._value is _UNSET:
                self._value = self._compute()
            return self._value


class GraphStats:
    """
    Lazily computed metrics for one graph snapshot.

    Attributes:
        snapshot:   the frozen graph every metric is computed on
        settings:   iteration parameters
        node_count: number of nodes in the snapshot
        edge_count: number of structural edges in the snapshot
    """

    METRICS: Tuple[str, ...] = (
        "pagerank",
        "betweenness",
        "eigenvector",
        "hits",
        "critical_path",
        "core_number",
        "cycles",
        "density",
    )

    def __init__(
        self,
        snapshot: GraphSnapshot,
        settings: Optional[AnalysisSettings] = None,
    ) -> None:
        self.snapshot = snapshot
        self.settings = settings or AnalysisSettings()
        self.node_count = snapshot.number_of_nodes()
        self.edge_count = snapshot.number_of_edges()
        self._logger = logging.getLogger(__name__)

        computations: Dict[str, Callable[[], Any]] = {
            "pagerank": lambda: pagerank(
                self.snapshot,
                damping=self.settings.damping_factor,
                tolerance=self.settings.tolerance,
                max_iterations=self.settings.max_iterations,
            ),
            "betweenness": lambda: betweenness(self.snapshot),
            "eigenvector": lambda: eigenvector(
                self.snapshot,
                tolerance=self.settings.tolerance,
                max_iterations=self.settings.max_iterations,
            ),
            "hits": lambda: hits(
                self.snapshot,
                tolerance=self.settings.tolerance,
                max_iterations=self.settings.max_iterations,
            ),
            "critical_path": lambda: critical_path_scores(self.snapshot),
            "core_number": lambda: core_numbers(self.snapshot),
            "cycles": lambda: find_cycles(self.snapshot),
            "density": lambda: density(self.snapshot),
            "cyclic_nodes": lambda: frozenset(cyclic_nodes(self.snapshot)),
        }
        self._slots: Dict[str, _MetricSlot] = {
            name: _MetricSlot(self._timed(name, fn))
            for name, fn in computations.items()
        }

    # ------------------------------------------------------------------
    # Metric accessors
    # ------------------------------------------------------------------

    def pagerank(self) -> Dict[str, float]:
        return dict(self._slots["pagerank"].get())

    def betweenness(self) -> Dict[str, float]:
        return dict(self._slots["betweenness"].get())

    def eigenvector(self) -> Dict[str, float]:
        return dict(self._slots["eigenvector"].get())

    def hubs(self) -> Dict[str, float]:
        return dict(self._slots["hits"].get()[0])

    def authorities(self) -> Dict[str, float]:
        return dict(self._slots["hits"].get()[1])

    def critical_path_score(self) -> Dict[str, float]:
        return dict(self._slots["critical_path"].get())

    def core_number(self) -> Dict[str, int]:
        return dict(self._slots["core_number"].get())

    def cycles(self) -> List[List[str]]:
        return [list(c) for c in self._slots["cycles"].get()]

    def density(self) -> float:
        return self._slots["density"].get()

    # ------------------------------------------------------------------
    # Diagnostics / drill-down
    # ------------------------------------------------------------------

    def computed_metrics(self) -> List[str]:
        """Names of the metric slots already filled."""
        return [name for name in self.METRICS if self._slots[name].ready]

    def compute_all(self) -> None:
        """Fill every slot."""
        for name in self.METRICS:
            self._slots[name].get()

    def node_metrics(self, node_id: str) -> Dict[str, Any]:
        """
        Every metric for a single node, for explanation views.

        Raises:
            KeyError: if *node_id* is not part of the snapshot.
        """
        if node_id not in self.snapshot:
            raise KeyError(node_id)
        hubs, authorities = self._slots["hits"].get()
        in_cycle = node_id in self._slots["cyclic_nodes"].get()
        return {
            "id": node_id,
            "pagerank": self._slots["pagerank"].get()[node_id],
            "betweenness": self._slots["betweenness"].get()[node_id],
            "eigenvector": self._slots["eigenvector"].get()[node_id],
            "hub": hubs[node_id],
            "authority": authorities[node_id],
            "critical_path": self._slots["critical_path"].get()[node_id],
            "core_number": self._slots["core_number"].get()[node_id],
            "in_degree": self.snapshot.in_degree(node_id),
            "out_degree": self.snapshot.out_degree(node_id),
            "in_cycle": in_cycle,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Full metric maps, keys in sorted node order."""
        return {
            "nodes": self.node_count,
            "edges": self.edge_count,
            "density": self.density(),
            "pagerank": self.pagerank(),
            "betweenness": self.betweenness(),
            "eigenvector": self.eigenvector(),
            "hubs": self.hubs(),
            "authorities": self.authorities(),
            "critical_path": self.critical_path_score(),
            "core_number": self.core_number(),
            "cycles": self.cycles(),
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _timed(self, name: str, compute: Callable[[], Any]) -> Callable[[], Any]:
        def run() -> Any:
            start = time.perf_counter()
            value = compute()
            self._logger.debug(
                "Computed %s for %d nodes / %d edges in %.3fs",
                name, self.node_count, self.edge_count, time.perf_counter() - start,
            )
            return value
        return run
