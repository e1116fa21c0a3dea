"""
Graph Builder

Turns work items and their typed dependencies into an immutable graph
snapshot that every analytics algorithm runs against.

Filtering rules:
    - only structural kinds (blocks, parent-child) become edges
    - edges touching an id outside the item set are dropped
    - duplicate edges collapse into one
    - self-referential edges are dropped unless explicitly allowed

Ordering:
    Node ids are sorted once and edges are inserted in sorted
    (source, target) order, so adjacency iteration, numpy index arrays and
    therefore floating-point summation order are identical for identical
    input regardless of how the caller ordered it.

Usage:
    snapshot = build_snapshot(items, dependencies)
    snapshot.successors("bv-1")    # dependents enabled by bv-1
    snapshot.predecessors("bv-1")  # prerequisites of bv-1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import networkx as nx
import numpy as np

from triage_graph.core.models import Dependency, WorkItem, is_structural_kind

logger = logging.getLogger(__name__)


@dataclass
class DroppedEdges:
    """Counts of dependency records excluded during construction."""
    non_structural: int = 0
    unknown_endpoint: int = 0
    duplicate: int = 0
    self_loop: int = 0

    @property
    def total(self) -> int:
        return self.non_structural + self.unknown_endpoint + self.duplicate + self.self_loop

    def to_dict(self) -> Dict[str, int]:
        return {
            "non_structural": self.non_structural,
            "unknown_endpoint": self.unknown_endpoint,
            "duplicate": self.duplicate,
            "self_loop": self.self_loop,
        }


class GraphSnapshot:
    """
    Frozen {node set, structural edge set} pairing.

    Wraps a frozen ``networkx.DiGraph`` whose edges run prerequisite ->
    dependent, plus the sorted node order and integer edge arrays used by
    the iterative numeric algorithms.
    """

    def __init__(self, graph: nx.DiGraph, dropped: Optional[DroppedEdges] = None) -> None:
        self.graph: nx.DiGraph = nx.freeze(graph)
        self.dropped_edges = dropped or DroppedEdges()
        self.node_ids: Tuple[str, ...] = tuple(graph.nodes)
        self.index: Dict[str, int] = {nid: i for i, nid in enumerate(self.node_ids)}

        sources = [self.index[u] for u, _ in graph.edges]
        targets = [self.index[v] for _, v in graph.edges]
        self.edge_sources = np.asarray(sources, dtype=np.int64)
        self.edge_targets = np.asarray(targets, dtype=np.int64)

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.node_ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.index

    def number_of_nodes(self) -> int:
        return len(self.node_ids)

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def successors(self, node_id: str) -> Tuple[str, ...]:
        """Outgoing-edge targets: the dependents this node enables."""
        return tuple(sorted(self.graph.successors(node_id)))

    def predecessors(self, node_id: str) -> Tuple[str, ...]:
        """Incoming-edge sources: the prerequisites of this node."""
        return tuple(sorted(self.graph.predecessors(node_id)))

    def in_degree(self, node_id: str) -> int:
        return self.graph.in_degree(node_id)

    def out_degree(self, node_id: str) -> int:
        return self.graph.out_degree(node_id)

    def edges(self) -> List[Tuple[str, str]]:
        return list(self.graph.edges)

    def isolated_nodes(self) -> List[str]:
        """Nodes with no structural edge in either direction."""
        return [n for n in self.node_ids if self.graph.degree(n) == 0]

    def node_attributes(self, node_id: str) -> Dict[str, Any]:
        """Presentation attributes (status, type, title) carried for the node."""
        return dict(self.graph.nodes[node_id])


def build_snapshot(
    items: Iterable[WorkItem],
    dependencies: Optional[Iterable[Dependency]] = None,
    allow_self_loops: bool = False,
) -> GraphSnapshot:
    """
    Build a GraphSnapshot from work items and dependency records.

    Dependencies embedded in ``item.dependencies`` are merged with the
    explicit *dependencies* iterable. Malformed records are excluded and
    counted, never raised.
    """
    attrs: Dict[str, Dict[str, Any]] = {}
    records: List[Dependency] = []

    for item in items:
        if item.id in attrs:
            logger.debug("Duplicate work item id %s ignored", item.id)
            continue
        attrs[item.id] = {
            "status": _value(item.status),
            "issue_type": _value(item.issue_type),
            "title": item.title,
        }
        records.extend(item.dependencies)

    if dependencies is not None:
        records.extend(dependencies)

    dropped = DroppedEdges()
    edge_set: Set[Tuple[str, str]] = set()
    for dep in records:
        if not is_structural_kind(dep.kind):
            dropped.non_structural += 1
            continue
        source, target = dep.traversal_edge
        if source not in attrs or target not in attrs:
            dropped.unknown_endpoint += 1
            continue
        if source == target and not allow_self_loops:
            dropped.self_loop += 1
            continue
        if (source, target) in edge_set:
            dropped.duplicate += 1
            continue
        edge_set.add((source, target))

    G = nx.DiGraph()
    for nid in sorted(attrs):
        G.add_node(nid, **attrs[nid])
    G.add_edges_from(sorted(edge_set))

    if dropped.total:
        logger.debug("Dropped %d dependency records: %s", dropped.total, dropped.to_dict())

    return GraphSnapshot(G, dropped)


def _value(value: Any) -> str:
    return getattr(value, "value", value)
