"""
Structural Algorithms

Topology-driven metrics over a GraphSnapshot:

    critical_path_scores  longest prerequisite chain ending at each node
    core_numbers          k-core coreness on the undirected view
    find_cycles           one representative cycle per strongly connected component
    cyclic_nodes          members of any cycle, for drill-down views
    density               edges / V(V-1)

Cycle policy for the critical path:
    The graph is condensed into its SCC DAG first. Inside a cycle only
    prerequisites from other components count, so every node gets a finite
    partial score instead of recursing around the loop.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional, Set

import networkx as nx

from triage_graph.core.graph_builder import GraphSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Critical path
# ---------------------------------------------------------------------------

def critical_path_scores(snapshot: GraphSnapshot) -> Dict[str, float]:
    """
    Depth of the longest prerequisite chain reaching each node, in edges.

    A node without prerequisites scores 0; otherwise
    1 + max(score of each prerequisite outside the node's own SCC).
    For the chain A -> B -> C -> D the scores are 0, 1, 2, 3.
    """
    if len(snapshot) == 0:
        return {}

    G = snapshot.graph
    C = nx.condensation(G)
    mapping: Dict[str, int] = C.graph["mapping"]

    scores: Dict[str, float] = {}
    for component in nx.topological_sort(C):
        for node in sorted(C.nodes[component]["members"]):
            best = -1.0
            for prereq in G.predecessors(node):
                if mapping[prereq] == component:
                    continue  # in-cycle edge
                best = max(best, scores[prereq])
            scores[node] = best + 1.0

    return {nid: scores[nid] for nid in snapshot.node_ids}


# ---------------------------------------------------------------------------
# K-core
# ---------------------------------------------------------------------------

def core_numbers(snapshot: GraphSnapshot) -> Dict[str, int]:
    """
    Coreness of every node: the largest k such that the node survives in
    the k-core of the undirected, self-loop-free graph.

    Degree is the count of distinct neighbours regardless of direction, so
    a mutual pair A <-> B contributes one neighbour each.
    """
    if len(snapshot) == 0:
        return {}

    U = nx.Graph()
    U.add_nodes_from(snapshot.node_ids)
    U.add_edges_from((u, v) for u, v in snapshot.graph.edges if u != v)
    cores = nx.core_number(U)
    return {nid: int(cores[nid]) for nid in snapshot.node_ids}


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------

def find_cycles(snapshot: GraphSnapshot) -> List[List[str]]:
    """
    Report dependency cycles.

    Every strongly connected component with more than one node yields one
    representative simple cycle: the shortest cycle through its smallest id,
    listed in edge direction starting from that id. Every self-loop (only
    present when the snapshot allows them) is reported on its own as
    ``[id]``, including one on a node of a larger component.

    Cycles are ordered by first id, then by length.
    """
    G = snapshot.graph
    cycles: List[List[str]] = [[n] for n in snapshot.node_ids if G.has_edge(n, n)]

    for scc in nx.strongly_connected_components(G):
        if len(scc) == 1:
            continue
        cycle = _shortest_cycle_through(G, min(scc), scc)
        if cycle is not None:
            cycles.append(cycle)

    cycles.sort(key=lambda c: (c[0], len(c)))
    if cycles:
        logger.debug("Detected %d dependency cycles", len(cycles))
    return cycles


def cyclic_nodes(snapshot: GraphSnapshot) -> Set[str]:
    """Nodes in a multi-node SCC or carrying a self-loop."""
    G = snapshot.graph
    nodes: Set[str] = set()
    for scc in nx.strongly_connected_components(G):
        if len(scc) > 1:
            nodes.update(scc)
    nodes.update(n for n in snapshot.node_ids if G.has_edge(n, n))
    return nodes


def _shortest_cycle_through(
    G: nx.DiGraph,
    start: str,
    members: Set[str],
) -> Optional[List[str]]:
    """BFS from *start* inside *members* until an edge leads back to it."""
    parent: Dict[str, Optional[str]] = {start: None}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for succ in sorted(G.successors(node)):
            if succ == start:
                if node == start:
                    continue  # self-loop, reported separately
                path = [node]
                while parent[path[-1]] is not None:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            if succ in members and succ not in parent:
                parent[succ] = node
                queue.append(succ)
    return None


# ---------------------------------------------------------------------------
# Density
# ---------------------------------------------------------------------------

def density(snapshot: GraphSnapshot) -> float:
    """
    Structural edges over the V(V-1) possible directed edges.

    Self-loops are not counted. Fewer than two nodes gives 0.0.
    """
    n = len(snapshot)
    if n < 2:
        return 0.0
    edges = sum(1 for u, v in snapshot.graph.edges if u != v)
    return edges / (n * (n - 1))
