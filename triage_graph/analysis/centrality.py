"""
Centrality Algorithms

Flow-style importance scores computed over a GraphSnapshot:

    PageRank     power iteration, uniform dangling redistribution
    Betweenness  directed, unweighted Brandes (NetworkX)
    Eigenvector  power iteration on (A + I), exact limit on acyclic graphs
    HITS         alternating hub / authority power iteration

Every iterative loop runs over the snapshot's sorted node order using
numpy index arrays, so the floating-point summation order is fixed.
Hitting the iteration cap is not an error: the last estimate is returned
and a warning is logged.

Direction:
    Snapshot edges run prerequisite -> dependent. PageRank and eigenvector
    follow them, so importance flows towards dependents. HITS reads them
    in depends-on orientation so that hubs are items depending on many
    strong prerequisites and authorities are foundational enablers.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

import networkx as nx
import numpy as np

from triage_graph.core.graph_builder import GraphSnapshot

logger = logging.getLogger(__name__)

DEFAULT_DAMPING: float = 0.85
DEFAULT_TOLERANCE: float = 1e-6
DEFAULT_MAX_ITERATIONS: int = 100


def pagerank(
    snapshot: GraphSnapshot,
    damping: float = DEFAULT_DAMPING,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Dict[str, float]:
    """
    PageRank over the prerequisite -> dependent graph.

    Nodes without outgoing edges spread their mass evenly over all nodes,
    so the scores always sum to 1.0. An edgeless graph yields 1/N each.
    Convergence is an L1 delta below *tolerance* between iterations.
    """
    n = len(snapshot)
    if n == 0:
        return {}

    src, dst = snapshot.edge_sources, snapshot.edge_targets
    out_degree = np.bincount(src, minlength=n).astype(np.float64)
    dangling = out_degree == 0
    inv_out = np.zeros(n, dtype=np.float64)
    inv_out[~dangling] = 1.0 / out_degree[~dangling]

    x = np.full(n, 1.0 / n, dtype=np.float64)
    teleport = (1.0 - damping) / n

    delta = float("inf")
    for iteration in range(1, max_iterations + 1):
        share = x * inv_out
        flow = np.bincount(dst, weights=share[src], minlength=n)
        dangling_mass = x[dangling].sum()
        x_next = damping * (flow + dangling_mass / n) + teleport
        delta = np.abs(x_next - x).sum()
        x = x_next
        if delta < tolerance:
            logger.debug("PageRank converged after %d iterations", iteration)
            break
    else:
        logger.warning(
            "PageRank did not converge within %d iterations (delta=%.3g)",
            max_iterations, delta,
        )

    return _to_map(snapshot, x)


def betweenness(snapshot: GraphSnapshot) -> Dict[str, float]:
    """
    Normalized directed betweenness centrality (Brandes, unweighted).

    Scaled by 1 / ((N-1)(N-2)); nodes that sit on no shortest path
    between two other nodes score 0.
    """
    if len(snapshot) == 0:
        return {}
    scores = nx.betweenness_centrality(snapshot.graph, normalized=True)
    return {nid: float(scores.get(nid, 0.0)) for nid in snapshot.node_ids}


def eigenvector(
    snapshot: GraphSnapshot,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Dict[str, float]:
    """
    Eigenvector centrality: a node is central when its prerequisites are.

    Iterates x <- (A + I)x with L2 normalization after each step. The
    identity shift keeps cyclic graphs from oscillating. Components
    disjoint from the dominant one drift towards zero.

    On an acyclic graph A is nilpotent and the normalized (A + I)^k x tends
    to the last non-zero A^k x, so that limit is computed directly: plain
    A is applied until the next product vanishes. The result does not
    depend on *max_iterations* as long as the cap exceeds the depth of the
    graph. An edgeless graph yields 1/sqrt(N) for every node.
    """
    n = len(snapshot)
    if n == 0:
        return {}

    src, dst = snapshot.edge_sources, snapshot.edge_targets
    x = np.full(n, 1.0 / np.sqrt(n), dtype=np.float64)

    if nx.is_directed_acyclic_graph(snapshot.graph):
        for iteration in range(1, max_iterations + 1):
            x_next = np.bincount(dst, weights=x[src], minlength=n)
            if not x_next.any():
                logger.debug("Eigenvector centrality settled after %d iterations (acyclic)", iteration)
                break
            x = _l2_normalize(x_next)
        else:
            logger.warning(
                "Eigenvector centrality did not settle within %d iterations (acyclic)",
                max_iterations,
            )
        return _to_map(snapshot, x)

    delta = float("inf")
    for iteration in range(1, max_iterations + 1):
        x_last = x
        x = x_last + np.bincount(dst, weights=x_last[src], minlength=n)
        x = _l2_normalize(x)
        delta = np.abs(x - x_last).sum()
        if delta < tolerance:
            logger.debug("Eigenvector centrality converged after %d iterations", iteration)
            break
    else:
        logger.warning(
            "Eigenvector centrality did not converge within %d iterations (delta=%.3g)",
            max_iterations, delta,
        )

    return _to_map(snapshot, x)


def hits(
    snapshot: GraphSnapshot,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    HITS hub and authority scores.

    hub(v)       = sum of authority over v's prerequisites
    authority(u) = sum of hub over u's dependents

    Each half-step is L2-normalized. Without edges every score is 0.

    Returns:
        (hubs, authorities)
    """
    n = len(snapshot)
    if n == 0:
        return {}, {}
    if snapshot.number_of_edges() == 0:
        zeros = {nid: 0.0 for nid in snapshot.node_ids}
        return zeros, dict(zeros)

    src, dst = snapshot.edge_sources, snapshot.edge_targets
    hub = np.full(n, 1.0 / np.sqrt(n), dtype=np.float64)
    auth = hub.copy()

    delta = float("inf")
    for iteration in range(1, max_iterations + 1):
        hub_last, auth_last = hub, auth
        hub = _l2_normalize(np.bincount(dst, weights=auth_last[src], minlength=n))
        auth = _l2_normalize(np.bincount(src, weights=hub[dst], minlength=n))
        delta = np.abs(hub - hub_last).sum() + np.abs(auth - auth_last).sum()
        if delta < tolerance:
            logger.debug("HITS converged after %d iterations", iteration)
            break
    else:
        logger.warning(
            "HITS did not converge within %d iterations (delta=%.3g)",
            max_iterations, delta,
        )

    return _to_map(snapshot, hub), _to_map(snapshot, auth)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _l2_normalize(x: np.ndarray) -> np.ndarray:
    norm = np.sqrt(np.dot(x, x))
    if norm == 0.0:
        return x
    return x / norm


def _to_map(snapshot: GraphSnapshot, x: np.ndarray) -> Dict[str, float]:
    return {nid: float(x[i]) for i, nid in enumerate(snapshot.node_ids)}
