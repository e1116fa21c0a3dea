"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the triage-graph test suite.

Edge convention used by every fixture: Dependency(issue, prerequisite)
yields the traversal edge prerequisite -> issue.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ --quick            # Skip slow tests
"""

from typing import Iterable, List, Tuple

import pytest

from triage_graph.core import Dependency, GraphSnapshot, WorkItem, build_snapshot


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Helpers
# =============================================================================

def make_items(ids: Iterable[str]) -> List[WorkItem]:
    return [WorkItem(id=i, title=f"Task {i}") for i in ids]


def make_snapshot(
    ids: Iterable[str],
    edges: Iterable[Tuple[str, str]],
    allow_self_loops: bool = False,
) -> GraphSnapshot:
    """Build a snapshot from traversal edges (prerequisite, dependent)."""
    deps = [Dependency(issue_id=dst, depends_on_id=src, kind="blocks") for src, dst in edges]
    return build_snapshot(make_items(ids), deps, allow_self_loops=allow_self_loops)


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def snapshot_factory():
    """Callable building a snapshot from ids and traversal edges."""
    return make_snapshot


@pytest.fixture
def empty_snapshot():
    """No nodes, no edges."""
    return make_snapshot([], [])


@pytest.fixture
def single_node_snapshot():
    """One isolated node."""
    return make_snapshot(["solo"], [])


@pytest.fixture
def chain_snapshot():
    """A -> B -> C -> D: D depends on C depends on B depends on A."""
    return make_snapshot("ABCD", [("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def triangle_snapshot():
    """A -> B -> C -> A cycle plus isolated D."""
    return make_snapshot("ABCD", [("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def fan_in_snapshot():
    """X depends on P1, P2 and P3."""
    return make_snapshot(
        ["P1", "P2", "P3", "X"],
        [("P1", "X"), ("P2", "X"), ("P3", "X")],
    )


@pytest.fixture
def diamond_snapshot():
    """
    A -> B -> D -> E
    A -> C -> D
    """
    return make_snapshot(
        "ABCDE",
        [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "E")],
    )


@pytest.fixture
def mixed_snapshot():
    """
    Two components plus an isolated node:
        P -> A -> B -> C -> A (cycle entered from P), C -> Z
        X -> Y
        I (isolated)
    """
    return make_snapshot(
        ["A", "B", "C", "I", "P", "X", "Y", "Z"],
        [("P", "A"), ("A", "B"), ("B", "C"), ("C", "A"), ("C", "Z"), ("X", "Y")],
    )
