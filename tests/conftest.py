"""Shared fixtures and helpers for graph tests."""

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from dwgraph.core.graph import Graph  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================

SMALL_EDGES = [(1, 4, 3), (2, 4, 2), (1, 1, 2)]

RENDER_EDGES = [
    (4, 1, -4),
    (3, 2, 2),
    (2, 4, 2),
    (2, 1, 1),
    (6, 2, 5),
    (6, 3, 10),
    (1, 5, -1),
    (3, 6, -8),
    (4, 5, 3),
    (5, 2, 7),
]


@pytest.fixture
def small_graph():
    """Nodes 1..4 (inserted out of order) with three edges."""
    G = Graph([1, 3, 4, 2])
    for src, dst, weight in SMALL_EDGES:
        G.insert_edge(src, dst, weight)
    return G


@pytest.fixture
def render_graph():
    """Nodes 1..6 plus an isolated node 64, ten edges."""
    G = Graph([1, 2, 3, 4, 5, 6])
    for src, dst, weight in RENDER_EDGES:
        G.insert_edge(src, dst, weight)
    G.insert_node(64)
    return G


@pytest.fixture
def string_graph():
    """String nodes with float weights, including parallel edges and a self-loop."""
    G = Graph(["c", "a", "b", "d"])
    G.insert_edge("a", "b", 1.5)
    G.insert_edge("a", "b", 0.5)
    G.insert_edge("b", "c", 2.0)
    G.insert_edge("c", "c", 1.0)
    G.insert_edge("d", "a", 3.0)
    return G


# ======================================================================
# HELPERS
# ======================================================================


def assert_graph_invariants(G):
    """Assert ordering, pruning and interning invariants of a graph."""
    nodes = G.nodes()
    assert nodes == sorted(set(nodes)), "nodes() must be strictly ascending"

    edges = list(G)
    assert edges == sorted(set(edges)), "traversal must be strictly ascending"
    assert len(edges) == G.number_of_edges(), "edge counter out of sync"
    assert len(G._nodes._members) == len(nodes), "registry hash and order disagree"

    for src, targets in G._edges.items():
        assert len(targets) > 0, f"source {src!r} kept with no targets"
        assert G.is_node(src)
        for dst, weights in targets.items():
            assert len(weights) > 0, f"target {dst!r} kept with no weights"
            assert G.is_node(dst)
            # one stored instance per distinct node value
            assert src is G._node_store.get(src)
            assert dst is G._node_store.get(dst)
            for weight in weights:
                assert weight is G._weight_store.get(weight)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
