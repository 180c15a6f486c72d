from __future__ import annotations

from typing import Any

import narwhals as nw
import polars as pl
from narwhals.typing import IntoDataFrame

from ..core.graph import Graph


def to_dataframes(graph: Graph) -> dict[str, pl.DataFrame]:
    """Export graph to Polars DataFrames.

    Returns a dictionary with two tables:
    - 'nodes': one ``node`` column, ascending
    - 'edges': ``source``, ``target``, ``weight``, in ascending traversal order

    Args:
        graph: Graph instance to export

    Returns:
        Dictionary mapping table names to Polars DataFrames

    """
    return {"nodes": graph.nodes_view(), "edges": graph.edges_view()}


def _to_dicts(df: nw.DataFrame[Any]) -> list[dict[str, Any]]:
    """Convert narwhals DataFrame to list of dicts."""
    return [dict(zip(df.columns, row)) for row in df.rows()]


def _get_height(df: nw.DataFrame[Any]) -> int:
    return df.shape[0]


def from_dataframes(
    nodes: IntoDataFrame | None = None,
    edges: IntoDataFrame | None = None,
    *,
    history: bool = True,
) -> Graph:
    """Import a graph from any DataFrame (Pandas, Polars, PyArrow, etc.).

    Accepts DataFrames in the format produced by to_dataframes():

    Nodes DataFrame (optional):
        - Required: node

    Edges DataFrame (optional):
        - Required: source, target, weight

    Edge endpoints missing from the nodes table are added as nodes. Extra
    columns are ignored.

    Args:
        nodes: DataFrame with a ``node`` column
        edges: DataFrame with ``source``, ``target`` and ``weight`` columns
        history: Whether the returned graph records mutation history

    Returns:
        Graph instance

    Raises:
        ValueError: If a required column is missing.

    """
    G = Graph(history=history)

    # 1. Add nodes
    if nodes is not None:
        nodes_nw = nw.from_native(nodes, eager_only=True)
        if _get_height(nodes_nw) > 0:
            if "node" not in nodes_nw.columns:
                raise ValueError("nodes DataFrame must have a 'node' column")
            for row in _to_dicts(nodes_nw):
                G._add_node(row["node"])

    # 2. Add edges (endpoints first)
    if edges is not None:
        edges_nw = nw.from_native(edges, eager_only=True)
        if _get_height(edges_nw) > 0:
            missing = {"source", "target", "weight"} - set(edges_nw.columns)
            if missing:
                raise ValueError(
                    f"edges DataFrame is missing column(s): {', '.join(sorted(missing))}"
                )
            rows = _to_dicts(edges_nw)
            for row in rows:
                G._add_node(row["source"])
                G._add_node(row["target"])
            for row in rows:
                G._link(row["source"], row["target"], row["weight"])

    return G
