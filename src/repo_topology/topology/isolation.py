"""Isolated-node suppression."""

from __future__ import annotations

from ..core.models import DependencyGraph


def connected_node_ids(graph: DependencyGraph) -> set[str]:
    """Ids that appear as either endpoint of any edge."""
    connected: set[str] = set()
    for edge in graph.edges:
        connected.add(edge.source)
        connected.add(edge.target)
    return connected


def filter_isolated_nodes(
    graph: DependencyGraph, hide_isolated: bool = True
) -> DependencyGraph:
    """Drop nodes without any incident edge.

    Edges are never removed. With ``hide_isolated`` off the graph is returned
    unchanged.
    """
    if not hide_isolated:
        return graph

    connected = connected_node_ids(graph)
    return DependencyGraph(
        nodes=[node for node in graph.nodes if node in connected],
        edges=list(graph.edges),
    )
