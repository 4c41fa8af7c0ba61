"""Per-node degree used for visual sizing in the force view."""

from __future__ import annotations

from ..core.models import DependencyGraph, GraphNode, parent_directory


def calculate_degrees(graph: DependencyGraph) -> dict[str, int]:
    """Combined in + out degree per node.

    Each edge adds one to its source and one to its target. Only edges whose
    both endpoints are in the node list count, so the degrees match the links
    that actually get drawn; other edges are skipped.
    """
    degrees = {node: 0 for node in graph.nodes}
    for edge in graph.edges:
        if edge.source not in degrees or edge.target not in degrees:
            continue
        degrees[edge.source] += 1
        degrees[edge.target] += 1
    return degrees


def build_graph_nodes(graph: DependencyGraph) -> list[GraphNode]:
    """Fresh render-time nodes (id, colour group, degree) for ``graph``."""
    degrees = calculate_degrees(graph)
    return [
        GraphNode(id=node, group=parent_directory(node), degree=degrees[node])
        for node in graph.nodes
    ]
