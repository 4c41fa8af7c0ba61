"""Directory-level aggregation of a file-level dependency graph."""

from __future__ import annotations

from ..core.models import DependencyEdge, DependencyGraph, parent_directory


def aggregate_to_directory(graph: DependencyGraph) -> DependencyGraph:
    """Collapse file nodes and edges to their containing directories.

    Edges inside a single directory are dropped. Edges between the same pair
    of directories collapse to one edge (first occurrence wins, no weight is
    kept).

    Example:
        >>> g = DependencyGraph.from_dict({
        ...     "nodes": ["a/x.ts", "a/y.ts", "b/z.ts"],
        ...     "edges": [
        ...         {"source": "a/x.ts", "target": "a/y.ts"},
        ...         {"source": "a/x.ts", "target": "b/z.ts"},
        ...     ],
        ... })
        >>> aggregate_to_directory(g).to_dict()
        {'nodes': ['a', 'b'], 'edges': [{'source': 'a', 'target': 'b'}]}
    """
    nodes = list(dict.fromkeys(parent_directory(node) for node in graph.nodes))

    seen: set[tuple[str, str]] = set()
    edges: list[DependencyEdge] = []
    for edge in graph.edges:
        source_dir = parent_directory(edge.source)
        target_dir = parent_directory(edge.target)
        if source_dir == target_dir:
            continue
        pair = (source_dir, target_dir)
        if pair in seen:
            continue
        seen.add(pair)
        edges.append(DependencyEdge(source=source_dir, target=target_dir))

    return DependencyGraph(nodes=nodes, edges=edges)
