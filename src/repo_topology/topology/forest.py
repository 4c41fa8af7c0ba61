"""Forest construction for the hierarchical view.

Turns a possibly-cyclic directed graph into a multi-rooted tree:

1. Roots are nodes with in-degree 0. A graph without any (a pure cycle)
   falls back to its first node.
2. Each root grows a depth-first sub-tree. A child is attached only if it has
   not been visited yet, so cycles and shared dependencies never produce
   duplicates or unbounded recursion.
3. Nodes left unvisited afterwards become singleton sub-trees.

Every node of the input graph appears in the forest exactly once.

The rooting rule uses pure in-degree, while node sizing in the force view uses
combined in + out degree (see ``degree.py``). Sources make natural tree roots;
total connectivity makes natural visual weight.
"""

from __future__ import annotations

from collections.abc import Iterator

from loguru import logger

from ..config.defaults import PROJECT_ROOT_LABEL
from ..core.models import DependencyGraph, Forest, ForestNode


def calculate_in_degrees(graph: DependencyGraph) -> dict[str, int]:
    """In-degree per node, counting only edges between known nodes."""
    in_degrees = {node: 0 for node in graph.nodes}
    for edge in graph.edges:
        if edge.source in in_degrees and edge.target in in_degrees:
            in_degrees[edge.target] += 1
    return in_degrees


def build_children_map(graph: DependencyGraph) -> dict[str, list[str]]:
    """Source -> targets adjacency in edge order (duplicates kept)."""
    known = graph.node_set()
    children: dict[str, list[str]] = {}
    for edge in graph.edges:
        if edge.source in known and edge.target in known:
            children.setdefault(edge.source, []).append(edge.target)
    return children


def find_roots(graph: DependencyGraph, in_degrees: dict[str, int]) -> list[str]:
    """Nodes with in-degree 0, or the first node when there are none."""
    roots = [node for node in graph.nodes if in_degrees.get(node, 0) == 0]
    if not roots and graph.nodes:
        logger.debug(f"No root found, falling back to {graph.nodes[0]!r}")
        roots = [graph.nodes[0]]
    return roots


def super_root_label(node_ids: set[str]) -> str:
    """Label for the synthetic super-root that no graph node already uses.

    Example:
        >>> super_root_label({"(project)", "src/a.ts"})
        '(project) 2'
    """
    label = PROJECT_ROOT_LABEL
    suffix = 1
    while label in node_ids:
        suffix += 1
        label = f"{PROJECT_ROOT_LABEL} {suffix}"
    return label


def build_subtree(
    root_id: str, children: dict[str, list[str]], visited: set[str]
) -> ForestNode:
    """Depth-first sub-tree rooted at ``root_id``.

    ``visited`` is shared across all sub-trees of one forest and updated in
    place. Uses an explicit stack so long dependency chains cannot exhaust the
    interpreter recursion limit; attach order is the same as the recursive
    definition.
    """
    visited.add(root_id)
    root = ForestNode(root_id)
    stack: list[tuple[ForestNode, Iterator[str]]] = [
        (root, iter(children.get(root_id, ())))
    ]

    while stack:
        node, pending = stack[-1]
        for child_id in pending:
            if child_id in visited:
                continue
            visited.add(child_id)
            child = ForestNode(child_id)
            node.children.append(child)
            stack.append((child, iter(children.get(child_id, ()))))
            break
        else:
            stack.pop()

    return root


def build_forest(graph: DependencyGraph) -> Forest:
    """Build the forest covering every node of ``graph`` exactly once."""
    if not graph.nodes:
        return Forest()
    forest = Forest(root=ForestNode(super_root_label(graph.node_set())))

    in_degrees = calculate_in_degrees(graph)
    children = build_children_map(graph)
    roots = find_roots(graph, in_degrees)

    visited: set[str] = set()
    for root_id in roots:
        if root_id in visited:
            continue
        forest.root.children.append(build_subtree(root_id, children, visited))

    leftovers = [node for node in graph.nodes if node not in visited]
    forest.root.children.extend(ForestNode(node) for node in leftovers)

    logger.debug(
        f"Forest built: {len(roots)} root(s), {len(leftovers)} unreachable node(s), "
        f"{len(graph.nodes)} total"
    )
    return forest
