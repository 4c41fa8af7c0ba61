"""Loading analyzer output into a DependencyGraph."""

from pathlib import Path
from typing import Any

import orjson
from loguru import logger
from pydantic import ValidationError

from .exceptions import GraphDataError
from .models import DependencyGraph


def parse_graph(payload: Any) -> DependencyGraph:
    """Validate an already-decoded analyzer payload.

    Args:
        payload: Decoded JSON value, expected ``{"nodes": [...], "edges": [...]}``

    Returns:
        DependencyGraph

    Raises:
        GraphDataError: If the payload is not shaped like a dependency graph
    """
    if not isinstance(payload, dict):
        raise GraphDataError(
            "Dependency graph must be a JSON object with 'nodes' and 'edges'",
            {"type": type(payload).__name__},
        )
    try:
        graph = DependencyGraph.from_dict(payload)
    except ValidationError as e:
        raise GraphDataError(
            f"Invalid dependency graph: {e.error_count()} validation error(s)",
            {"errors": e.errors(include_url=False)},
        ) from e

    orphaned = len(graph.edges) - len(graph.resolvable_edges())
    if orphaned:
        logger.debug(f"{orphaned} edge(s) reference nodes outside the node list")
    return graph


def load_graph(path: Path) -> DependencyGraph:
    """Load a dependency graph from an analyzer JSON file.

    Raises:
        GraphDataError: If the file is missing, unreadable, or malformed
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise GraphDataError(f"Cannot read {path}: {e}", {"path": str(path)}) from e

    try:
        payload = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        raise GraphDataError(f"{path} is not valid JSON: {e}", {"path": str(path)}) from e

    graph = parse_graph(payload)
    logger.debug(f"Loaded {len(graph.nodes)} nodes and {len(graph.edges)} edges from {path}")
    return graph
