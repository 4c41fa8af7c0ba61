"""Derivation chain: input graph -> displayed graph."""

from __future__ import annotations

from enum import StrEnum

from ..core.models import DependencyGraph, GraphStats
from .aggregation import aggregate_to_directory
from .isolation import filter_isolated_nodes


class Granularity(StrEnum):
    FILE = "file"
    DIRECTORY = "directory"


def derive_graph(
    graph: DependencyGraph,
    granularity: Granularity = Granularity.FILE,
    hide_isolated: bool = True,
) -> DependencyGraph:
    """Aggregate (directory granularity only), then drop isolated nodes."""
    base = aggregate_to_directory(graph) if granularity == Granularity.DIRECTORY else graph
    return filter_isolated_nodes(base, hide_isolated)


def graph_stats(graph: DependencyGraph) -> GraphStats:
    return GraphStats(node_count=len(graph.nodes), edge_count=len(graph.edges))
