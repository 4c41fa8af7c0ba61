"""Graph transforms behind the topology views.

All functions are pure: they take a DependencyGraph (plus view flags) and
return new structures.
"""

from .aggregation import aggregate_to_directory
from .degree import build_graph_nodes, calculate_degrees
from .derive import Granularity, derive_graph, graph_stats
from .forest import build_forest
from .isolation import filter_isolated_nodes
from .search import SearchEmphasis, compute_emphasis, match_nodes
from .selection import resolve_selection, toggle_selection

__all__ = [
    "Granularity",
    "SearchEmphasis",
    "aggregate_to_directory",
    "build_forest",
    "build_graph_nodes",
    "calculate_degrees",
    "compute_emphasis",
    "derive_graph",
    "filter_isolated_nodes",
    "graph_stats",
    "match_nodes",
    "resolve_selection",
    "toggle_selection",
]
