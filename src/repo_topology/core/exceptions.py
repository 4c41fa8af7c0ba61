"""Typed exception hierarchy for repo-topology.

Hierarchy
---------
TopologyError (base)
├── GraphDataError   – analyzer output that cannot be read as a dependency graph
├── LayoutError      – layout collaborator misuse (e.g. ticking a stopped simulation)
├── ConfigError      – configuration / validation errors
└── SessionError     – interactive session host errors

The transformation engine itself never raises for degraded input: orphan edge
endpoints, empty graphs, pure cycles and searches without matches are all
handled as regular cases.
"""

from typing import Any


class TopologyError(Exception):
    """Base exception for repo-topology."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class GraphDataError(TopologyError):
    """Analyzer output is missing, not JSON, or not shaped like a dependency graph."""

    pass


class LayoutError(TopologyError):
    """Layout collaborator was used outside its lifecycle."""

    pass


class ConfigError(TopologyError):
    """Configuration errors."""

    pass


class SessionError(TopologyError):
    """Interactive session host errors."""

    pass
