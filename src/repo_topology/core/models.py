"""Data contracts for the dependency topology engine.

DependencyGraph is the input contract produced by the external dependency
analyzer. Every other structure here is derived from it and rebuilt wholesale
whenever the view changes; nothing is mutated across rebuilds.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config.defaults import PATH_SEPARATOR, PROJECT_ROOT_LABEL, ROOT_GROUP


def parent_directory(path: str) -> str:
    """Return the containing directory of ``path``.

    Paths without a separator belong to the root sentinel group.

    Example:
        >>> parent_directory("src/auth/login.ts")
        'src/auth'
        >>> parent_directory("README.md")
        '(root)'
    """
    idx = path.rfind(PATH_SEPARATOR)
    return path[:idx] if idx >= 0 else ROOT_GROUP


def short_label(node_id: str) -> str:
    """Return the last path segment of a node id (used for on-canvas labels)."""
    idx = node_id.rfind(PATH_SEPARATOR)
    return node_id[idx + 1 :] if idx >= 0 else node_id


class DependencyEdge(BaseModel):
    """A directed "depends on" relationship between two nodes."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Dependent node id")
    target: str = Field(..., description="Dependency node id")


class DependencyGraph(BaseModel):
    """Flat node list plus directed edge list over file (or directory) paths.

    Edge endpoints are not required to appear in ``nodes``; such edges are
    orphaned and tolerated by every consumer. Duplicate edges and self-loops
    are accepted as-is.
    """

    model_config = ConfigDict(frozen=True)

    nodes: list[str] = Field(default_factory=list, description="Unique node ids")
    edges: list[DependencyEdge] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def _dedupe_nodes(cls, value: list[str]) -> list[str]:
        # First occurrence wins; order matters for the forest fallback root.
        return list(dict.fromkeys(value))

    @classmethod
    def empty(cls) -> DependencyGraph:
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyGraph:
        """Build a graph from the analyzer JSON shape."""
        return cls.model_validate(
            {"nodes": data.get("nodes") or [], "edges": data.get("edges") or []}
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "edges": [{"source": e.source, "target": e.target} for e in self.edges],
        }

    def node_set(self) -> set[str]:
        return set(self.nodes)

    def resolvable_edges(self) -> list[DependencyEdge]:
        """Edges whose both endpoints are known nodes."""
        known = self.node_set()
        return [e for e in self.edges if e.source in known and e.target in known]


class GraphNode(BaseModel):
    """Render-time node for the force view."""

    model_config = ConfigDict(frozen=True)

    id: str
    group: str = Field(..., description="Parent directory, used for colour only")
    degree: int = Field(default=0, ge=0, description="In + out edge count")

    @property
    def label(self) -> str:
        return short_label(self.id)


class SelectionDetail(BaseModel):
    """Direct neighbourhood of the selected node in the displayed graph."""

    model_config = ConfigDict(frozen=True)

    id: str
    depends_on: list[str] = Field(default_factory=list)
    depended_by: list[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return short_label(self.id)

    @property
    def is_isolated(self) -> bool:
        return not self.depends_on and not self.depended_by


class GraphStats(BaseModel):
    """Counts shown in the status footer."""

    model_config = ConfigDict(frozen=True)

    node_count: int = 0
    edge_count: int = 0


@dataclass
class ForestNode:
    """A node of the hierarchical (tree view) representation."""

    name: str
    children: list[ForestNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def iter_nodes(self) -> Iterator[ForestNode]:
        """Pre-order traversal, including this node."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class Forest:
    """Synthetic super-root owning one sub-tree per root plus singleton leftovers.

    The super-root itself is not a graph node; every graph node appears exactly
    once among its descendants.
    """

    root: ForestNode = field(default_factory=lambda: ForestNode(PROJECT_ROOT_LABEL))

    @property
    def subtrees(self) -> list[ForestNode]:
        return self.root.children

    def node_ids(self) -> list[str]:
        """Ids of every graph node in the forest, pre-order, super-root excluded."""
        return [node.name for node in self.root.iter_nodes()][1:]

    def count(self) -> int:
        return len(self.node_ids())

    def leaves(self) -> list[ForestNode]:
        return [node for node in self.root.iter_nodes() if node.is_leaf]

    def is_empty(self) -> bool:
        return not self.root.children
