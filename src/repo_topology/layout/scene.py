"""Render-ready scene descriptions handed to a RenderSurface.

A scene is a complete, self-contained description of what to draw: the
surface never computes layout or styling itself.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from ..topology.search import SearchEmphasis

Position = tuple[float, float]


class SceneKind(StrEnum):
    FORCE = "force"
    TREE = "tree"


class NodeRole(StrEnum):
    NODE = "node"  # Force view node
    ROOT = "root"  # Synthetic super-root of the forest
    INTERNAL = "internal"  # Tree node with children
    LEAF = "leaf"  # Tree node without children


class SceneNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    tooltip: str
    x: float
    y: float
    radius: float
    color: str
    role: NodeRole = NodeRole.NODE
    degree: int = 0
    opacity: float = 1.0
    label_visible: bool = False
    matched: bool = True


class SceneLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    opacity: float = 1.0


class NodeStyle(BaseModel):
    """Emphasis-only update for one node."""

    model_config = ConfigDict(frozen=True)

    opacity: float
    label_visible: bool
    matched: bool


class SceneStyles(BaseModel):
    """Emphasis-only update for a whole scene (search changes)."""

    model_config = ConfigDict(frozen=True)

    search_active: bool
    edge_opacity: float
    nodes: dict[str, NodeStyle] = Field(default_factory=dict)


class Scene(BaseModel):
    """Everything a surface needs to draw one view."""

    model_config = ConfigDict(frozen=True)

    kind: SceneKind
    width: float
    height: float
    translate: Position = (0.0, 0.0)
    nodes: list[SceneNode] = Field(default_factory=list)
    links: list[SceneLink] = Field(default_factory=list)
    search_active: bool = False
    edge_opacity: float = 1.0

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, node_id: str) -> SceneNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def positions(self) -> dict[str, Position]:
        return {n.id: (n.x, n.y) for n in self.nodes}

    def with_positions(self, positions: dict[str, Position]) -> Scene:
        """Copy with node coordinates replaced where ``positions`` has them."""
        nodes = [
            n.model_copy(update={"x": positions[n.id][0], "y": positions[n.id][1]})
            if n.id in positions
            else n
            for n in self.nodes
        ]
        return self.model_copy(update={"nodes": nodes})

    def with_emphasis(self, emphasis: SearchEmphasis) -> Scene:
        """Copy with search emphasis applied (super-root is never dimmed)."""
        nodes = []
        for n in self.nodes:
            e = emphasis.nodes.get(n.id)
            if e is None:
                nodes.append(n)
                continue
            nodes.append(
                n.model_copy(
                    update={
                        "opacity": e.opacity,
                        "label_visible": e.label_visible or n.role != NodeRole.NODE,
                        "matched": e.matched,
                    }
                )
            )
        links = [
            link.model_copy(update={"opacity": emphasis.edge_opacity}) for link in self.links
        ]
        return self.model_copy(
            update={
                "nodes": nodes,
                "links": links,
                "search_active": emphasis.search_active,
                "edge_opacity": emphasis.edge_opacity,
            }
        )

    def styles(self) -> SceneStyles:
        return SceneStyles(
            search_active=self.search_active,
            edge_opacity=self.edge_opacity,
            nodes={
                n.id: NodeStyle(
                    opacity=n.opacity, label_visible=n.label_visible, matched=n.matched
                )
                for n in self.nodes
            },
        )
