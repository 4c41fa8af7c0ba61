"""Free-text search highlighting."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..config.settings import HighlightSettings


def match_nodes(node_ids: Iterable[str], search_term: str) -> dict[str, bool]:
    """Case-insensitive substring match of ``search_term`` against full ids.

    An empty term matches every node.
    """
    needle = search_term.lower()
    return {node_id: (not needle or needle in node_id.lower()) for node_id in node_ids}


@dataclass(frozen=True)
class NodeEmphasis:
    """Render attributes for a node under the current search."""

    matched: bool
    opacity: float
    label_visible: bool


@dataclass(frozen=True)
class SearchEmphasis:
    """Per-node emphasis plus the global edge opacity."""

    search_active: bool
    nodes: dict[str, NodeEmphasis]
    edge_opacity: float

    def for_node(self, node_id: str) -> NodeEmphasis:
        return self.nodes[node_id]

    @property
    def matched_ids(self) -> list[str]:
        return [node_id for node_id, e in self.nodes.items() if e.matched]


def compute_emphasis(
    node_ids: Iterable[str],
    search_term: str,
    settings: HighlightSettings | None = None,
) -> SearchEmphasis:
    """Emphasis for every node: matches stay opaque, the rest dim.

    Without a search term nothing is dimmed and labels keep their default
    (hover-only) visibility. With a term, edges are dimmed regardless of
    their endpoints.
    """
    settings = settings or HighlightSettings()
    matches = match_nodes(node_ids, search_term)
    active = bool(search_term)

    if not active:
        nodes = {
            node_id: NodeEmphasis(matched=True, opacity=1.0, label_visible=False)
            for node_id in matches
        }
        return SearchEmphasis(search_active=False, nodes=nodes, edge_opacity=1.0)

    nodes = {
        node_id: NodeEmphasis(
            matched=matched,
            opacity=settings.matched_opacity if matched else settings.unmatched_opacity,
            label_visible=matched,
        )
        for node_id, matched in matches.items()
    }
    return SearchEmphasis(
        search_active=True, nodes=nodes, edge_opacity=settings.dimmed_edge_opacity
    )
