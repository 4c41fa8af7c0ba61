"""Selected-node neighbourhood lookup."""

from __future__ import annotations

from ..core.models import DependencyGraph, SelectionDetail


def toggle_selection(current: str | None, clicked: str) -> str | None:
    """Clicking the selected node clears the selection; any other selects it."""
    return None if current == clicked else clicked


def resolve_selection(
    node_id: str | None, graph: DependencyGraph
) -> SelectionDetail | None:
    """Direct dependencies and dependents of ``node_id`` in the displayed graph.

    Computed from the displayed (aggregated/filtered) edge list so the panel
    matches what is on screen.
    """
    if node_id is None:
        return None

    depends_on = [e.target for e in graph.edges if e.source == node_id]
    depended_by = [e.source for e in graph.edges if e.target == node_id]
    return SelectionDetail(id=node_id, depends_on=depends_on, depended_by=depended_by)
