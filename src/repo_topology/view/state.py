"""Immutable view state."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from ..topology.derive import Granularity


class ViewMode(StrEnum):
    FORCE = "force"
    TREE = "tree"


# Fields whose change invalidates the derivation chain
REBUILD_FIELDS = ("view_mode", "granularity", "hide_isolated")
# Fullscreen also rebuilds, but only once the container has its new size
DEFERRED_REBUILD_FIELDS = ("expanded",)


class ViewState(BaseModel):
    """Complete state of one topology view.

    Treated as a value: every transition produces a new instance via
    ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    view_mode: ViewMode = ViewMode.FORCE
    granularity: Granularity = Granularity.FILE
    expanded: bool = False
    hide_isolated: bool = True
    search_term: str = ""
    selected_node_id: str | None = None

    def changed_fields(self, other: ViewState) -> set[str]:
        return {name for name in type(self).model_fields if getattr(self, name) != getattr(other, name)}

    def needs_rebuild(self, other: ViewState) -> bool:
        return bool(self.changed_fields(other) & set(REBUILD_FIELDS))

    def needs_deferred_rebuild(self, other: ViewState) -> bool:
        return bool(self.changed_fields(other) & set(DEFERRED_REBUILD_FIELDS))
