"""View controller: the state machine behind one topology view.

State is the product of four independent toggles (view mode, granularity,
fullscreen, isolation) plus two overlays (search term, selection). Changing
a toggle, resizing the container, or replacing the graph rebuilds the whole
derivation chain:

    graph -> aggregate -> filter isolated -> {degrees + force layout | forest + tree layout}

Overlays never rebuild: a search change restyles the current scene and a
selection change recomputes the detail panel.

Everything runs on the host's event loop. A rebuild is synchronous: the
running simulation is stopped, the surface cleared, then redrawn.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from ..config.defaults import ESCAPE_KEY
from ..config.settings import TopologyConfig
from ..core.models import DependencyGraph, Forest, GraphStats, SelectionDetail
from ..layout.force_adapter import ForceLayoutAdapter
from ..layout.scene import Position, Scene
from ..layout.simulation import ForceSimulation
from ..layout.tree_adapter import TreeLayoutAdapter
from ..topology.derive import Granularity, derive_graph, graph_stats
from ..topology.forest import build_forest
from ..topology.search import compute_emphasis
from ..topology.selection import resolve_selection, toggle_selection
from .state import ViewMode, ViewState
from .surface import Cancellable, HostBindings, RenderSurface, Unsubscribe


class ViewController:
    """Coordinates view state, derivation, layout and the render surface."""

    def __init__(
        self,
        graph: DependencyGraph,
        surface: RenderSurface,
        host: HostBindings,
        config: TopologyConfig | None = None,
    ) -> None:
        self.config = config or TopologyConfig()
        self.graph = graph
        self.surface = surface
        self.host = host
        self.state = ViewState(hide_isolated=self.config.hide_isolated)

        self.force_adapter = ForceLayoutAdapter(self.config.force)
        self.tree_adapter = TreeLayoutAdapter(self.config.tree)

        self.displayed: DependencyGraph = DependencyGraph.empty()
        self.forest: Forest | None = None
        self.scene: Scene | None = None
        self.simulation: ForceSimulation | None = None
        self.detail: SelectionDetail | None = None
        self.rebuild_count = 0

        self._positions: dict[str, Position] = {}
        self._unsubscribers: list[Unsubscribe] = []
        self._pending_fullscreen: Cancellable | None = None
        self._mounted = False

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def stats(self) -> GraphStats:
        return graph_stats(self.displayed)

    # -- lifecycle -----------------------------------------------------------

    def mount(self) -> None:
        """Register host listeners and draw the first view."""
        if self._mounted:
            return
        self._mounted = True
        self._unsubscribers = [
            self.host.add_resize_listener(self.handle_resize),
            self.host.add_key_listener(self.handle_key),
        ]
        logger.debug("Topology view mounted")
        self.rebuild()

    def teardown(self) -> None:
        """Stop the simulation, cancel timers and release listeners."""
        if not self._mounted:
            return
        self._mounted = False
        self._stop_simulation()
        self._cancel_pending_fullscreen()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.surface.clear()
        logger.debug("Topology view torn down")

    # -- state transitions -------------------------------------------------

    def set_view_mode(self, view_mode: ViewMode | str) -> None:
        self._transition(view_mode=ViewMode(view_mode))

    def set_granularity(self, granularity: Granularity | str) -> None:
        self._transition(granularity=Granularity(granularity))

    def set_hide_isolated(self, hide_isolated: bool) -> None:
        self._transition(hide_isolated=hide_isolated)

    def toggle_hide_isolated(self) -> None:
        self.set_hide_isolated(not self.state.hide_isolated)

    def set_expanded(self, expanded: bool) -> None:
        self._transition(expanded=expanded)

    def toggle_expanded(self) -> None:
        self.set_expanded(not self.state.expanded)

    def set_search_term(self, search_term: str) -> None:
        self._transition(search_term=search_term)

    def click_node(self, node_id: str) -> None:
        """Select ``node_id``, or clear the selection if it is already selected."""
        if node_id not in self.displayed.node_set():
            logger.debug(f"Ignoring click on undisplayed node {node_id!r}")
            return
        self._transition(
            selected_node_id=toggle_selection(self.state.selected_node_id, node_id)
        )

    def clear_selection(self) -> None:
        self._transition(selected_node_id=None)

    def _transition(self, **changes: Any) -> None:
        new_state = self.state.model_copy(update=changes)
        changed = new_state.changed_fields(self.state)
        if not changed:
            return

        needs_rebuild = new_state.needs_rebuild(self.state)
        needs_deferred_rebuild = new_state.needs_deferred_rebuild(self.state)
        self.state = new_state
        logger.debug(f"View state changed: {sorted(changed)}")

        if not self._mounted:
            return
        if needs_rebuild:
            self.rebuild()
        elif needs_deferred_rebuild:
            self.surface.show_state(self.state, self.stats)
            self._schedule_fullscreen_rebuild()
        elif "search_term" in changed:
            self._refresh_emphasis()
        elif "selected_node_id" in changed:
            self._refresh_detail()

    # -- host events ---------------------------------------------------------

    def handle_resize(self) -> None:
        if self._mounted:
            self.rebuild()

    def handle_key(self, key: str) -> None:
        if key == ESCAPE_KEY and self.state.expanded:
            self.set_expanded(False)

    def replace_graph(self, graph: DependencyGraph) -> None:
        """Swap in a new analysis result and rebuild."""
        self.graph = graph
        logger.debug(f"Graph replaced: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        if self._mounted:
            self.rebuild()

    def drag_node(self, node_id: str, x: float, y: float) -> None:
        if self.simulation is not None:
            self.simulation.pin(node_id, x, y)
            self._positions[node_id] = (x, y)

    def release_node(self, node_id: str) -> None:
        if self.simulation is not None:
            self.simulation.release(node_id)

    # -- rebuild ---------------------------------------------------------------

    def rebuild(self) -> None:
        """Re-derive and redraw everything from the current graph and state."""
        self._stop_simulation()
        self.surface.clear()

        self.displayed = derive_graph(
            self.graph, self.state.granularity, self.state.hide_isolated
        )
        emphasis = compute_emphasis(
            self.displayed.nodes, self.state.search_term, self.config.highlight
        )
        size = self.surface.container_size()

        simulation: ForceSimulation | None = None
        if self.state.view_mode == ViewMode.FORCE:
            self.forest = None
            layout = self.force_adapter.render(self.displayed, size, emphasis)
            self.scene = layout.scene
            simulation = layout.simulation
        else:
            self.forest = build_forest(self.displayed)
            self.scene = self.tree_adapter.render(self.forest, size, emphasis)

        self._positions = self.scene.positions()
        self.surface.draw(self.scene)

        selected = self.state.selected_node_id
        if selected is not None and selected not in self.displayed.node_set():
            self.state = self.state.model_copy(update={"selected_node_id": None})
        self._refresh_detail()
        self.surface.show_state(self.state, self.stats)

        self.rebuild_count += 1
        logger.debug(
            f"Rebuild #{self.rebuild_count}: {self.state.view_mode} / {self.state.granularity}, "
            f"{len(self.displayed.nodes)} nodes, {len(self.displayed.edges)} edges"
        )

        if simulation is not None:
            self.simulation = simulation
            simulation.start(self._on_tick)

    def _on_tick(self, positions: dict[str, Position]) -> None:
        self._positions = positions
        self.surface.move(positions)

    def _refresh_emphasis(self) -> None:
        if self.scene is None:
            return
        emphasis = compute_emphasis(
            self.displayed.nodes, self.state.search_term, self.config.highlight
        )
        self.scene = self.scene.with_emphasis(emphasis)
        self.surface.restyle(self.scene.styles())

    def _refresh_detail(self) -> None:
        self.detail = resolve_selection(self.state.selected_node_id, self.displayed)
        self.surface.show_detail(self.detail)

    def _stop_simulation(self) -> None:
        if self.simulation is not None:
            self.simulation.stop()
            self.simulation = None

    def _schedule_fullscreen_rebuild(self) -> None:
        self._cancel_pending_fullscreen()
        self._pending_fullscreen = self.host.call_later(
            self.config.server.fullscreen_settle_delay, self._fullscreen_settled
        )

    def _cancel_pending_fullscreen(self) -> None:
        if self._pending_fullscreen is not None:
            self._pending_fullscreen.cancel()
            self._pending_fullscreen = None

    def _fullscreen_settled(self) -> None:
        self._pending_fullscreen = None
        if self._mounted:
            self.rebuild()

    # -- snapshot ----------------------------------------------------------------

    def current_scene(self) -> Scene | None:
        """The current scene with the latest simulation positions."""
        if self.scene is None:
            return None
        return self.scene.with_positions(self._positions)

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of everything currently displayed."""
        scene = self.current_scene()
        return {
            "state": self.state.model_dump(mode="json"),
            "scene": scene.model_dump(mode="json") if scene else None,
            "detail": self.detail.model_dump(mode="json") if self.detail else None,
            "stats": self.stats.model_dump(),
        }
