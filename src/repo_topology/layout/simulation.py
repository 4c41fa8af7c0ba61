"""Force simulation handle for the force-directed view.

The simulation is a long-running, incrementally stepped process. It is owned
by whoever started it and must be stopped explicitly before it is discarded:
two simulations must never tick against the same canvas.

Physics per tick:
    - Spring/repulsion step: one Fruchterman-Reingold iteration from
      ``networkx.spring_layout(method="force")``, warm-started from the
      current positions and blended in proportionally to ``alpha``. From 500
      nodes networkx switches to its sparse solver.
    - Collision: overlapping circles (degree-scaled radius + padding) are
      pushed apart. Candidate pairs come from a k-d tree, so only nearby
      nodes are compared.
    - Centering: the mean position is moved back onto the canvas centre.

``alpha`` cools d3-style towards ``alpha_target``; the run loop ends once it
drops below ``alpha_min``. Dragging reheats it.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Callable

import networkx as nx
import numpy as np
from loguru import logger
from scipy.spatial import cKDTree

from ..config.defaults import ALPHA_START, CHARGE_STRENGTH
from ..config.settings import ForceSettings
from ..core.exceptions import LayoutError
from .scene import Position

TickCallback = Callable[[dict[str, Position]], None]


class ForceSimulation:
    """Owned handle over one running force layout."""

    def __init__(
        self,
        node_ids: list[str],
        links: list[tuple[str, str]],
        radii: dict[str, float],
        size: tuple[float, float],
        settings: ForceSettings | None = None,
    ) -> None:
        """Initialize simulation.

        Args:
            node_ids: Nodes to place
            links: (source, target) pairs; both endpoints must be in node_ids
            radii: Collision radius per node (padding included)
            size: Canvas (width, height) in pixels
            settings: Force parameters
        """
        self.settings = settings or ForceSettings()
        self.node_ids = list(node_ids)
        self.width, self.height = size
        self.alpha = ALPHA_START
        self.alpha_target = 0.0
        self.tick_count = 0

        self._index = {node_id: i for i, node_id in enumerate(self.node_ids)}
        self._radii = np.array([radii.get(n, 0.0) for n in self.node_ids], dtype=float)
        self._pinned: dict[str, Position] = {}
        self._stopped = False
        self._task: asyncio.Task | None = None
        self._on_tick: TickCallback | None = None

        self._graph = nx.Graph()
        self._graph.add_nodes_from(self.node_ids)
        self._graph.add_edges_from(links)

        # Fruchterman-Reingold optimal distance; stronger repulsion spreads nodes further
        self._k = self.settings.link_distance * math.sqrt(
            abs(self.settings.charge_strength) / abs(CHARGE_STRENGTH)
        )
        self._positions = self._initial_positions()

    # -- state -------------------------------------------------------------

    @property
    def center(self) -> Position:
        return (self.width / 2, self.height / 2)

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_settled(self) -> bool:
        return self.alpha < self.settings.alpha_min

    def positions(self) -> dict[str, Position]:
        return {
            node_id: (float(self._positions[i, 0]), float(self._positions[i, 1]))
            for node_id, i in self._index.items()
        }

    def _initial_positions(self) -> np.ndarray:
        n = len(self.node_ids)
        if n == 0:
            return np.zeros((0, 2))
        rng = np.random.default_rng(self.settings.seed)
        spread = np.array([self.width, self.height]) / 4
        return np.array(self.center) + rng.uniform(-1, 1, size=(n, 2)) * spread

    # -- stepping ----------------------------------------------------------

    def tick(self) -> dict[str, Position]:
        """Advance the simulation by one step and return the new positions.

        Raises:
            LayoutError: If the simulation has been stopped
        """
        if self._stopped:
            raise LayoutError("Cannot tick a stopped simulation")

        self.alpha += (self.alpha_target - self.alpha) * self.settings.alpha_decay
        self.tick_count += 1

        if len(self.node_ids) > 1:
            self._spring_step()
            self._collide()
            self._recenter()
        elif self.node_ids:
            self._positions[0] = self.center
        self._apply_pins()

        return self.positions()

    def _spring_step(self) -> None:
        current = {node_id: self._positions[i] for node_id, i in self._index.items()}
        fixed = [n for n in self._pinned if n in self._index] or None
        stepped = nx.spring_layout(
            self._graph,
            k=self._k,
            pos=current,
            fixed=fixed,
            iterations=1,
            method="force",
            scale=None,
            seed=self.settings.seed,
        )
        target = np.array([stepped[node_id] for node_id in self.node_ids], dtype=float)
        self._positions += (target - self._positions) * self.alpha

    def _collide(self, strength: float = 0.7) -> None:
        if not len(self._radii):
            return
        pairs = cKDTree(self._positions).query_pairs(
            2 * float(self._radii.max()), output_type="ndarray"
        )
        if not len(pairs):
            return

        i, j = pairs[:, 0], pairs[:, 1]
        delta = self._positions[i] - self._positions[j]
        distance = np.hypot(delta[:, 0], delta[:, 1])
        overlap = self._radii[i] + self._radii[j] - distance
        hit = overlap > 0
        if not hit.any():
            return
        i, j, delta, distance, overlap = i[hit], j[hit], delta[hit], distance[hit], overlap[hit]

        # Coincident nodes get an arbitrary but deterministic separation axis
        direction = np.tile([1.0, 0.0], (len(i), 1))
        apart = distance > 0
        direction[apart] = delta[apart] / distance[apart, None]
        push = direction * (overlap * strength / 2)[:, None]

        shift = np.zeros_like(self._positions)
        np.add.at(shift, i, push)
        np.add.at(shift, j, -push)
        self._positions += shift

    def _recenter(self) -> None:
        offset = np.array(self.center) - self._positions.mean(axis=0)
        self._positions += offset

    def _apply_pins(self) -> None:
        for node_id, (x, y) in self._pinned.items():
            i = self._index.get(node_id)
            if i is not None:
                self._positions[i] = (x, y)

    # -- lifecycle ---------------------------------------------------------

    def start(self, on_tick: TickCallback) -> asyncio.Task:
        """Run ticks on the current event loop until settled or stopped.

        Must be called from within a running event loop.

        Raises:
            LayoutError: If the simulation has been stopped
        """
        if self._stopped:
            raise LayoutError("Cannot start a stopped simulation")
        self._on_tick = on_tick
        if not self.is_running:
            self._task = asyncio.get_running_loop().create_task(self._run())
            logger.debug(f"Force simulation started ({len(self.node_ids)} nodes)")
        return self._task

    async def _run(self) -> None:
        while not self._stopped and not self.is_settled:
            positions = self.tick()
            if self._on_tick is not None:
                self._on_tick(positions)
            await asyncio.sleep(self.settings.tick_interval)
        if not self._stopped:
            logger.debug(f"Force simulation settled after {self.tick_count} ticks")

    def restart(self) -> None:
        """Resume ticking after the simulation settled (e.g. on drag)."""
        if self._stopped or self._on_tick is None or self.is_running:
            return
        if self.is_settled:
            self.alpha = max(self.alpha, self.alpha_target, self.settings.alpha_min)
        self.start(self._on_tick)

    def stop(self) -> None:
        """Halt the simulation for good. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._on_tick = None
        logger.debug(f"Force simulation stopped after {self.tick_count} ticks")

    # -- dragging ----------------------------------------------------------

    def pin(self, node_id: str, x: float, y: float) -> None:
        """Hold a node at (x, y) and reheat the simulation."""
        if node_id not in self._index:
            return
        self._pinned[node_id] = (x, y)
        self._positions[self._index[node_id]] = (x, y)
        self.alpha_target = self.settings.drag_alpha_target
        self.restart()

    def release(self, node_id: str) -> None:
        """Let a pinned node move again and let the simulation cool down."""
        self._pinned.pop(node_id, None)
        if not self._pinned:
            self.alpha_target = 0.0
