"""Force-directed layout adapter."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from ..config.settings import ForceSettings
from ..core.models import DependencyGraph
from ..topology.degree import build_graph_nodes
from ..topology.search import SearchEmphasis
from .scales import OrdinalColorScale, SqrtScale
from .scene import NodeRole, Scene, SceneKind, SceneLink, SceneNode
from .simulation import ForceSimulation


@dataclass
class ForceLayout:
    """Result of one force-view render: the initial scene and its simulation."""

    scene: Scene
    simulation: ForceSimulation | None


class ForceLayoutAdapter:
    """Builds force-view scenes and their simulations.

    Stateless between calls: every render builds fresh nodes, scales, links
    and a brand-new simulation. Starting the simulation is left to the caller,
    which owns it.
    """

    def __init__(self, settings: ForceSettings | None = None) -> None:
        self.settings = settings or ForceSettings()

    def render(
        self,
        graph: DependencyGraph,
        size: tuple[float, float],
        emphasis: SearchEmphasis | None = None,
    ) -> ForceLayout:
        width, height = size
        if not graph.nodes:
            logger.debug("Force view: nothing to render")
            return ForceLayout(
                scene=Scene(kind=SceneKind.FORCE, width=width, height=height),
                simulation=None,
            )

        nodes = build_graph_nodes(graph)
        max_degree = max((n.degree for n in nodes), default=0)
        radius = SqrtScale(
            max_degree, (self.settings.radius_min, self.settings.radius_max)
        )
        color = OrdinalColorScale(n.group for n in nodes)

        links = [(e.source, e.target) for e in graph.resolvable_edges()]
        radii = {n.id: radius(n.degree) + self.settings.collision_padding for n in nodes}

        simulation = ForceSimulation(
            node_ids=[n.id for n in nodes],
            links=links,
            radii=radii,
            size=size,
            settings=self.settings,
        )
        positions = simulation.positions()

        scene = Scene(
            kind=SceneKind.FORCE,
            width=width,
            height=height,
            nodes=[
                SceneNode(
                    id=n.id,
                    label=n.label,
                    tooltip=f"{n.id}\nDependencies: {n.degree}",
                    x=positions[n.id][0],
                    y=positions[n.id][1],
                    radius=radius(n.degree),
                    color=color(n.group),
                    role=NodeRole.NODE,
                    degree=n.degree,
                )
                for n in nodes
            ],
            links=[SceneLink(source=s, target=t) for s, t in links],
        )
        if emphasis is not None:
            scene = scene.with_emphasis(emphasis)

        logger.debug(
            f"Force view: {len(scene.nodes)} nodes, {len(scene.links)} links, "
            f"max degree {max_degree}"
        )
        return ForceLayout(scene=scene, simulation=simulation)
