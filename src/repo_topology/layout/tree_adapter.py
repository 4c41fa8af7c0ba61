"""Hierarchical (tree) layout adapter.

The canvas grows with the number of leaves so sibling labels never overlap:
``height = max(container_height, leaf_count * row_height + vertical_margin)``.
Leaves are spread evenly along the breadth axis, so adjacent leaves are at
least ``row_height`` apart; parents sit midway between their first and last
child. Depth runs left to right.
"""

from __future__ import annotations

from loguru import logger

from ..config.defaults import TREE_INTERNAL_COLOR, TREE_LEAF_COLOR, TREE_NODE_RADIUS, TREE_TRANSLATE
from ..config.settings import TreeSettings
from ..core.models import Forest, ForestNode, short_label
from ..topology.search import SearchEmphasis
from .scene import NodeRole, Position, Scene, SceneKind, SceneLink, SceneNode


def calculate_tree_layout(
    root: ForestNode, breadth: float, depth: float
) -> dict[str, Position]:
    """Tidy layout of a tree within a ``breadth`` x ``depth`` box.

    Args:
        root: Tree root
        breadth: Extent along the sibling axis (vertical on screen)
        depth: Extent along the depth axis (horizontal on screen)

    Returns:
        Dictionary mapping node name -> (breadth_pos, depth_pos)

    Time Complexity: O(n)
    """
    order = list(root.iter_nodes())  # Pre-order: leaves appear left to right
    depths: dict[int, int] = {id(root): 0}
    for node in order:
        for child in node.children:
            depths[id(child)] = depths[id(node)] + 1

    max_depth = max(depths.values())
    depth_step = depth / max_depth if max_depth else 0.0

    leaves = [node for node in order if node.is_leaf]
    spacing = breadth / len(leaves)

    along: dict[int, float] = {}
    for i, leaf in enumerate(leaves):
        along[id(leaf)] = (i + 0.5) * spacing

    # Reverse pre-order visits children before their parent
    for node in reversed(order):
        if node.children:
            along[id(node)] = (along[id(node.children[0])] + along[id(node.children[-1])]) / 2

    return {node.name: (along[id(node)], depths[id(node)] * depth_step) for node in order}


class TreeLayoutAdapter:
    """Builds tree-view scenes from a Forest."""

    def __init__(self, settings: TreeSettings | None = None) -> None:
        self.settings = settings or TreeSettings()

    def canvas_height(self, leaf_count: int, container_height: float) -> float:
        return max(
            container_height,
            leaf_count * self.settings.row_height + self.settings.vertical_margin,
        )

    def render(
        self,
        forest: Forest,
        size: tuple[float, float],
        emphasis: SearchEmphasis | None = None,
    ) -> Scene:
        width, container_height = size
        if forest.is_empty():
            logger.debug("Tree view: nothing to render")
            return Scene(kind=SceneKind.TREE, width=width, height=container_height)

        leaf_count = len(forest.leaves())
        height = self.canvas_height(leaf_count, container_height)
        layout = calculate_tree_layout(
            forest.root,
            breadth=height - self.settings.vertical_margin,
            depth=max(width - self.settings.horizontal_margin, 0.0),
        )

        nodes: list[SceneNode] = []
        links: list[SceneLink] = []
        for node in forest.root.iter_nodes():
            breadth_pos, depth_pos = layout[node.name]
            if node is forest.root:
                role = NodeRole.ROOT
            elif node.children:
                role = NodeRole.INTERNAL
            else:
                role = NodeRole.LEAF
            nodes.append(
                SceneNode(
                    id=node.name,
                    label=short_label(node.name),
                    tooltip=node.name,
                    x=depth_pos,
                    y=breadth_pos,
                    radius=TREE_NODE_RADIUS,
                    color=TREE_INTERNAL_COLOR if node.children else TREE_LEAF_COLOR,
                    role=role,
                    label_visible=True,
                )
            )
            links.extend(SceneLink(source=node.name, target=c.name) for c in node.children)

        scene = Scene(
            kind=SceneKind.TREE,
            width=width,
            height=height,
            translate=TREE_TRANSLATE,
            nodes=nodes,
            links=links,
        )
        if emphasis is not None:
            scene = scene.with_emphasis(emphasis)

        logger.debug(f"Tree view: {len(nodes) - 1} nodes, {leaf_count} leaves, height {height:.0f}px")
        return scene
