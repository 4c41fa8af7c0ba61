"""Layout adapters turning derived graphs into drawable scenes."""

from .force_adapter import ForceLayout, ForceLayoutAdapter
from .scene import NodeRole, Scene, SceneKind, SceneLink, SceneNode, SceneStyles
from .simulation import ForceSimulation
from .tree_adapter import TreeLayoutAdapter, calculate_tree_layout

__all__ = [
    "ForceLayout",
    "ForceLayoutAdapter",
    "ForceSimulation",
    "NodeRole",
    "Scene",
    "SceneKind",
    "SceneLink",
    "SceneNode",
    "SceneStyles",
    "TreeLayoutAdapter",
    "calculate_tree_layout",
]
