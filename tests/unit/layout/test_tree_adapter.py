"""Unit tests for the hierarchical layout adapter."""

import pytest

from repo_topology.core.models import DependencyGraph, ForestNode
from repo_topology.layout.scene import NodeRole, SceneKind
from repo_topology.layout.tree_adapter import TreeLayoutAdapter, calculate_tree_layout
from repo_topology.topology.derive import derive_graph
from repo_topology.topology.forest import build_forest
from repo_topology.topology.search import compute_emphasis


class TestCalculateTreeLayout:
    def test_parent_centred_over_children(self):
        root = ForestNode("r", [ForestNode("a"), ForestNode("b")])

        layout = calculate_tree_layout(root, breadth=100, depth=50)

        assert layout["a"] == (25.0, 50.0)
        assert layout["b"] == (75.0, 50.0)
        assert layout["r"] == (50.0, 0.0)

    def test_depth_is_scaled_to_max_depth(self):
        root = ForestNode("r", [ForestNode("a", [ForestNode("b")]), ForestNode("c")])

        layout = calculate_tree_layout(root, breadth=100, depth=200)

        assert layout["a"][1] == pytest.approx(100.0)
        assert layout["b"][1] == pytest.approx(200.0)
        assert layout["c"][1] == pytest.approx(100.0)

    def test_single_node(self):
        layout = calculate_tree_layout(ForestNode("r"), breadth=80, depth=100)

        assert layout == {"r": (40.0, 0.0)}


class TestTreeLayoutAdapter:
    def test_empty_forest(self):
        scene = TreeLayoutAdapter().render(build_forest(DependencyGraph.empty()), (800, 600))

        assert scene.kind == SceneKind.TREE
        assert scene.is_empty
        assert scene.height == 600

    def test_height_grows_with_leaf_count(self):
        adapter = TreeLayoutAdapter()

        assert adapter.canvas_height(3, 600) == 600
        assert adapter.canvas_height(50, 600) == 50 * 22 + 40

    def test_adjacent_leaves_are_at_least_one_row_apart(self, make_graph):
        graph = make_graph([f"pkg/m{i}.py" for i in range(50)], [])
        forest = build_forest(graph)

        scene = TreeLayoutAdapter().render(forest, (800, 600))

        leaf_ys = sorted(n.y for n in scene.nodes if n.role == NodeRole.LEAF)
        gaps = [b - a for a, b in zip(leaf_ys, leaf_ys[1:])]
        assert scene.height == 50 * 22 + 40
        assert min(gaps) >= 22 - 1e-9

    def test_roles_and_labels(self, small_graph):
        forest = build_forest(derive_graph(small_graph))

        scene = TreeLayoutAdapter().render(forest, (800, 600))

        roles = {n.id: n.role for n in scene.nodes}
        assert roles["(project)"] == NodeRole.ROOT
        assert roles["src/auth/login.ts"] == NodeRole.INTERNAL
        assert roles["src/auth/session.ts"] == NodeRole.LEAF
        assert all(n.label_visible for n in scene.nodes)
        assert scene.translate == (40.0, 20.0)

    def test_links_follow_forest(self, small_graph):
        forest = build_forest(derive_graph(small_graph))

        scene = TreeLayoutAdapter().render(forest, (800, 600))

        assert [(link.source, link.target) for link in scene.links] == [
            ("(project)", "src/auth/login.ts"),
            ("(project)", "src/billing/invoice.ts"),
            ("src/auth/login.ts", "src/auth/session.ts"),
            ("src/auth/login.ts", "src/util.ts"),
        ]

    def test_depth_runs_left_to_right(self, small_graph):
        scene = TreeLayoutAdapter().render(build_forest(derive_graph(small_graph)), (800, 600))

        assert scene.node("(project)").x == 0.0
        assert scene.node("src/auth/login.ts").x < scene.node("src/auth/session.ts").x
        assert scene.node("src/auth/session.ts").x == pytest.approx(800 - 200)

    def test_search_never_dims_super_root(self, small_graph):
        displayed = derive_graph(small_graph)
        emphasis = compute_emphasis(displayed.nodes, "billing")

        scene = TreeLayoutAdapter().render(build_forest(displayed), (800, 600), emphasis)

        assert scene.node("(project)").opacity == 1.0
        assert scene.node("src/billing/invoice.ts").opacity == 1.0
        assert scene.node("src/util.ts").opacity == pytest.approx(0.15)

    def test_node_named_like_super_root_keeps_its_own_position(self, make_graph):
        graph = make_graph(["(project)", "b"], [("(project)", "b")])

        scene = TreeLayoutAdapter().render(build_forest(graph), (800, 600))

        ids = [n.id for n in scene.nodes]
        assert len(ids) == len(set(ids)) == 3
        assert scene.node("(project) 2").role == NodeRole.ROOT
        assert scene.node("(project)").role == NodeRole.INTERNAL
        assert scene.node("(project)").x > scene.node("(project) 2").x
