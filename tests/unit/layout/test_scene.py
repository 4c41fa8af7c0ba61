"""Unit tests for scene helpers."""

import pytest

from repo_topology.layout.scene import NodeRole, Scene, SceneKind, SceneLink, SceneNode
from repo_topology.topology.search import compute_emphasis


def _node(node_id, role=NodeRole.NODE):
    return SceneNode(
        id=node_id, label=node_id, tooltip=node_id, x=0, y=0, radius=4, color="#000", role=role
    )


@pytest.fixture
def scene():
    return Scene(
        kind=SceneKind.FORCE,
        width=100,
        height=100,
        nodes=[_node("src/auth.ts"), _node("src/billing.ts")],
        links=[SceneLink(source="src/auth.ts", target="src/billing.ts")],
    )


class TestScene:
    def test_with_positions_replaces_known_ids(self, scene):
        moved = scene.with_positions({"src/auth.ts": (10.0, 20.0), "ghost": (1.0, 1.0)})

        assert moved.node("src/auth.ts").x == 10.0
        assert moved.node("src/billing.ts").x == 0.0
        assert scene.node("src/auth.ts").x == 0.0

    def test_with_emphasis(self, scene):
        emphasized = scene.with_emphasis(compute_emphasis(["src/auth.ts", "src/billing.ts"], "auth"))

        assert emphasized.search_active
        assert emphasized.node("src/auth.ts").matched
        assert not emphasized.node("src/billing.ts").matched
        assert emphasized.links[0].opacity == pytest.approx(0.08)

    def test_clearing_search_restores_defaults(self, scene):
        ids = ["src/auth.ts", "src/billing.ts"]
        emphasized = scene.with_emphasis(compute_emphasis(ids, "auth"))

        cleared = emphasized.with_emphasis(compute_emphasis(ids, ""))

        assert not cleared.search_active
        assert all(n.opacity == 1.0 and not n.label_visible for n in cleared.nodes)
        assert cleared.edge_opacity == 1.0

    def test_styles(self, scene):
        styles = scene.with_emphasis(
            compute_emphasis(["src/auth.ts", "src/billing.ts"], "billing")
        ).styles()

        assert styles.search_active
        assert styles.edge_opacity == pytest.approx(0.08)
        assert styles.nodes["src/billing.ts"].label_visible
        assert styles.nodes["src/auth.ts"].opacity == pytest.approx(0.15)

    def test_serializes_to_json(self, scene):
        data = scene.model_dump(mode="json")

        assert data["kind"] == "force"
        assert data["nodes"][0]["role"] == "node"
        assert data["translate"] == [0.0, 0.0]
