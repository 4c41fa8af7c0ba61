"""Unit tests for the immutable view state."""

import pytest
from pydantic import ValidationError

from repo_topology.topology.derive import Granularity
from repo_topology.view.state import ViewMode, ViewState


class TestViewState:
    def test_defaults(self):
        state = ViewState()

        assert state.view_mode == ViewMode.FORCE
        assert state.granularity == Granularity.FILE
        assert state.expanded is False
        assert state.hide_isolated is True
        assert state.search_term == ""
        assert state.selected_node_id is None

    def test_is_frozen(self):
        with pytest.raises(ValidationError):
            ViewState().expanded = True

    def test_changed_fields(self):
        before = ViewState()
        after = before.model_copy(update={"search_term": "auth", "expanded": True})

        assert after.changed_fields(before) == {"search_term", "expanded"}

    @pytest.mark.parametrize(
        "update",
        [
            {"view_mode": ViewMode.TREE},
            {"granularity": Granularity.DIRECTORY},
            {"hide_isolated": False},
        ],
    )
    def test_toggles_need_rebuild(self, update):
        before = ViewState()

        assert before.model_copy(update=update).needs_rebuild(before)

    @pytest.mark.parametrize(
        "update",
        [{"search_term": "auth"}, {"selected_node_id": "a"}, {"expanded": True}],
    )
    def test_overlays_and_fullscreen_do_not_rebuild_immediately(self, update):
        before = ViewState()

        assert not before.model_copy(update=update).needs_rebuild(before)

    @pytest.mark.parametrize(
        ("update", "deferred"),
        [
            ({"expanded": True}, True),
            ({"search_term": "auth"}, False),
            ({"selected_node_id": "a"}, False),
            ({"view_mode": ViewMode.TREE}, False),
        ],
    )
    def test_only_fullscreen_defers_its_rebuild(self, update, deferred):
        before = ViewState()

        assert before.model_copy(update=update).needs_deferred_rebuild(before) is deferred

    def test_serializes_enums_as_strings(self):
        data = ViewState(view_mode=ViewMode.TREE).model_dump(mode="json")

        assert data["view_mode"] == "tree"
        assert data["granularity"] == "file"
