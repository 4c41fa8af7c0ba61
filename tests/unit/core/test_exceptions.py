"""Tests for the typed exception hierarchy."""

import pytest

from repo_topology.core.exceptions import (
    ConfigError,
    GraphDataError,
    LayoutError,
    SessionError,
    TopologyError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize("cls", [GraphDataError, LayoutError, ConfigError, SessionError])
    def test_subclasses_inherit_from_base(self, cls):
        assert isinstance(cls("boom"), TopologyError)

    def test_context_defaults_to_empty_dict(self):
        assert TopologyError("boom").context == {}

    def test_context_is_kept(self):
        err = GraphDataError("bad", {"path": "deps.json"})

        assert err.context == {"path": "deps.json"}
        assert str(err) == "bad"

    def test_base_is_exported_from_package_root(self):
        from repo_topology import TopologyError as Exported

        assert Exported is TopologyError
