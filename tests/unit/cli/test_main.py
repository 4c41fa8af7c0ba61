"""Tests for the command-line interface."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from repo_topology import __version__
from repo_topology.cli.main import app
from repo_topology.core.exceptions import SessionError


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "deps.json"
    path.write_text('{"nodes": ["a", "b"], "edges": [{"source": "a", "target": "b"}]}')
    return path


class TestVersionCommand:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestServeCommand:
    def test_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["serve", str(tmp_path / "missing.json")])

        assert result.exit_code != 0

    def test_malformed_graph(self, cli_runner, tmp_path):
        path = tmp_path / "deps.json"
        path.write_text("[1, 2")

        result = cli_runner.invoke(app, ["serve", str(path), "--no-open"])

        assert result.exit_code == 1
        assert "not valid JSON" in " ".join(result.output.split())

    def test_invalid_config(self, cli_runner, graph_file, tmp_path):
        config_path = tmp_path / "topology.yaml"
        config_path.write_text("force:\n  link_distance: -1\n")

        result = cli_runner.invoke(
            app, ["serve", str(graph_file), "--config", str(config_path)]
        )

        assert result.exit_code == 1

    def test_starts_session(self, cli_runner, graph_file):
        with patch(
            "repo_topology.cli.commands.serve.start_visualization_server"
        ) as start, patch(
            "repo_topology.cli.commands.serve.find_free_port", return_value=8085
        ):
            result = cli_runner.invoke(app, ["serve", str(graph_file), "--no-open"])

        assert result.exit_code == 0
        start.assert_called_once()
        graph = start.call_args.args[0]
        assert graph.nodes == ["a", "b"]
        assert start.call_args.kwargs["port"] == 8085
        assert start.call_args.kwargs["auto_open"] is False
        assert start.call_args.kwargs["watch_path"] == graph_file

    def test_explicit_port_without_watch(self, cli_runner, graph_file):
        with patch(
            "repo_topology.cli.commands.serve.start_visualization_server"
        ) as start, patch("repo_topology.cli.commands.serve.find_free_port") as find_port:
            result = cli_runner.invoke(
                app, ["serve", str(graph_file), "--port", "9001", "--no-watch"]
            )

        assert result.exit_code == 0
        find_port.assert_not_called()
        assert start.call_args.kwargs["port"] == 9001
        assert start.call_args.kwargs["watch_path"] is None

    def test_session_error_exits_1(self, cli_runner, graph_file):
        with patch(
            "repo_topology.cli.commands.serve.start_visualization_server",
            side_effect=SessionError("port busy"),
        ), patch("repo_topology.cli.commands.serve.find_free_port", return_value=8085):
            result = cli_runner.invoke(app, ["serve", str(graph_file), "--no-open"])

        assert result.exit_code == 1
        assert "port busy" in result.output
