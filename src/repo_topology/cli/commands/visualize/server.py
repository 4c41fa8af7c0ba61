"""HTTP server hosting the interactive topology session.

One ViewController lives inside the server process. The page posts user
input to ``/api/view`` and receives drawing frames over a server-sent event
stream (``/api/events``).
"""

from __future__ import annotations

import asyncio
import socket
import webbrowser
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Literal

import orjson
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, StreamingResponse
from loguru import logger
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel

from ....config.settings import TopologyConfig
from ....core.exceptions import GraphDataError, SessionError
from ....core.loader import parse_graph
from ....core.models import DependencyGraph
from ....core.watcher import GraphFileWatcher
from ....view.controller import ViewController
from .session import Frame, SessionHost, SessionSurface
from .templates.base import generate_html_template

console = Console()

ViewActionName = Literal[
    "view_mode",
    "granularity",
    "expanded",
    "hide_isolated",
    "search",
    "select",
    "clear_selection",
    "resize",
    "key",
    "drag",
    "release",
]


class ViewAction(BaseModel):
    """User input forwarded from the page."""

    action: ViewActionName
    value: Any = None


def find_free_port(start_port: int = 8080, end_port: int = 8099) -> int:
    """Find a free port in the given range.

    Args:
        start_port: Starting port number to check
        end_port: Ending port number to check

    Returns:
        First available port in the range

    Raises:
        OSError: If no free ports available in range
    """
    for test_port in range(start_port, end_port + 1):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("", test_port))
                return test_port
        except OSError:
            continue
    raise OSError(f"No free ports available in range {start_port}-{end_port}")


def encode_frame(event: str, payload: Any) -> bytes:
    """Serialize one frame as a server-sent event."""
    return b"event: " + event.encode() + b"\ndata: " + orjson.dumps(payload) + b"\n\n"


async def frame_stream(
    surface: SessionSurface, controller: ViewController
) -> AsyncGenerator[bytes, None]:
    """Yield a full snapshot, then every frame the surface publishes."""
    queue: asyncio.Queue[Frame] = surface.subscribe()
    try:
        yield encode_frame("snapshot", controller.snapshot())
        while True:
            event, payload = await queue.get()
            yield encode_frame(event, payload)
    finally:
        surface.unsubscribe(queue)


def _flag(value: Any) -> bool | None:
    """A boolean action value, or None to toggle."""
    if value is None or isinstance(value, bool):
        return value
    raise ValueError(f"Expected true, false or null, got {value!r}")


def apply_action(
    controller: ViewController,
    surface: SessionSurface,
    host: SessionHost,
    action: ViewAction,
) -> None:
    """Route one page action to the controller.

    Raises:
        ValueError: If the value does not fit the action
    """
    value = action.value
    match action.action:
        case "view_mode":
            controller.set_view_mode(value)
        case "granularity":
            controller.set_granularity(value)
        case "expanded":
            flag = _flag(value)
            if flag is None:
                controller.toggle_expanded()
            else:
                controller.set_expanded(flag)
        case "hide_isolated":
            flag = _flag(value)
            if flag is None:
                controller.toggle_hide_isolated()
            else:
                controller.set_hide_isolated(flag)
        case "search":
            controller.set_search_term(str(value or ""))
        case "select":
            if not isinstance(value, str):
                raise ValueError("select expects a node id")
            controller.click_node(value)
        case "clear_selection":
            controller.clear_selection()
        case "resize":
            if not isinstance(value, dict):
                raise ValueError("resize expects {width, height}")
            surface.set_container_size(float(value["width"]), float(value["height"]))
            host.dispatch_resize()
        case "key":
            host.dispatch_key(str(value))
        case "drag":
            if not isinstance(value, dict):
                raise ValueError("drag expects {id, x, y}")
            controller.drag_node(str(value["id"]), float(value["x"]), float(value["y"]))
        case "release":
            node_id = value.get("id") if isinstance(value, dict) else value
            controller.release_node(str(node_id))


def create_app(
    graph: DependencyGraph,
    config: TopologyConfig | None = None,
    watch_path: Path | None = None,
) -> FastAPI:
    """Create FastAPI application for one topology session.

    Args:
        graph: Initial dependency graph
        config: View configuration
        watch_path: Analyzer output file to reload on change (optional)

    Returns:
        Configured FastAPI application; the controller is available as
        ``app.state.controller`` once the app has started
    """
    config = config or TopologyConfig()
    surface = SessionSurface()
    host = SessionHost()
    controller = ViewController(graph, surface, host, config)

    async def _reload(new_graph: DependencyGraph) -> None:
        controller.replace_graph(new_graph)

    watcher = GraphFileWatcher(watch_path, _reload) if watch_path else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        controller.mount()
        if watcher is not None:
            watcher.start(asyncio.get_running_loop())
        try:
            yield
        finally:
            if watcher is not None:
                watcher.stop()
            controller.teardown()

    app = FastAPI(title="Repo Topology", lifespan=lifespan)
    app.state.controller = controller
    app.state.surface = surface
    app.state.host = host

    @app.get("/", response_class=HTMLResponse)
    async def serve_index() -> HTMLResponse:
        """Serve the page with no-cache headers to prevent stale content."""
        return HTMLResponse(
            generate_html_template(),
            headers={
                "Cache-Control": "no-cache, no-store, must-revalidate",
                "Pragma": "no-cache",
                "Expires": "0",
            },
        )

    @app.get("/api/scene")
    async def get_scene() -> dict[str, Any]:
        """Full snapshot: state, scene with current positions, detail, stats."""
        return controller.snapshot()

    @app.get("/api/events")
    async def stream_events() -> StreamingResponse:
        """Server-sent event stream of drawing frames."""
        return StreamingResponse(
            frame_stream(surface, controller),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.post("/api/view")
    async def post_view_action(action: ViewAction) -> dict[str, Any]:
        """Apply one user action and return the resulting state."""
        try:
            apply_action(controller, surface, host, action)
        except (ValueError, KeyError, TypeError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid {action.action}: {e}") from e
        snapshot = controller.snapshot()
        return {k: snapshot[k] for k in ("state", "detail", "stats")}

    @app.post("/api/graph")
    async def replace_graph(payload: dict[str, Any]) -> dict[str, Any]:
        """Replace the dependency graph with a new analysis result."""
        try:
            new_graph = parse_graph(payload)
        except GraphDataError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        controller.replace_graph(new_graph)
        return {"stats": controller.stats.model_dump()}

    return app


def start_visualization_server(
    graph: DependencyGraph,
    port: int,
    config: TopologyConfig | None = None,
    watch_path: Path | None = None,
    auto_open: bool = True,
) -> None:
    """Start the session server and block until interrupted.

    Args:
        graph: Initial dependency graph
        port: Port number to use
        config: View configuration
        watch_path: Analyzer output file to reload on change
        auto_open: Whether to automatically open browser

    Raises:
        SessionError: If the server cannot bind its port
    """
    config = config or TopologyConfig()
    app = create_app(graph, config, watch_path)
    url = f"http://localhost:{port}"

    console.print()
    console.print(
        Panel.fit(
            f"[green]✓[/green] Topology session running\n\n"
            f"URL: [cyan]{url}[/cyan]\n"
            f"Graph: [dim]{len(graph.nodes)} nodes, {len(graph.edges)} edges[/dim]\n"
            + (f"Watching: [dim]{watch_path}[/dim]\n" if watch_path else "")
            + "\n[dim]Press Ctrl+C to stop[/dim]",
            title="Server Started",
            border_style="green",
        )
    )

    if auto_open:
        webbrowser.open(url)

    server_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=port,
        log_level="warning",  # Reduce noise
        access_log=False,
    )
    try:
        uvicorn.Server(server_config).run()
    except OSError as e:
        logger.error(f"Server error: {e}")
        raise SessionError(f"Cannot start server on port {port}: {e}", {"port": port}) from e
