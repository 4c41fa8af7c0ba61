"""Interactive topology session: session bindings, HTTP server and page templates."""

from .server import create_app, find_free_port, start_visualization_server
from .session import SessionHost, SessionSurface

__all__ = [
    "SessionHost",
    "SessionSurface",
    "create_app",
    "find_free_port",
    "start_visualization_server",
]
