"""Watch the analyzer output file and reload it after a new analysis run."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from concurrent.futures import Future
from pathlib import Path

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .exceptions import GraphDataError
from .loader import load_graph
from .models import DependencyGraph


class GraphFileHandler(FileSystemEventHandler):
    """Handler for changes to a single graph file."""

    def __init__(
        self,
        graph_path: Path,
        callback: Callable[[DependencyGraph], Awaitable[None]],
        loop: asyncio.AbstractEventLoop,
        debounce_delay: float = 0.5,
    ):
        """Initialize file handler.

        Args:
            graph_path: Analyzer output file to watch
            callback: Async callback receiving the reloaded graph
            loop: Event loop to schedule reloads on
            debounce_delay: Delay in seconds to debounce rapid writes
        """
        super().__init__()
        self.graph_path = graph_path.resolve()
        self.callback = callback
        self.loop = loop
        self.debounce_delay = debounce_delay
        self.last_change_time: float = 0
        self.debounce_task: Future | None = None

    def _is_graph_file(self, path: str | bytes) -> bool:
        if isinstance(path, bytes):
            path = path.decode()
        return Path(path).resolve() == self.graph_path

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_graph_file(event.src_path):
            self._schedule_reload()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_graph_file(event.src_path):
            self._schedule_reload()

    def on_moved(self, event: FileSystemEvent) -> None:
        # Analyzers commonly write a temp file and rename it into place
        if not event.is_directory and self._is_graph_file(event.dest_path):
            self._schedule_reload()

    def _schedule_reload(self) -> None:
        self.last_change_time = time.time()

        if self.debounce_task and not self.debounce_task.done():
            self.debounce_task.cancel()

        self.debounce_task = asyncio.run_coroutine_threadsafe(
            self._debounced_reload(), self.loop
        )

    async def _debounced_reload(self) -> None:
        await asyncio.sleep(self.debounce_delay)

        if time.time() - self.last_change_time < self.debounce_delay:
            return

        try:
            graph = load_graph(self.graph_path)
        except GraphDataError as e:
            # Keep showing the previous graph until the file is valid again
            logger.warning(f"Ignoring unreadable graph update: {e}")
            return

        logger.info(
            f"Reloaded {self.graph_path.name}: {len(graph.nodes)} nodes, {len(graph.edges)} edges"
        )
        await self.callback(graph)


class GraphFileWatcher:
    """Reloads a dependency graph file whenever it is rewritten."""

    def __init__(
        self,
        graph_path: Path,
        callback: Callable[[DependencyGraph], Awaitable[None]],
        debounce_delay: float = 0.5,
    ):
        self.graph_path = graph_path
        self.callback = callback
        self.debounce_delay = debounce_delay
        self.observer: Observer | None = None
        self.handler: GraphFileHandler | None = None

    @property
    def is_running(self) -> bool:
        return self.observer is not None and self.observer.is_alive()

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        """Start watching the graph file's directory."""
        if self.is_running:
            logger.warning("Graph watcher is already running")
            return

        self.handler = GraphFileHandler(
            self.graph_path, self.callback, loop, self.debounce_delay
        )
        self.observer = Observer()
        self.observer.schedule(
            self.handler, str(self.graph_path.resolve().parent), recursive=False
        )
        self.observer.start()
        logger.info(f"Watching {self.graph_path} for new analysis results")

    def stop(self) -> None:
        """Stop watching."""
        if self.observer is None:
            return

        if self.handler and self.handler.debounce_task:
            self.handler.debounce_task.cancel()

        self.observer.stop()
        self.observer.join(timeout=5.0)
        self.observer = None
        self.handler = None
        logger.info("Stopped graph watcher")
