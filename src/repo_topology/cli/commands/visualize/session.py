"""Session-side implementations of the view's surface and host bindings.

The browser page is a thin renderer: it forwards user input to the server
and draws whatever frames the surface broadcasts. All frames flow through
one asyncio event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from loguru import logger

from ....config.defaults import DEFAULT_CONTAINER_SIZE
from ....core.models import GraphStats, SelectionDetail
from ....layout.scene import Position, Scene, SceneStyles
from ....view.state import ViewState

Frame = tuple[str, Any]


class SessionSurface:
    """RenderSurface that broadcasts frames to every connected page.

    Each subscriber gets its own bounded queue. When a slow page falls behind,
    its oldest frame is dropped; position frames are superseded by the next
    tick anyway.
    """

    def __init__(
        self,
        size: tuple[float, float] = DEFAULT_CONTAINER_SIZE,
        queue_size: int = 256,
    ) -> None:
        self._size = (float(size[0]), float(size[1]))
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[Frame]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[Frame]:
        queue: asyncio.Queue[Frame] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        logger.debug(f"Page connected ({len(self._subscribers)} subscriber(s))")
        return queue

    def unsubscribe(self, queue: asyncio.Queue[Frame]) -> None:
        self._subscribers.discard(queue)
        logger.debug(f"Page disconnected ({len(self._subscribers)} subscriber(s))")

    def _publish(self, event: str, payload: Any) -> None:
        for queue in self._subscribers:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait((event, payload))

    # -- RenderSurface -----------------------------------------------------

    def set_container_size(self, width: float, height: float) -> None:
        self._size = (max(float(width), 0.0), max(float(height), 0.0))

    def container_size(self) -> tuple[float, float]:
        return self._size

    def clear(self) -> None:
        self._publish("clear", {})

    def draw(self, scene: Scene) -> None:
        self._publish("scene", scene.model_dump(mode="json"))

    def move(self, positions: dict[str, Position]) -> None:
        self._publish(
            "positions",
            {node_id: [round(x, 2), round(y, 2)] for node_id, (x, y) in positions.items()},
        )

    def restyle(self, styles: SceneStyles) -> None:
        self._publish("styles", styles.model_dump(mode="json"))

    def show_detail(self, detail: SelectionDetail | None) -> None:
        self._publish("detail", detail.model_dump(mode="json") if detail else None)

    def show_state(self, state: ViewState, stats: GraphStats) -> None:
        self._publish(
            "state", {"state": state.model_dump(mode="json"), "stats": stats.model_dump()}
        )


class SessionHost:
    """HostBindings backed by page events and the running event loop."""

    def __init__(self) -> None:
        self._resize_listeners: list[Callable[[], None]] = []
        self._key_listeners: list[Callable[[str], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._resize_listeners) + len(self._key_listeners)

    def add_resize_listener(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._resize_listeners.append(callback)
        return lambda: self._remove(self._resize_listeners, callback)

    def add_key_listener(self, callback: Callable[[str], None]) -> Callable[[], None]:
        self._key_listeners.append(callback)
        return lambda: self._remove(self._key_listeners, callback)

    @staticmethod
    def _remove(listeners: list, callback: Callable) -> None:
        if callback in listeners:
            listeners.remove(callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)

    def dispatch_resize(self) -> None:
        for callback in list(self._resize_listeners):
            callback()

    def dispatch_key(self, key: str) -> None:
        for callback in list(self._key_listeners):
            callback(key)
