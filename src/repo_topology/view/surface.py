"""Host-side interfaces the view controller draws on and listens to."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from ..core.models import GraphStats, SelectionDetail
from ..layout.scene import Position, Scene, SceneStyles
from .state import ViewState

Unsubscribe = Callable[[], None]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class RenderSurface(Protocol):
    """The single drawing surface of a view.

    Every rebuild calls ``clear()`` before drawing, so no element survives
    from one rebuild to the next.
    """

    def container_size(self) -> tuple[float, float]:
        """Current container (width, height) in pixels."""
        ...

    def clear(self) -> None: ...

    def draw(self, scene: Scene) -> None: ...

    def move(self, positions: dict[str, Position]) -> None:
        """Incremental position update from a running simulation."""
        ...

    def restyle(self, styles: SceneStyles) -> None:
        """Apply search emphasis without redrawing."""
        ...

    def show_detail(self, detail: SelectionDetail | None) -> None: ...

    def show_state(self, state: ViewState, stats: GraphStats) -> None:
        """Reflect toolbar toggles and footer counts."""
        ...


class HostBindings(Protocol):
    """Event sources and timers provided by the host UI."""

    def add_resize_listener(self, callback: Callable[[], None]) -> Unsubscribe: ...

    def add_key_listener(self, callback: Callable[[str], None]) -> Unsubscribe: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...
