"""Shared fixtures: sample graphs plus recording fakes for the view's host seams."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from repo_topology.core.models import DependencyGraph


class RecordingSurface:
    """RenderSurface that records every call instead of drawing."""

    def __init__(self, size: tuple[float, float] = (800.0, 600.0)) -> None:
        self.size = size
        self.calls: list[tuple[str, Any]] = []

    def container_size(self) -> tuple[float, float]:
        return self.size

    def clear(self) -> None:
        self.calls.append(("clear", None))

    def draw(self, scene) -> None:
        self.calls.append(("draw", scene))

    def move(self, positions) -> None:
        self.calls.append(("move", positions))

    def restyle(self, styles) -> None:
        self.calls.append(("restyle", styles))

    def show_detail(self, detail) -> None:
        self.calls.append(("detail", detail))

    def show_state(self, state, stats) -> None:
        self.calls.append(("state", (state, stats)))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def last(self, name: str) -> Any:
        for call_name, payload in reversed(self.calls):
            if call_name == name:
                return payload
        return None

    def reset(self) -> None:
        self.calls.clear()


class ManualTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled and not self.fired:
            self.fired = True
            self.callback()


class ManualHost:
    """HostBindings whose events and timers are driven by the test."""

    def __init__(self) -> None:
        self.resize_listeners: list[Callable[[], None]] = []
        self.key_listeners: list[Callable[[str], None]] = []
        self.timers: list[ManualTimer] = []

    def add_resize_listener(self, callback):
        self.resize_listeners.append(callback)
        return lambda: self.resize_listeners.remove(callback)

    def add_key_listener(self, callback):
        self.key_listeners.append(callback)
        return lambda: self.key_listeners.remove(callback)

    def call_later(self, delay, callback):
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def resize(self) -> None:
        for callback in list(self.resize_listeners):
            callback()

    def press(self, key: str) -> None:
        for callback in list(self.key_listeners):
            callback(key)

    def fire_timers(self) -> None:
        for timer in list(self.timers):
            timer.fire()

    @property
    def pending_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def host() -> ManualHost:
    return ManualHost()


@pytest.fixture
def small_graph() -> DependencyGraph:
    """Two directories, one isolated file, one intra-directory edge."""
    return DependencyGraph.from_dict(
        {
            "nodes": [
                "src/auth/login.ts",
                "src/auth/session.ts",
                "src/billing/invoice.ts",
                "src/util.ts",
                "README.md",
            ],
            "edges": [
                {"source": "src/auth/login.ts", "target": "src/auth/session.ts"},
                {"source": "src/auth/login.ts", "target": "src/util.ts"},
                {"source": "src/billing/invoice.ts", "target": "src/util.ts"},
            ],
        }
    )


@pytest.fixture
def cyclic_graph() -> DependencyGraph:
    return DependencyGraph.from_dict(
        {
            "nodes": ["x", "y", "z"],
            "edges": [
                {"source": "x", "target": "y"},
                {"source": "y", "target": "z"},
                {"source": "z", "target": "x"},
            ],
        }
    )


def build_graph(nodes: list[str], edges: list[tuple[str, str]]) -> DependencyGraph:
    return DependencyGraph.from_dict(
        {"nodes": nodes, "edges": [{"source": s, "target": t} for s, t in edges]}
    )


@pytest.fixture
def make_graph() -> Callable[[list[str], list[tuple[str, str]]], DependencyGraph]:
    """Factory: node list plus (source, target) pairs -> DependencyGraph."""
    return build_graph
