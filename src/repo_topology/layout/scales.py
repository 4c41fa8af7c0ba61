"""Visual scales shared by the layout adapters."""

from __future__ import annotations

import math
from collections.abc import Iterable

from ..config.defaults import NODE_RADIUS_RANGE, TABLEAU10


class SqrtScale:
    """Square-root mapping from ``[0, domain_max]`` onto ``range``.

    Mirrors d3.scaleSqrt with a zero-based domain. Inputs outside the domain
    are not clamped.
    """

    def __init__(
        self,
        domain_max: float,
        output_range: tuple[float, float] = NODE_RADIUS_RANGE,
    ) -> None:
        self.domain_max = max(domain_max, 1)
        self.range_min, self.range_max = output_range

    def __call__(self, value: float) -> float:
        ratio = math.sqrt(max(value, 0)) / math.sqrt(self.domain_max)
        return self.range_min + (self.range_max - self.range_min) * ratio


class OrdinalColorScale:
    """Categorical palette keyed by group name, assigned in first-seen order."""

    def __init__(self, groups: Iterable[str] = (), palette: list[str] | None = None):
        self.palette = palette or TABLEAU10
        self._index: dict[str, int] = {}
        for group in groups:
            self(group)

    def __call__(self, group: str) -> str:
        if group not in self._index:
            self._index[group] = len(self._index)
        return self.palette[self._index[group] % len(self.palette)]

    @property
    def domain(self) -> list[str]:
        return list(self._index)
