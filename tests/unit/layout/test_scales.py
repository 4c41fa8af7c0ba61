"""Unit tests for visual scales."""

import pytest

from repo_topology.config.defaults import TABLEAU10
from repo_topology.layout.scales import OrdinalColorScale, SqrtScale


class TestSqrtScale:
    def test_endpoints(self):
        scale = SqrtScale(16, (4, 16))

        assert scale(0) == pytest.approx(4)
        assert scale(16) == pytest.approx(16)

    def test_square_root_midpoint(self):
        scale = SqrtScale(16, (0, 16))

        assert scale(4) == pytest.approx(8)

    def test_zero_max_degree_does_not_divide_by_zero(self):
        scale = SqrtScale(0, (4, 16))

        assert scale(0) == pytest.approx(4)

    def test_monotonic(self):
        scale = SqrtScale(10)
        values = [scale(d) for d in range(11)]

        assert values == sorted(values)


class TestOrdinalColorScale:
    def test_first_seen_order(self):
        scale = OrdinalColorScale(["b", "a", "b"])

        assert scale.domain == ["b", "a"]
        assert scale("b") == TABLEAU10[0]
        assert scale("a") == TABLEAU10[1]

    def test_same_group_same_colour(self):
        scale = OrdinalColorScale()

        assert scale("src/auth") == scale("src/auth")

    def test_palette_wraps(self):
        scale = OrdinalColorScale(f"g{i}" for i in range(11))

        assert scale("g10") == scale("g0")
