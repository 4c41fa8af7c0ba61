"""Configuration for the topology views."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.exceptions import ConfigError
from . import defaults


@dataclass
class ForceSettings:
    """Force-directed view parameters."""

    radius_min: float = defaults.NODE_RADIUS_RANGE[0]
    radius_max: float = defaults.NODE_RADIUS_RANGE[1]
    collision_padding: float = defaults.COLLISION_PADDING
    link_distance: float = defaults.LINK_DISTANCE
    charge_strength: float = defaults.CHARGE_STRENGTH
    alpha_min: float = defaults.ALPHA_MIN
    alpha_decay: float = defaults.ALPHA_DECAY
    drag_alpha_target: float = defaults.DRAG_ALPHA_TARGET
    tick_interval: float = defaults.TICK_INTERVAL
    seed: int | None = 42  # Deterministic initial placement


@dataclass
class TreeSettings:
    """Hierarchical view parameters."""

    row_height: float = defaults.TREE_ROW_HEIGHT
    vertical_margin: float = defaults.TREE_VERTICAL_MARGIN
    horizontal_margin: float = defaults.TREE_HORIZONTAL_MARGIN


@dataclass
class HighlightSettings:
    """Search emphasis opacities."""

    matched_opacity: float = defaults.MATCHED_OPACITY
    unmatched_opacity: float = defaults.UNMATCHED_OPACITY
    dimmed_edge_opacity: float = defaults.DIMMED_EDGE_OPACITY


@dataclass
class ServerSettings:
    """Interactive session server parameters."""

    host: str = defaults.DEFAULT_HOST
    port_start: int = defaults.DEFAULT_PORT_RANGE[0]
    port_end: int = defaults.DEFAULT_PORT_RANGE[1]
    fullscreen_settle_delay: float = defaults.FULLSCREEN_SETTLE_DELAY


@dataclass
class TopologyConfig:
    """Complete topology view configuration."""

    force: ForceSettings = field(default_factory=ForceSettings)
    tree: TreeSettings = field(default_factory=TreeSettings)
    highlight: HighlightSettings = field(default_factory=HighlightSettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    hide_isolated: bool = True  # Initial isolation toggle

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def load(cls, path: Path) -> TopologyConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            TopologyConfig instance (defaults when the file does not exist)

        Raises:
            ConfigError: If the file is not valid YAML or holds invalid values
        """
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", {"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration root must be a mapping: {path}", {"path": str(path)}
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TopologyConfig:
        """Create config from dictionary.

        Raises:
            ConfigError: On unknown keys or out-of-range values
        """
        try:
            return cls(
                force=ForceSettings(**data.get("force", {})),
                tree=TreeSettings(**data.get("tree", {})),
                highlight=HighlightSettings(**data.get("highlight", {})),
                server=ServerSettings(**data.get("server", {})),
                hide_isolated=bool(data.get("hide_isolated", True)),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def save(self, path: Path) -> None:
        """Save configuration to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: If a value is out of range
        """
        if not 0 < self.force.radius_min <= self.force.radius_max:
            raise ConfigError(
                "force.radius_min must be positive and <= force.radius_max",
                {"radius_min": self.force.radius_min, "radius_max": self.force.radius_max},
            )
        if self.force.link_distance <= 0:
            raise ConfigError("force.link_distance must be positive")
        if not 0 < self.force.alpha_decay < 1:
            raise ConfigError("force.alpha_decay must be in (0, 1)")
        if not 0 < self.force.alpha_min < 1:
            raise ConfigError("force.alpha_min must be in (0, 1)")
        if self.tree.row_height <= 0:
            raise ConfigError("tree.row_height must be positive")
        for name in ("matched_opacity", "unmatched_opacity", "dimmed_edge_opacity"):
            value = getattr(self.highlight, name)
            if not 0 <= value <= 1:
                raise ConfigError(f"highlight.{name} must be in [0, 1]")
        if self.server.port_start > self.server.port_end:
            raise ConfigError("server.port_start must be <= server.port_end")
