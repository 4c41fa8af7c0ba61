"""Interactive view state machine."""

from .controller import ViewController
from .state import ViewMode, ViewState
from .surface import HostBindings, RenderSurface

__all__ = ["HostBindings", "RenderSurface", "ViewController", "ViewMode", "ViewState"]
