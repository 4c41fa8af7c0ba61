"""Repo Topology - interactive dependency topology views for analyzed repositories."""

__version__ = "0.3.2"
__author__ = "Robert Matsuoka"

from .core.exceptions import TopologyError
from .core.models import DependencyEdge, DependencyGraph

__all__ = ["DependencyEdge", "DependencyGraph", "TopologyError", "__version__"]
