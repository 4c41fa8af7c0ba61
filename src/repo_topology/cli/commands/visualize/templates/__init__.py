"""HTML, CSS and JavaScript for the topology page."""

from .base import generate_html_template
from .scripts import get_all_scripts
from .styles import get_all_styles

__all__ = ["generate_html_template", "get_all_scripts", "get_all_styles"]
