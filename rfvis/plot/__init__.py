"""SVG rendering of laid out random forest trees."""

from .styles import BranchColor, LeafColor
from .tree_renderer import render_tree_svg
from .svg import svg_to_string

__all__ = ["BranchColor", "LeafColor", "render_tree_svg", "svg_to_string"]
