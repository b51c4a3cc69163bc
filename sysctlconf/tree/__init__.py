"""Tree conversion and rendering for parsed settings."""

from .builder import TreeBuilder
from .render import render_tree

__all__ = ["TreeBuilder", "render_tree"]
