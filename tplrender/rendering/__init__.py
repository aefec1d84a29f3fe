"""Recursive template rendering."""

from .engine import Renderer
from .paths import get_output_path

__all__ = ["Renderer", "get_output_path"]
