"""tplrender - recursive Jinja2 template tree renderer.

Renders template files and whole directory trees against a value map,
mirroring the input tree onto an output tree.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main entry points
from .cli import main
from .core.models import MissingKeyPolicy, RendererConfig
from .rendering.engine import Renderer

__all__ = ["MissingKeyPolicy", "Renderer", "RendererConfig", "main"]
