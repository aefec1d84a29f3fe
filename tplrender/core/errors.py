"""Error types raised while rendering templates."""

from __future__ import annotations

from typing import Sequence


class RenderError(Exception):
    """Base class for every failure of a render call.

    Attributes:
        sources: Template source paths involved, in parse order
        destination: Output destination, when one had been resolved
    """

    def __init__(
        self,
        message: str,
        *,
        sources: Sequence[str] = (),
        destination: str | None = None,
    ) -> None:
        super().__init__(message)
        self.sources = tuple(sources)
        self.destination = destination


class InputError(RenderError):
    """Raised when an input path cannot be opened, stat'ed or listed."""


class ConfigurationError(RenderError, ValueError):
    """Raised when the renderer is asked to do something impossible."""


class OutputError(RenderError):
    """Raised when an output directory or file cannot be created."""


class TemplateParseError(RenderError):
    """Raised when the templates of a render unit fail to parse."""


class TemplateExecutionError(RenderError):
    """Raised when executing a parsed template fails."""


class ValuesError(ValueError):
    """Raised when value files or overrides cannot be loaded."""
