"""Domain models for renderer configuration and render units."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


class MissingKeyPolicy(str, Enum):
    """What happens when a template references a key absent from the values."""

    ERROR = "error"
    ZERO_VALUE = "zero-value"


class InputOrder(str, Enum):
    """How a list of paths is ordered before traversal.

    Caller-supplied inputs keep their order because it may carry meaning;
    children discovered by listing a directory are sorted.
    """

    PRESERVE = "preserve"
    SORTED = "sorted"


class RendererConfig(BaseModel):
    """Immutable configuration of a renderer."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    inputs: tuple[str, ...] = Field(
        default=(), description="Input files or directories, in caller order"
    )
    preload_files: tuple[str, ...] = Field(
        default=(), description="Fragments parsed before every target, in order"
    )
    missing_key: MissingKeyPolicy = Field(
        default=MissingKeyPolicy.ZERO_VALUE, description="Missing key policy"
    )
    helpers: dict[str, Callable[..., Any]] = Field(
        default_factory=dict, description="Helper functions exposed to templates"
    )


class RenderUnit(BaseModel):
    """A set of template sources rendered together into one destination."""

    model_config = ConfigDict(frozen=True)

    sources: tuple[str, ...] = Field(..., min_length=1, description="Parse order")
    output_path: str = Field(..., description="Destination path or '-'")
    # Any keeps the caller's mapping by reference instead of copying it.
    values: Any = Field(default_factory=dict, description="Value map, read-only")

    @property
    def target(self) -> str:
        """The template actually executed; always the last source."""
        return self.sources[-1]
