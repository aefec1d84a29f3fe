"""CLI argument parsers and validators."""

from __future__ import annotations

from typing import Optional

import typer

from ..core.errors import ValuesError
from ..core.models import MissingKeyPolicy
from ..values.loader import parse_set_override


def validate_overrides(values: Optional[list[str]]) -> list[str]:
    """Reject malformed KEY=VALUE overrides before anything is rendered."""
    for value in values or []:
        try:
            parse_set_override(value)
        except ValuesError as e:
            raise typer.BadParameter(str(e)) from e
    return values or []


def resolve_missing_key(
    missing_key: Optional[MissingKeyPolicy],
    stop_on_error: bool,
    default: MissingKeyPolicy,
) -> MissingKeyPolicy:
    """Pick the missing key policy from flags, falling back to settings."""
    if stop_on_error:
        if missing_key not in (None, MissingKeyPolicy.ERROR):
            raise typer.BadParameter(
                "--stop-on-error conflicts with --missing-key zero-value"
            )
        return MissingKeyPolicy.ERROR
    return missing_key or default
