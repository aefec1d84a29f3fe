"""Loading and merging of template values."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from ..core.errors import ValuesError

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"^-?\d+$")
_FLOAT_PATTERN = re.compile(r"^-?\d+(?:\.\d+)?$")
_NULLS = ("null", "~")


def coerce_value(value: str) -> bool | int | float | str | None:
    """Read an override value the way a plain YAML scalar would be read.

    Quoted text stays a string with the quotes removed, so ``'"42"'`` is the
    string ``42``. Unquoted ``null``/``~``, ``true``/``false`` and numeric
    literals become None, booleans and numbers.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]

    value_lower = value.lower()
    if value_lower in _NULLS:
        return None
    if value_lower in ("true", "false"):
        return value_lower == "true"
    if _INT_PATTERN.match(value):
        return int(value)
    if _FLOAT_PATTERN.match(value):
        return float(value)
    return value


def load_value_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML or JSON value file.

    Args:
        path: File to load; an empty file yields no values

    Returns:
        Mapping of top-level keys to values

    Raises:
        ValuesError: If the file cannot be read, parsed, or is not a mapping
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValuesError(f"Cannot read values file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValuesError(f"Invalid YAML in values file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValuesError(
            f"Values file {path} must contain a mapping, got {type(data).__name__}"
        )

    logger.debug(f"Loaded {len(data)} key(s) from {path}")
    return data


def merge_values(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base.

    Nested mappings are merged key by key; any other value in override
    replaces the one in base.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_values(current, value)
        else:
            merged[key] = value
    return merged


def parse_set_override(value: str) -> dict[str, Any]:
    """Parse a ``KEY=VALUE`` override into a nested mapping.

    Dots in KEY separate nested keys: ``db.port=5432`` becomes
    ``{"db": {"port": 5432}}``.
    """
    if "=" not in value:
        raise ValuesError(f"Override must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    parts = key.strip().split(".")
    if any(not part for part in parts):
        raise ValuesError(f"Invalid override key: {key!r}")

    nested: dict[str, Any] = {parts[-1]: coerce_value(raw)}
    for part in reversed(parts[:-1]):
        nested = {part: nested}
    return nested


def build_values(
    files: Iterable[str | Path] = (),
    overrides: Iterable[str] = (),
    include_env: bool = False,
) -> dict[str, Any]:
    """Build the value map handed to the renderer.

    Sources are applied in the order given, later ones winning: the
    environment (under ``env``), then each file, then each override.

    Args:
        files: Value files, in precedence order
        overrides: ``KEY=VALUE`` overrides, in precedence order
        include_env: Expose the process environment under ``env``

    Returns:
        Merged value map
    """
    values: dict[str, Any] = {}
    if include_env:
        values["env"] = dict(os.environ)

    for path in files:
        values = merge_values(values, load_value_file(path))

    for override in overrides:
        values = merge_values(values, parse_set_override(override))

    logger.debug(f"Built value map with keys: {list(values)}")
    return values
