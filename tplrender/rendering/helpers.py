"""Helper functions available to every template."""

from __future__ import annotations

import json
import os
import shlex
from typing import Any, Callable

import yaml
from jinja2 import Undefined


class HelperError(ValueError):
    """Raised by helpers to fail a render with a message."""


def env(name: str, default: str = "") -> str:
    """Return an environment variable, or default when unset."""
    return os.environ.get(name, default)


def required(value: Any, message: str = "required value is missing") -> Any:
    """Return value, failing the render when it is empty."""
    if isinstance(value, Undefined) or value in (None, "", [], {}):
        raise HelperError(message)
    return value


def to_yaml(value: Any) -> str:
    """Serialize value as block-style YAML without a trailing newline."""
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=False).rstrip(
        "\n"
    )


def to_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


def split_csv(text: str) -> list[str]:
    """Split a comma-separated string into stripped, non-empty items."""
    if not text or not str(text).strip():
        return []
    return [item.strip() for item in str(text).split(",") if item.strip()]


def quote(text: Any) -> str:
    return shlex.quote(str(text))


def default_helpers() -> dict[str, Callable[..., Any]]:
    """Return a fresh copy of the default helper registry."""
    return {
        "env": env,
        "required": required,
        "to_yaml": to_yaml,
        "to_json": to_json,
        "split_csv": split_csv,
        "quote": quote,
    }
