"""Environment-driven defaults for the command line."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.models import MissingKeyPolicy


class Settings(BaseSettings):
    """Defaults read from ``TPLRENDER_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="TPLRENDER_", case_sensitive=False)

    output: str = "-"
    missing_key: MissingKeyPolicy = MissingKeyPolicy.ZERO_VALUE
    verbose: bool = False
