"""Application configuration — environment-driven settings via pydantic-settings.

Every setting can be overridden with a ``JEWELCAT_``-prefixed environment
variable or a ``.env`` file, e.g. ``JEWELCAT_DATA_DIR=/srv/catalog``.
``get_settings()`` is cached: one instance per process.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JEWELCAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = _DEFAULT_DATA_DIR
    catalog_file: str = "catalog.json"
    lock_timeout_seconds: float = 10.0

    # Pricing
    currency: str = "INR"
    default_gst_percentage: Decimal = Decimal("3")

    # Audit identity recorded when the CLI is not told who is acting
    default_actor: str = "admin"

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / self.catalog_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
