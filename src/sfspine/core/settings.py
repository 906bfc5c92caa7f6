"""
Centralized settings for sforce-spine.

All fields can be set via ``SFSPINE_*`` environment variables (e.g.
``SFSPINE_DEFAULT_DIALECT=REST``) or a ``.env`` file.

Tags:
    sforce-spine, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sfspine.core.enums import ApiDialect


class SfSpineSettings(BaseSettings):
    """sforce-spine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SFSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="console | json")
    service_name: str = Field(default="sforce-spine")

    # ── Dialect ──────────────────────────────────────────────────
    default_dialect: ApiDialect = Field(
        default=ApiDialect.SOAP,
        description="Dialect used when a pipeline call does not name one",
    )

    @field_validator("default_dialect", mode="before")
    @classmethod
    def _parse_dialect(cls, value: Any) -> ApiDialect:
        """Accept any tag or alias understood by ``ApiDialect.parse``."""
        parsed = ApiDialect.parse(value)
        if parsed is None:
            raise ValueError(f"Unknown dialect: {value!r}")
        return parsed


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, SfSpineSettings] = {}


def get_settings(*, _force_reload: bool = False) -> SfSpineSettings:
    """Load, validate, and cache a :class:`SfSpineSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = SfSpineSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear cached settings (for testing)."""
    _settings_cache.clear()


__all__ = [
    "SfSpineSettings",
    "get_settings",
    "clear_settings_cache",
]
