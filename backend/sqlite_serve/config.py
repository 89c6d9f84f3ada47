"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by an SQLITE_SERVE_* environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - An empty global_templates_dir means "no global directory"

Design Decisions:
    - Process-wide settings here; per-route settings live in the routes file
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SQLITE_SERVE_", case_sensitive=False,
    )

    # Routes
    routes_file: str = "routes.json"
    document_root: str = "."
    global_templates_dir: str | None = None

    @field_validator("global_templates_dir", mode="before")
    @classmethod
    def empty_dir_is_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # HTTP
    template_not_found_status: int = 500
    service_name: str = "sqlite-serve"

    @field_validator("template_not_found_status")
    @classmethod
    def not_found_status_is_404_or_500(cls, v: int) -> int:
        if v not in (404, 500):
            raise ValueError("template_not_found_status must be 404 or 500")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
