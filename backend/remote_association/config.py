"""Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every variable is prefixed REMOTE_ASSOCIATION_ (e.g. REMOTE_ASSOCIATION_REMOTE_API_BASE_URL)
    - Secrets (remote_api_token) come from the environment, never from code
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults for every non-secret setting: works out of the box against a local API
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="REMOTE_ASSOCIATION_", case_sensitive=False,
    )

    # Remote resource API
    remote_api_base_url: str = "http://localhost:3000"
    remote_api_token: str | None = None
    remote_api_timeout_seconds: float = 30.0
    # "json" appends .json to resource paths (Rails style); "" sends bare paths
    remote_api_format: str = "json"

    # Batch resolution
    batch_concurrent: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("remote_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
