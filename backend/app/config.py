"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache), single instance per process
    - anthropic_api_key has no placeholder default: absence must surface as AUTH_ERROR

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Generation parameters are settings, not constants: deterministic model id,
      generous token budget, high temperature for stylistic variety
    - anthropic_max_retries defaults to 0: a submission makes exactly one model call
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from app.core.domain_types import Locale


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str | None = None
    anthropic_base_url: str | None = None
    anthropic_timeout_seconds: float = 120.0
    anthropic_max_retries: int = Field(0, ge=0)
    anthropic_base_delay_ms: int = 1000
    anthropic_max_delay_ms: int = 60_000

    @field_validator("anthropic_api_key", "anthropic_base_url", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat ANTHROPIC_API_KEY= (empty) the same as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Generation
    card_model: str = "claude-3-7-sonnet-20250219"
    card_max_tokens: int = 8000
    card_temperature: float = Field(1.0, ge=0.0, le=1.0)
    max_input_chars: int = 5000
    default_locale: Locale = Locale.ZH

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
