# ─────────────────────────────────────────────────────────────────────────────
# Settings — Pydantic v2 BaseSettings
# ─────────────────────────────────────────────────────────────────────────────
# One settings object serves both halves of the repo: the suggestion client
# (endpoint, retry/backoff, fallback delay) and the suggestion server
# (provider key, CORS, rate limit).
# ─────────────────────────────────────────────────────────────────────────────


from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration sourced from environment variables and ``.env``."""

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ── Suggestion client ────────────────────────────────────────────────────
    suggestion_endpoint: str = "http://localhost:3000/api/suggest-font"
    max_retries: int = 3  # total attempts, not extra attempts
    backoff_base_seconds: float = 0.5
    fallback_delay_seconds: float = 0.5
    request_timeout_seconds: float | None = None  # None = wait forever

    # ── AI provider ──────────────────────────────────────────────────────────
    gemini_api_key: SecretStr = SecretStr("")
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    provider_timeout_seconds: float = 30.0

    # ── Server ───────────────────────────────────────────────────────────────
    port: int = 3000
    environment: str = "development"
    allowed_origins: str = "http://localhost:5174"
    suggest_rate_limit: str = "60/minute"
    max_prompt_length: int = 500

    # ── Logging ──────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
