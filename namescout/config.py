"""
NameScout - Configuration
Loads environment variables and provides typed settings via Pydantic.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # ── App ──
    APP_NAME: str = "NameScout"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # ── AI / GenAI ──
    GOOGLE_API_KEY: str = ""
    GENAI_MODEL: str = "gemini-2.0-flash"

    # ── AI admission (durable, per UTC day) ──
    RATE_LIMIT_FILE: str = "data/ai-rate-limits.json"
    AI_DAILY_LIMIT: int = 50
    AI_COOLDOWN_SECONDS: int = 60
    COOLDOWN_SWEEP_THRESHOLD: int = 50

    # ── Edge limiter (in-memory, every /api/ request) ──
    EDGE_RATE_LIMIT_MAX: int = 20
    EDGE_RATE_LIMIT_WINDOW_SECONDS: int = 60

    # ── Availability checkers ──
    DNS_RESOLVER_URL: str = "https://dns.google/resolve"
    DOMAIN_CHECK_TIMEOUT_SECONDS: float = 5.0
    SOCIAL_CHECK_TIMEOUT_SECONDS: float = 8.0

    # ── CORS ──
    CORS_ORIGINS: list[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    """Cached singleton for app settings."""
    return Settings()
