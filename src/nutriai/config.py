"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Settings for the Supabase project, the OpenAI account and the HTTP layer."""

    supabase_url: str
    # Anon key for auth calls; service key for the profiles table.
    supabase_anon_key: str
    supabase_service_key: str
    profiles_table: str = "profiles"
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    chat_idle_timeout_minutes: int = 720
    cors_allowed_origins: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse a comma separated list of browser origins; ``*`` allows any."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    origins = (origin.strip().rstrip("/") for origin in cleaned.split(","))
    return [origin for origin in origins if origin]
