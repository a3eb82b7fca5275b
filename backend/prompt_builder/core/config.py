from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

SERVICE_NAME = "prompt-builder-backend"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "AI Prompt Builder"
    debug: bool = False
    port: int = 8080

    # CORS
    frontend_url: str = ""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    # Preview deployments
    allowed_origin_regex: str | None = r"https://.*\.vercel\.app"

    # LLM provider
    llm_provider: Literal["anthropic", "openai"] = "anthropic"
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    anthropic_model: str = "claude-3-5-haiku-20241022"
    openai_model: str = "gpt-4o-mini"
    generation_max_tokens: int = 1024
    generation_temperature: float = 0.2
    generation_timeout_seconds: float = 30.0

    # Rate limiting (per client IP)
    rate_limit_requests: int = 30
    rate_limit_window_seconds: float = 60.0

    def cors_origins(self) -> list[str]:
        """Return the explicit origin allow-list, including frontend_url when set."""
        origins = list(self.allowed_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.insert(0, self.frontend_url)
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
