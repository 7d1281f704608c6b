"""
Application Configuration - Environment settings and constants.

Loads configuration from environment variables (prefixed with VERNO_)
with sensible defaults. Uses Pydantic Settings for validation and type safety.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Usage:
        from verno.core.config import get_settings
        settings = get_settings()
    """

    model_config = SettingsConfigDict(
        env_prefix="VERNO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Verno Agent Pipeline"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # HTTP Server Configuration
    api_prefix: str = "/api/v1"
    server_host: str = "127.0.0.1"
    server_port: int = 8000
    allowed_origins: List[str] = ["*"]

    # Workspace state layout (relative to the workspace root)
    state_dir: str = ".verno"
    todos_dir: str = "todos"
    generated_dir: str = "generated"

    # LLM Configuration (any OpenAI-compatible endpoint)
    llm_base_url: str = "https://api.openai.com/v1"
    llm_api_key: Optional[str] = None
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000
    llm_timeout_seconds: float = 120.0


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
