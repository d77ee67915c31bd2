"""
Configuration management for the Kerala Horizon API.
Supports multiple LLM providers: OpenAI, Gemini, OpenRouter and an offline mock.
"""
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    environment: Literal["development", "production", "test"] = "development"
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = True
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Auth
    jwt_secret: str = "kerala-horizon-secret"
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Secrets for the document vault seal and payment signatures
    vault_secret: str = "kerala-horizon-vault"
    payment_secret: str = "demo_secret"

    # LLM Configuration
    llm_provider: Literal["openai", "gemini", "openrouter", "mock"] = "mock"
    llm_api_key: str = ""
    llm_base_url: str = ""
    llm_model: str = "gpt-3.5-turbo"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000

    # Third-party APIs
    google_places_api_key: str = ""
    exchange_rate_api_url: str = "https://open.er-api.com/v6/latest"
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    http_timeout_seconds: float = 10.0

    # Search response cache
    cache_ttl_seconds: int = 300

    # Per-IP request budget, in "limits" notation
    rate_limit: str = "100 per 15 minutes"
    rate_limit_enabled: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Global settings instance
settings = Settings()


def get_llm_config() -> dict:
    """Get LLM configuration based on provider."""
    config = {
        "api_key": settings.llm_api_key,
        "model": settings.llm_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }

    # Set base URL based on provider
    if settings.llm_provider == "gemini":
        config["base_url"] = settings.llm_base_url or "https://generativelanguage.googleapis.com/v1beta/openai/"
    elif settings.llm_provider == "openrouter":
        config["base_url"] = settings.llm_base_url or "https://openrouter.ai/api/v1"
    else:  # openai
        config["base_url"] = settings.llm_base_url or "https://api.openai.com/v1"

    return config
