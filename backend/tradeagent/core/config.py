"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "TradeAgent Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Cache
    cache_ttl_seconds: float = 120.0
    redis_url: Optional[str] = None  # In-memory only when unset

    # Upstream market data providers
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    yahoo_chart_base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    http_timeout_seconds: float = 10.0
    fanout_timeout_seconds: float = 10.0

    # LLM gateway (OpenAI-compatible chat completions)
    llm_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    llm_api_key: Optional[str] = None
    llm_model: str = "google/gemini-3-flash-preview"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
