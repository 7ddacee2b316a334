"""
Configuration settings for Race Signal
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Race Signal configuration settings"""

    # Server Configuration
    server_port: int = 3001
    server_host: str = "0.0.0.0"
    log_level: str = "INFO"

    # Use Mock Mode for Testing
    use_real_llm: bool = False
    mock_latency: float = 0.5

    # Inference Service
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("RACESIGNAL_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"),
    )
    gemini_model: str = "gemini-2.5-flash"
    temperature: float = 0.2  # low variance, analytical replies
    request_timeout: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="RACESIGNAL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
