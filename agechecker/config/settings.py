"""Application configuration settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class TelegramSettings(BaseSettings):
    """Telegram Bot API configuration."""

    bot_token: str = Field(default="")
    api_base_url: str = "https://api.telegram.org"
    timeout: float = 10.0

    # Pause before each upstream lookup to stay clear of Bot API flood limits
    request_delay_seconds: float = 1.0

    class Config:
        env_prefix = "TELEGRAM_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class Settings(BaseSettings):
    """Main application settings."""

    app_name: str = "Telegram Account Age Checker API"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=3000, validation_alias="PORT")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Sub-configurations
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
