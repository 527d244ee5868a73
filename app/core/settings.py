"""Configuration and environment settings for the Finance Visualizer API."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the Finance Visualizer API."""

    database_url: str = "sqlite:///finance.db"
    database_echo: bool = False
    log_level: str = "INFO"
    log_file: str = "logs/finance-visualizer.log"
    cors_origins: list[str] = ["*"]
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
