"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from decree.constants import WIN_THRESHOLD


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    environment: str = Field(default="development", description="Environment")
    frontend_url: str = Field(default="http://localhost:5173", description="Frontend URL")
    log_level: str = Field(default="INFO", description="Root log level for the app")

    # Game Configuration
    win_threshold: int = Field(default=WIN_THRESHOLD, description="Cumulative score that ends a match")
    monarch_rule: bool = Field(
        default=False, description="Enforce the rank-11 follow restriction"
    )
    max_matches: int = Field(default=100, description="Maximum matches in progress at once")

    # Bot Configuration
    default_bot_difficulty: str = Field(default="medium", description="Default bot difficulty")


# Global settings instance
settings = Settings()
