"""
Configuration management for the jobmatch engine.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "job_board"
    username: str | None = None
    password: str | None = None

    # Collections owned by the profile and job-posting subsystems
    profiles_collection: str = "user_profiles"
    jobs_collection: str = "jobs"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "jobmatch.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class MatchingSettings(BaseSettings):
    """Default limits used by the matching engine when a caller omits them."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    min_match_score: int = Field(default=40, ge=0)
    max_recommendations: int = Field(default=15, ge=1)
    max_user_matches: int = Field(default=50, ge=1)
    matching_jobs_limit: int = Field(default=20, ge=1)
    advanced_page_limit: int = Field(default=20, ge=1)
    statistics_top_k: int = Field(default=5, ge=1)


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "jobmatch"
    version: str = "0.1.0"
    description: str = "Candidate-job matching engine for the job board"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
