"""
Configuration settings using Pydantic Settings.

Every engine entry point accepts an explicit ``EngineSettings``; ``get_settings()``
only supplies the environment-derived default.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine settings loaded from ``RIFT_COACH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RIFT_COACH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level for the rift_coach loggers")
    log_json: bool = Field(False, description="Force the JSON renderer even on a TTY")

    # Coaching tips
    max_tips: int = Field(5, ge=1, le=10, description="Maximum coaching tips per report")
    low_score_threshold: float = Field(
        60.0,
        ge=0,
        le=100,
        description="Category scores below this value can contribute tips",
    )

    # Batch analysis
    batch_concurrency: int = Field(
        8, ge=1, description="Matches analysed concurrently by analyze_matches"
    )


_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """Get or create the settings singleton."""
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings
