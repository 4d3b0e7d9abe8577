"""Configuration for the analysis engine."""

from rift_coach.config.settings import EngineSettings, get_settings

__all__ = ["EngineSettings", "get_settings"]
