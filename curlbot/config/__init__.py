"""Configuration module for the curling bot."""

from .loader import Config, config
from .schemas import (
    DIFFICULTY_PROFILES,
    BotSettings,
    Difficulty,
    DifficultyProfile,
    StrategyThresholds,
    SweepSettings,
    Team,
)

__all__ = [
    "Config",
    "config",
    "BotSettings",
    "Difficulty",
    "DifficultyProfile",
    "DIFFICULTY_PROFILES",
    "StrategyThresholds",
    "SweepSettings",
    "Team",
]
