"""Pydantic settings schemas for the curling bot.

This module defines the typed, validated view of the ``bot`` configuration
section:
- Difficulty tiers (execution error model)
- Strategy thresholds used by the board evaluator and shot selector
- Sweep estimation constants
- Top-level bot settings (team, default difficulty, RNG seed)

Also defines the Team and Difficulty enums shared with the engine.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .loader import Config


class Team(Enum):
    """The two sides of a curling match."""

    RED = "red"
    YELLOW = "yellow"

    @property
    def opponent(self) -> "Team":
        return Team.YELLOW if self is Team.RED else Team.RED


class Difficulty(str, Enum):
    """Selectable difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DifficultyProfile(BaseModel):
    """Execution error model for one difficulty tier."""

    model_config = ConfigDict(frozen=True)

    label: str
    aim_error: float = Field(ge=0.0, description="Aim error std-dev in degrees")
    weight_error: float = Field(ge=0.0, description="Weight error std-dev in %")
    perfect_rate: float = Field(
        ge=0.0, le=1.0, description="Probability of a near-perfect attempt"
    )
    spin_error: float = Field(
        default=0.3, ge=0.0, description="Spin magnitude error std-dev"
    )


class StrategyThresholds(BaseModel):
    """Empirical strategy constants, overridable from config."""

    model_config = ConfigDict(frozen=True)

    # Trailing by more than this many points (diff < value) plays aggressive
    aggressive_score_diff: int = -2
    desperate_score_diff: int = -3
    desperate_ends_remaining: int = Field(default=2, ge=0)
    early_game_fraction: float = Field(default=0.4, gt=0.0, lt=1.0)
    late_game_fraction: float = Field(default=0.7, gt=0.0, lt=1.0)
    blank_lead: int = 3
    blank_min_stone: int = Field(default=6, ge=1, le=8)
    freeze_probability: float = Field(default=0.4, ge=0.0, le=1.0)
    fgz_stone_limit: int = Field(default=5, ge=0)
    center_lane_half_width: float = Field(default=0.5, gt=0.0)

    @model_validator(mode="after")
    def _check_phase_order(self) -> "StrategyThresholds":
        if self.late_game_fraction <= self.early_game_fraction:
            raise ValueError("late_game_fraction must exceed early_game_fraction")
        return self


class SweepSettings(BaseModel):
    """Constants for the sweep stopping-distance estimate."""

    model_config = ConfigDict(frozen=True)

    friction: float = Field(default=0.008, gt=0.0)
    gravity: float = Field(default=9.81, gt=0.0)
    fast_speed: float = Field(default=2.5, gt=0.0, description="m/s")
    wide_line: float = Field(default=1.2, gt=0.0, description="|x| in metres")


class BotSettings(BaseModel):
    """Top-level bot configuration."""

    team: Team = Team.YELLOW
    difficulty: Difficulty = Difficulty.MEDIUM
    seed: Optional[int] = None
    strategy: StrategyThresholds = Field(default_factory=StrategyThresholds)
    sweep: SweepSettings = Field(default_factory=SweepSettings)

    @classmethod
    def from_config(cls, cfg: Config, section: str = "bot") -> "BotSettings":
        """Build settings from a config section, defaults filling any gaps."""
        data: dict[str, Any] = cfg.get(section, {}) or {}
        return cls.model_validate(data)


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        label="Easy", aim_error=0.8, weight_error=10, perfect_rate=0.40
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        label="Medium", aim_error=0.4, weight_error=5, perfect_rate=0.60
    ),
    Difficulty.HARD: DifficultyProfile(
        label="Hard", aim_error=0.2, weight_error=3, perfect_rate=0.75
    ),
}
