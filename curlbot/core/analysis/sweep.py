"""Sweep advice for the engine's own travelling stone.

Evaluated every simulation tick from the stone's current state alone; no
state is carried between calls.
"""

import logging
from typing import Optional

from ...config.schemas import SweepSettings
from ..constants import FAR_TEE_LINE, FOUR_FOOT, NEAR_HOG_LINE, TWELVE_FOOT
from ..models import Stone, SweepLevel, Team

logger = logging.getLogger(__name__)


class SweepAdvisor:
    """Recommends none/light/hard sweeping for a moving stone."""

    def __init__(
        self, team: Team = Team.YELLOW, settings: Optional[SweepSettings] = None
    ):
        self.team = team
        self.settings = settings or SweepSettings()

    def stopping_distance(self, speed: float) -> float:
        """Distance left to travel under kinetic friction: v^2 / (2 mu g)."""
        s = self.settings
        return speed * speed / (2 * s.friction * s.gravity)

    def projected_stop_y(self, stone: Stone) -> float:
        """Resting y, projecting the stopping distance along the velocity."""
        speed = stone.speed
        return stone.y + self.stopping_distance(speed) * (stone.vy / max(speed, 0.01))

    def advise(self, stone: Optional[Stone]) -> SweepLevel:
        """Sweep level for ``stone`` this tick."""
        if stone is None or not stone.moving or stone.team is not self.team:
            return SweepLevel.NONE

        # Nothing to do before the stone reaches the near hog line
        if stone.y < NEAR_HOG_LINE:
            return SweepLevel.NONE

        s = self.settings
        if stone.speed > s.fast_speed:
            # Hitting weight: keep it straight and fast
            if abs(stone.x) > s.wide_line:
                return SweepLevel.HARD
            return SweepLevel.LIGHT

        stop_y = self.projected_stop_y(stone)
        if stop_y < FAR_TEE_LINE - TWELVE_FOOT:
            level = SweepLevel.HARD
        elif stop_y < FAR_TEE_LINE - FOUR_FOOT:
            level = SweepLevel.LIGHT
        else:
            level = SweepLevel.NONE

        logger.debug(f"Sweep: projected stop y={stop_y:.2f} -> {level.value}")
        return level
