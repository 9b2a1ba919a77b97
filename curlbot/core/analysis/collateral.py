"""Collateral-damage checks for hitting shots.

A stone struck from the front travels up-ice. If one of our own stones
sits in that lane a little way behind the target, the hit is likely to
knock it out too, so such targets are skipped.
"""

import logging
from typing import Optional

from ..constants import STONE_RADIUS
from ..models import BoardState, Stone

logger = logging.getLogger(__name__)

DANGER_RADIUS = STONE_RADIUS * 4  # lateral half-width of the knock-on lane
DANGER_DEPTH = STONE_RADIUS * 12  # how far behind the target to look


class CollateralAnalyzer:
    """Decides which opponent stones are safe to hit."""

    def __init__(
        self, danger_radius: float = DANGER_RADIUS, danger_depth: float = DANGER_DEPTH
    ):
        self.danger_radius = danger_radius
        self.danger_depth = danger_depth

    def has_friendly_behind(self, target: Stone, board: BoardState) -> bool:
        """True if one of our stones lies in the lane behind ``target``."""
        for stone in board.bot_stones:
            dy = stone.y - target.y
            if 0 < dy < self.danger_depth:
                if abs(stone.x - target.x) < self.danger_radius:
                    return True
        return False

    def find_safe_target(self, board: BoardState) -> Optional[Stone]:
        """Closest-to-tee opponent house stone with nothing of ours behind it.

        Returns None when every candidate carries collateral risk.
        """
        for ranked in board.in_house_for(board.opp_team):
            if not self.has_friendly_behind(ranked.stone, board):
                return ranked.stone
            logger.debug(
                f"Skipping target at ({ranked.stone.x:.2f}, {ranked.stone.y:.2f}): "
                "friendly stone behind"
            )
        return None
