"""Aim calculation.

Converts a ShotPlan target into the slider aim angle. Light shots curl a
long way before they stop, so for anything below control weight the aim
is moved to the side opposite the curl by a closed-form estimate.
"""

import math
from typing import Callable

from ..constants import (
    AIM_LIMIT_DEG,
    CONTROL_WEIGHT,
    RELEASE_X,
    RELEASE_Y,
    weight_to_speed,
)
from ..models import ShotPlan
from ..utils.math import clamp

# Lateral curl (m) of a draw-weight stone released at REFERENCE_SPEED with
# REFERENCE_SPIN rotations
CURL_SCALE = 0.5
REFERENCE_SPEED = 3.0
REFERENCE_SPIN = 3.0


class AimSolver:
    """Solves the released aim angle for a planned shot.

    Args:
        speed_model: Maps slider weight to release speed; defaults to the
            linear stand-in from constants.py
        aim_limit: Slider range in degrees either side of straight
    """

    def __init__(
        self,
        speed_model: Callable[[float], float] = weight_to_speed,
        aim_limit: float = AIM_LIMIT_DEG,
    ):
        self.speed_model = speed_model
        self.aim_limit = aim_limit

    def estimate_curl(self, weight: float, spin_amount: float) -> float:
        """Lateral curl in metres: inverse in speed, linear in rotations."""
        speed = max(self.speed_model(weight), 0.01)
        return CURL_SCALE * (REFERENCE_SPEED / speed) * (spin_amount / REFERENCE_SPIN)

    def solve(self, shot: ShotPlan) -> float:
        """Aim angle in degrees, clamped to the slider range.

        Positive angles point toward +x. Spin +1 curls toward +x, so the
        curl offset is subtracted signed by spin direction.
        """
        dx = shot.target_x - RELEASE_X
        dy = shot.target_y - RELEASE_Y
        dist = math.sqrt(dx * dx + dy * dy)

        aim_deg = math.degrees(math.atan2(dx, dy))

        if shot.weight < CONTROL_WEIGHT.min:
            curl = self.estimate_curl(shot.weight, shot.spin_amount)
            curl_offset_deg = math.degrees(math.atan2(curl, dist))
            aim_deg -= shot.spin * curl_offset_deg

        return clamp(aim_deg, -self.aim_limit, self.aim_limit)
