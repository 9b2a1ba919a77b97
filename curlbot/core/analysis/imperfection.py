"""Execution error model.

Emulates an imperfect human thrower: each throw either lands in the
"perfect" branch (tiny residual error on aim and weight) or takes the
tier's full Gaussian error on aim, weight and spin amount.
"""

import numpy as np

from ...config.schemas import DIFFICULTY_PROFILES, Difficulty, DifficultyProfile
from ..constants import (
    AIM_LIMIT_DEG,
    SPIN_AMOUNT_MAX,
    SPIN_AMOUNT_MIN,
    WEIGHT_MAX,
    WEIGHT_MIN,
)
from ..models import ShotPlan, ThrowParameters
from ..utils.math import clamp, gauss_random

# Fraction of the tier's error kept on a perfect attempt
PERFECT_ERROR_SCALE = 0.15


class ImperfectionModel:
    """Applies difficulty-scaled error to a solved shot."""

    def __init__(
        self,
        rng: np.random.Generator,
        profile: DifficultyProfile = DIFFICULTY_PROFILES[Difficulty.MEDIUM],
    ):
        self.rng = rng
        self.profile = profile

    def apply(self, aim: float, shot: ShotPlan) -> ThrowParameters:
        """Perturb aim, weight and spin amount, then clamp to slider ranges."""
        p = self.profile
        perfect = bool(self.rng.random() < p.perfect_rate)

        if perfect:
            aim += gauss_random(self.rng) * p.aim_error * PERFECT_ERROR_SCALE
            weight = (
                shot.weight
                + gauss_random(self.rng) * p.weight_error * PERFECT_ERROR_SCALE
            )
            spin_amount = shot.spin_amount
        else:
            aim += gauss_random(self.rng) * p.aim_error
            weight = shot.weight + gauss_random(self.rng) * p.weight_error
            spin_amount = shot.spin_amount + gauss_random(self.rng) * p.spin_error

        return ThrowParameters(
            aim=clamp(aim, -AIM_LIMIT_DEG, AIM_LIMIT_DEG),
            weight=clamp(weight, WEIGHT_MIN, WEIGHT_MAX),
            spin=shot.spin,
            spin_amount=clamp(spin_amount, SPIN_AMOUNT_MIN, SPIN_AMOUNT_MAX),
            description=shot.description,
            shot_type=shot.shot_type,
            perfect=perfect,
        )
