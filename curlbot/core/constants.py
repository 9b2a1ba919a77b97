"""Curling sheet geometry and shot constants.

World frame used throughout the engine:
    x = 0 on the centre line, positive to the thrower's right (metres)
    y = 0 at the near hack, increasing up-ice toward the far house (metres)

The physics collaborator owns the real sheet; these values mirror a
regulation sheet so the engine and simulator agree on line positions.
"""

from typing import NamedTuple

# ============================================================================
# STONE
# ============================================================================

STONE_RADIUS = 0.145  # metres (0.29 m playing diameter)

# ============================================================================
# HOUSE RADII
# ============================================================================

TWELVE_FOOT = 1.829
EIGHT_FOOT = 1.219
FOUR_FOOT = 0.610
BUTTON = 0.152

# ============================================================================
# LINE POSITIONS (y, metres from the near hack)
# ============================================================================

HACK = 0.0
NEAR_TEE_LINE = 3.658
NEAR_HOG_LINE = NEAR_TEE_LINE + 6.401  # 10.059
FAR_TEE_LINE = NEAR_TEE_LINE + 34.750  # 38.408
FAR_HOG_LINE = FAR_TEE_LINE - 6.401  # 32.007
FAR_BACK_LINE = FAR_TEE_LINE + 1.829  # 40.237

TEE_X = 0.0

# Release point used for aim bearings
RELEASE_X = 0.0
RELEASE_Y = HACK + 1.0

# ============================================================================
# SLIDER RANGES
# ============================================================================

AIM_LIMIT_DEG = 5.0
WEIGHT_MIN = 0.0
WEIGHT_MAX = 100.0
SPIN_AMOUNT_MIN = 2.0
SPIN_AMOUNT_MAX = 5.0


class WeightBand(NamedTuple):
    """Slider weight range (0-100) for a family of shots."""

    min: float
    max: float

    def contains(self, weight: float) -> bool:
        return self.min <= weight <= self.max


GUARD_WEIGHT = WeightBand(5.0, 12.0)
DRAW_WEIGHT = WeightBand(28.0, 42.0)
CONTROL_WEIGHT = WeightBand(43.0, 55.0)
TAKEOUT_WEIGHT = WeightBand(60.0, 75.0)
PEEL_WEIGHT = WeightBand(80.0, 100.0)

# Tap uses the bottom of the control band only
TAP_WEIGHT = WeightBand(CONTROL_WEIGHT.min, CONTROL_WEIGHT.min + 5.0)

WEIGHT_BANDS: dict[str, WeightBand] = {
    "Guard": GUARD_WEIGHT,
    "Draw": DRAW_WEIGHT,
    "Control": CONTROL_WEIGHT,
    "Takeout": TAKEOUT_WEIGHT,
    "Peel": PEEL_WEIGHT,
}

# ============================================================================
# RELEASE SPEED MODEL
# ============================================================================

# Linear slider-to-speed stand-in for the simulator's own mapping
MIN_RELEASE_SPEED = 1.5  # m/s at weight 0
MAX_RELEASE_SPEED = 4.5  # m/s at weight 100


def weight_to_speed(weight: float) -> float:
    """Convert a slider weight (0-100) to a release speed in m/s."""
    fraction = max(WEIGHT_MIN, min(WEIGHT_MAX, weight)) / WEIGHT_MAX
    return MIN_RELEASE_SPEED + fraction * (MAX_RELEASE_SPEED - MIN_RELEASE_SPEED)


def weight_label(weight: float) -> str:
    """Name the weight band a slider value falls in.

    Values in the gaps between bands take the band below; anything under
    the draw band is a guard.
    """
    label = "Guard"
    for name, band in WEIGHT_BANDS.items():
        if weight >= band.min:
            label = name
    return label
