"""Shot constructors.

Each constructor turns the current BoardState into a concrete ShotPlan:
target point, weight, spin direction and spin amount. Constructors that
need a target they cannot find fall back to a simpler shot, and every
fallback chain ends in a draw, so a plan is always returned.
"""

import logging
from typing import Callable, Optional

import numpy as np

from ..constants import (
    CONTROL_WEIGHT,
    DRAW_WEIGHT,
    FAR_HOG_LINE,
    FAR_TEE_LINE,
    GUARD_WEIGHT,
    PEEL_WEIGHT,
    STONE_RADIUS,
    TAKEOUT_WEIGHT,
    TAP_WEIGHT,
    WeightBand,
)
from ..models import BoardState, ShotPlan, ShotType, Stone
from ..utils.math import rand_between, random_sign, side_of
from .collateral import CollateralAnalyzer

logger = logging.getLogger(__name__)

# Weight band each shot type is constructed in
SHOT_WEIGHT_BANDS: dict[ShotType, WeightBand] = {
    ShotType.CENTER_GUARD: GUARD_WEIGHT,
    ShotType.CORNER_GUARD: GUARD_WEIGHT,
    ShotType.GUARD_OWN_STONE: GUARD_WEIGHT,
    ShotType.DRAW_BEHIND_GUARD: DRAW_WEIGHT,
    ShotType.DRAW_TO_HOUSE: DRAW_WEIGHT,
    ShotType.DRAW_TO_BUTTON: DRAW_WEIGHT,
    ShotType.FREEZE: DRAW_WEIGHT,
    ShotType.HIT_AND_ROLL: CONTROL_WEIGHT,
    ShotType.TAP: TAP_WEIGHT,
    ShotType.TAKEOUT: TAKEOUT_WEIGHT,
    ShotType.TAKEOUT_GUARD: TAKEOUT_WEIGHT,
    ShotType.PEEL: PEEL_WEIGHT,
    ShotType.BLANK: PEEL_WEIGHT,
}

# Guard placement, metres past the far hog line
CENTER_GUARD_OFFSET = (1.5, 3.5)
CENTER_GUARD_SPREAD = 0.3
CORNER_GUARD_OFFSET = (2.0, 4.0)
CORNER_GUARD_X = (0.8, 1.5)

# Distance a protecting guard sits in front of our stone
GUARD_OWN_STONE_GAP = (2.0, 4.0)

# Lateral aim offset that makes the shooter roll toward centre after contact
HIT_AND_ROLL_OFFSET = (0.04, 0.08)


class ShotBuilder:
    """Catalog of shot archetypes for one engine.

    Args:
        rng: Random source for placement jitter and weight selection
        collateral: Analyzer used by every shot that strikes an opponent stone
    """

    def __init__(
        self,
        rng: np.random.Generator,
        collateral: Optional[CollateralAnalyzer] = None,
    ):
        self.rng = rng
        self.collateral = collateral or CollateralAnalyzer()

        self._constructors: dict[ShotType, Callable[[BoardState], ShotPlan]] = {
            ShotType.CENTER_GUARD: self.center_guard,
            ShotType.CORNER_GUARD: self.corner_guard,
            ShotType.DRAW_BEHIND_GUARD: self.draw_behind_guard,
            ShotType.DRAW_TO_HOUSE: self.draw_to_house,
            ShotType.DRAW_TO_BUTTON: self.draw_to_button,
            ShotType.GUARD_OWN_STONE: self.guard_own_stone,
            ShotType.TAKEOUT: self.takeout,
            ShotType.PEEL: self.peel,
            ShotType.BLANK: self.blank,
            ShotType.HIT_AND_ROLL: self.hit_and_roll,
            ShotType.FREEZE: self.freeze,
            ShotType.TAP: self.tap,
        }

    def build(self, shot_type: ShotType, board: BoardState) -> ShotPlan:
        """Construct the requested shot (or its fallback)."""
        try:
            constructor = self._constructors[shot_type]
        except KeyError:
            raise ValueError(f"No constructor for shot type {shot_type}") from None
        return constructor(board)

    def _rand(self, low: float, high: float) -> float:
        return rand_between(self.rng, low, high)

    def _weight(self, band: WeightBand) -> float:
        return self._rand(band.min, band.max)

    def _fallback(self, name: str, reason: str) -> None:
        logger.debug(f"{name}: {reason}, falling back")

    def _hit(
        self,
        target: Stone,
        shot_type: ShotType,
        description: str,
        spin_range: tuple[float, float] = (2.0, 3.0),
        x_offset: float = 0.0,
    ) -> ShotPlan:
        return ShotPlan(
            target_x=target.x + x_offset,
            target_y=target.y,
            weight=self._weight(SHOT_WEIGHT_BANDS[shot_type]),
            spin=side_of(target.x),
            spin_amount=self._rand(*spin_range),
            shot_type=shot_type,
            description=description,
        )

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def center_guard(self, board: BoardState) -> ShotPlan:
        """Guard on the centre line between the hog line and the house."""
        guard_y = FAR_HOG_LINE + self._rand(*CENTER_GUARD_OFFSET)
        guard_x = self._rand(-CENTER_GUARD_SPREAD, CENTER_GUARD_SPREAD)
        return ShotPlan(
            target_x=guard_x,
            target_y=guard_y,
            weight=self._weight(GUARD_WEIGHT),
            spin=random_sign(self.rng),
            spin_amount=self._rand(2.0, 3.5),
            shot_type=ShotType.CENTER_GUARD,
            description="Center Guard",
        )

    def corner_guard(self, board: BoardState) -> ShotPlan:
        """Guard off to one side, curling back toward the centre."""
        side = random_sign(self.rng)
        guard_y = FAR_HOG_LINE + self._rand(*CORNER_GUARD_OFFSET)
        guard_x = side * self._rand(*CORNER_GUARD_X)
        return ShotPlan(
            target_x=guard_x,
            target_y=guard_y,
            weight=self._weight(GUARD_WEIGHT),
            spin=-side,
            spin_amount=self._rand(2.5, 3.5),
            shot_type=ShotType.CORNER_GUARD,
            description="Corner Guard",
        )

    def guard_own_stone(self, board: BoardState) -> ShotPlan:
        """Guard a few metres in front of our best stone in the house."""
        ours = board.in_house_for(board.bot_team)
        if not ours:
            self._fallback("Guard Shot Stone", "no own stone in house")
            return self.center_guard(board)

        best = ours[0].stone
        guard_y = best.y - self._rand(*GUARD_OWN_STONE_GAP)
        return ShotPlan(
            target_x=best.x + self._rand(-0.2, 0.2),
            target_y=max(FAR_HOG_LINE + 0.5, guard_y),
            weight=self._weight(GUARD_WEIGHT),
            spin=side_of(best.x),
            spin_amount=self._rand(2.5, 3.5),
            shot_type=ShotType.GUARD_OWN_STONE,
            description="Guard Shot Stone",
        )

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------

    def draw_behind_guard(self, board: BoardState) -> ShotPlan:
        """Come-around: draw into the house behind one of our guards."""
        if not board.bot_guards:
            self._fallback("Come-Around", "no own guard")
            return self.draw_to_house(board)

        guard = board.bot_guards[int(self.rng.integers(len(board.bot_guards)))]
        target_x = guard.x + self._rand(-0.2, 0.2)
        target_y = FAR_TEE_LINE + self._rand(-0.5, 0.5)
        return ShotPlan(
            target_x=target_x,
            target_y=target_y,
            weight=self._weight(DRAW_WEIGHT),
            spin=side_of(target_x),
            spin_amount=self._rand(2.5, 4.0),
            shot_type=ShotType.DRAW_BEHIND_GUARD,
            description="Come-Around",
        )

    def draw_to_house(self, board: BoardState) -> ShotPlan:
        """Draw into the four- or eight-foot, slightly off centre."""
        side = random_sign(self.rng)
        target_x = side * self._rand(0.1, 0.8)
        target_y = FAR_TEE_LINE + self._rand(-0.6, 0.6)
        return ShotPlan(
            target_x=target_x,
            target_y=target_y,
            weight=self._weight(DRAW_WEIGHT),
            spin=-side,
            spin_amount=self._rand(2.5, 3.5),
            shot_type=ShotType.DRAW_TO_HOUSE,
            description="Draw",
        )

    def draw_to_button(self, board: BoardState) -> ShotPlan:
        """Precise draw to the button."""
        return ShotPlan(
            target_x=self._rand(-0.15, 0.15),
            target_y=FAR_TEE_LINE + self._rand(-0.15, 0.15),
            weight=self._weight(DRAW_WEIGHT),
            spin=random_sign(self.rng),
            spin_amount=self._rand(2.5, 3.5),
            shot_type=ShotType.DRAW_TO_BUTTON,
            description="Draw to Button",
        )

    def freeze(self, board: BoardState) -> ShotPlan:
        """Draw to rest just in front of the opponent's best house stone."""
        theirs = board.in_house_for(board.opp_team)
        if not theirs:
            self._fallback("Freeze", "no opponent stone in house")
            return self.draw_to_button(board)

        target = theirs[0].stone
        target_x = target.x + self._rand(-0.05, 0.05)
        target_y = target.y - (STONE_RADIUS * 2 + self._rand(0.0, 0.05))
        return ShotPlan(
            target_x=target_x,
            target_y=target_y,
            weight=self._weight(DRAW_WEIGHT),
            spin=side_of(target_x),
            spin_amount=self._rand(2.5, 3.5),
            shot_type=ShotType.FREEZE,
            description="Freeze",
        )

    # ------------------------------------------------------------------
    # Hits
    # ------------------------------------------------------------------

    def takeout(self, board: BoardState) -> ShotPlan:
        """Remove the closest opponent stone that is safe to hit."""
        if board.in_house_for(board.opp_team):
            target = self.collateral.find_safe_target(board)
            if target is not None:
                return self._hit(target, ShotType.TAKEOUT, "Takeout")

            self._fallback("Takeout", "every target has a friendly stone behind")
            if board.bot_guards:
                return self.freeze(board)
            return self.draw_to_house(board)

        # Guards are only worth hitting while they cover house stones
        if board.opp_guards and board.opp_in_house:
            guard = board.opp_guards[0]
            if not self.collateral.has_friendly_behind(guard, board):
                return self._hit(guard, ShotType.TAKEOUT_GUARD, "Takeout Guard")
            return self.draw_to_house(board)

        self._fallback("Takeout", "nothing to hit")
        return self.draw_to_house(board)

    def peel(self, board: BoardState) -> ShotPlan:
        """Remove an opponent centre guard at peel weight."""
        for target in board.center_guards_for(board.opp_team):
            if not self.collateral.has_friendly_behind(target, board):
                return self._hit(target, ShotType.PEEL, "Peel", spin_range=(2.0, 2.5))

        self._fallback("Peel", "no safe centre guard")
        return self.draw_to_house(board)

    def blank(self, board: BoardState) -> ShotPlan:
        """Throw through the house to blank the end and keep hammer."""
        if board.in_house_for(board.opp_team):
            return self.takeout(board)

        return ShotPlan(
            target_x=self._rand(-0.2, 0.2),
            target_y=FAR_TEE_LINE,
            weight=self._weight(PEEL_WEIGHT),
            spin=random_sign(self.rng),
            spin_amount=self._rand(2.0, 2.5),
            shot_type=ShotType.BLANK,
            description="Throw-Through (Blank)",
        )

    def hit_and_roll(self, board: BoardState) -> ShotPlan:
        """Hit at control weight, offset so the shooter rolls toward centre."""
        target = self.collateral.find_safe_target(board)
        if target is None:
            self._fallback("Hit & Roll", "no safe target")
            return self.draw_to_house(board)

        offset = side_of(target.x) * self._rand(*HIT_AND_ROLL_OFFSET)
        return self._hit(target, ShotType.HIT_AND_ROLL, "Hit & Roll", x_offset=offset)

    def tap(self, board: BoardState) -> ShotPlan:
        """Gentle nudge that leaves both stones in play."""
        target = self.collateral.find_safe_target(board)
        if target is None:
            self._fallback("Tap", "no safe target")
            return self.draw_to_house(board)

        return self._hit(target, ShotType.TAP, "Tap")
