"""Shot selection policy.

The policy is two ordered rule tables, one for each hammer state. A rule
belongs to a stone band (the engine's 1st-2nd, 3rd-4th, 5th-6th or
7th-8th stone of the end) and pairs a predicate with the shot type to
play. The first rule in the board's band whose predicate holds wins;
each band ends with an unconditional rule so selection always resolves.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import numpy as np

from ...config.schemas import StrategyThresholds
from ..models import BoardState, ShotPlan, ShotType
from .shots import ShotBuilder

logger = logging.getLogger(__name__)


class StoneBand(Enum):
    """Position of the engine's stone within the end."""

    EARLY = "early"  # stones 1-2
    MID = "mid"  # stones 3-4
    LATE = "late"  # stones 5-6
    FINAL = "final"  # stones 7-8

    @classmethod
    def for_stone(cls, stone_num: int) -> "StoneBand":
        if stone_num <= 2:
            return cls.EARLY
        if stone_num <= 4:
            return cls.MID
        if stone_num <= 6:
            return cls.LATE
        return cls.FINAL


@dataclass
class SelectionContext:
    """Inputs to rule predicates besides the board itself."""

    thresholds: StrategyThresholds
    rng: np.random.Generator

    def aggressive(self, board: BoardState) -> bool:
        """Trailing by enough to take more risk."""
        return board.score_diff < self.thresholds.aggressive_score_diff

    def conservative(self, board: BoardState) -> bool:
        """Early in the game and not behind."""
        return board.is_early_game and board.score_diff >= 0

    def aggressive_late(self, board: BoardState) -> bool:
        """Late in the game and behind."""
        return board.is_late_game and board.score_diff < 0

    def play_blank(self, board: BoardState) -> bool:
        return (
            board.score_diff >= self.thresholds.blank_lead
            and board.bot_stone_num >= self.thresholds.blank_min_stone
        )


Predicate = Callable[[BoardState, SelectionContext], bool]


@dataclass(frozen=True)
class Rule:
    """One branch of the decision tree."""

    name: str
    band: StoneBand
    shot: ShotType
    when: Predicate = lambda board, ctx: True


# ----------------------------------------------------------------------
# Shared predicates
# ----------------------------------------------------------------------


def _own_center_guards_gone(board: BoardState, ctx: SelectionContext) -> bool:
    return not board.center_guards_for(board.bot_team) and not board.fgz_active


def _opp_center_guard_removable(board: BoardState, ctx: SelectionContext) -> bool:
    return bool(board.center_guards_for(board.opp_team)) and not board.fgz_active


def _opp_shot(board: BoardState, ctx: SelectionContext) -> bool:
    return board.shot_team is board.opp_team


def _opp_scoring_multiple(board: BoardState, ctx: SelectionContext) -> bool:
    return board.opp_scoring >= 2


def _opp_scoring_one(board: BoardState, ctx: SelectionContext) -> bool:
    return board.opp_scoring == 1


def _freeze_roll(board: BoardState, ctx: SelectionContext) -> bool:
    # Only draw when a guard protects the freeze
    return (
        _opp_shot(board, ctx)
        and bool(board.bot_guards)
        and ctx.rng.random() < ctx.thresholds.freeze_probability
    )


# ----------------------------------------------------------------------
# Without hammer: defensive, build guards and protect position
# ----------------------------------------------------------------------

WITHOUT_HAMMER_RULES: list[Rule] = [
    Rule(
        "guard the centre",
        StoneBand.EARLY,
        ShotType.CENTER_GUARD,
        lambda b, c: not b.center_blocked or len(b.center_guards) < 2,
    ),
    Rule("come around the centre guards", StoneBand.EARLY, ShotType.DRAW_BEHIND_GUARD),
    Rule(
        "replace removed centre guard",
        StoneBand.MID,
        ShotType.CENTER_GUARD,
        _own_center_guards_gone,
    ),
    Rule("freeze to their shot stone", StoneBand.MID, ShotType.FREEZE, _freeze_roll),
    Rule(
        "come around their shot stone",
        StoneBand.MID,
        ShotType.DRAW_BEHIND_GUARD,
        _opp_shot,
    ),
    Rule("draw for position", StoneBand.MID, ShotType.DRAW_TO_HOUSE),
    Rule(
        "remove multiple counters",
        StoneBand.LATE,
        ShotType.TAKEOUT,
        _opp_scoring_multiple,
    ),
    Rule(
        "nudge single counter early",
        StoneBand.LATE,
        ShotType.TAP,
        lambda b, c: _opp_scoring_one(b, c) and c.conservative(b),
    ),
    Rule(
        "remove single counter when behind late",
        StoneBand.LATE,
        ShotType.TAKEOUT,
        lambda b, c: _opp_scoring_one(b, c) and c.aggressive_late(b),
    ),
    Rule("hit and stay", StoneBand.LATE, ShotType.HIT_AND_ROLL, _opp_scoring_one),
    Rule(
        "protect our counter when trailing",
        StoneBand.LATE,
        ShotType.GUARD_OWN_STONE,
        lambda b, c: b.bot_scoring > 0 and c.aggressive(b),
    ),
    Rule("draw for position", StoneBand.LATE, ShotType.DRAW_TO_HOUSE),
    Rule(
        "remove multiple counters",
        StoneBand.FINAL,
        ShotType.TAKEOUT,
        _opp_scoring_multiple,
    ),
    Rule(
        "remove single counter when desperate",
        StoneBand.FINAL,
        ShotType.TAKEOUT,
        lambda b, c: _opp_scoring_one(b, c) and b.is_desperate_trailing,
    ),
    Rule("hit and stay", StoneBand.FINAL, ShotType.HIT_AND_ROLL, _opp_scoring_one),
    Rule(
        "protect multiple counters",
        StoneBand.FINAL,
        ShotType.GUARD_OWN_STONE,
        lambda b, c: b.bot_scoring >= 2,
    ),
    Rule(
        "freeze for insurance",
        StoneBand.FINAL,
        ShotType.FREEZE,
        lambda b, c: b.bot_scoring > 0 and bool(b.opp_in_house),
    ),
    Rule("draw for position", StoneBand.FINAL, ShotType.DRAW_TO_HOUSE),
]

# ----------------------------------------------------------------------
# With hammer: offensive, keep the centre open and draw for multiples
# ----------------------------------------------------------------------

WITH_HAMMER_RULES: list[Rule] = [
    Rule(
        "remove centre guard gently",
        StoneBand.EARLY,
        ShotType.HIT_AND_ROLL,
        lambda b, c: _opp_center_guard_removable(b, c) and c.conservative(b),
    ),
    Rule(
        "peel centre guard when behind late",
        StoneBand.EARLY,
        ShotType.PEEL,
        lambda b, c: _opp_center_guard_removable(b, c) and c.aggressive_late(b),
    ),
    Rule(
        "remove centre guard",
        StoneBand.EARLY,
        ShotType.HIT_AND_ROLL,
        _opp_center_guard_removable,
    ),
    Rule(
        "draw for position early",
        StoneBand.EARLY,
        ShotType.DRAW_TO_HOUSE,
        lambda b, c: c.conservative(b),
    ),
    Rule("corner guard", StoneBand.EARLY, ShotType.CORNER_GUARD),
    Rule(
        "peel centre guard when behind late",
        StoneBand.MID,
        ShotType.PEEL,
        lambda b, c: _opp_center_guard_removable(b, c) and c.aggressive_late(b),
    ),
    Rule(
        "remove centre guard",
        StoneBand.MID,
        ShotType.HIT_AND_ROLL,
        _opp_center_guard_removable,
    ),
    Rule(
        "hit and stay on single counter",
        StoneBand.MID,
        ShotType.HIT_AND_ROLL,
        lambda b, c: _opp_scoring_one(b, c) and not c.aggressive_late(b),
    ),
    Rule(
        "remove counters",
        StoneBand.MID,
        ShotType.TAKEOUT,
        lambda b, c: b.opp_scoring > 0,
    ),
    Rule("draw for position", StoneBand.MID, ShotType.DRAW_TO_HOUSE),
    Rule(
        "remove multiple counters",
        StoneBand.LATE,
        ShotType.TAKEOUT,
        _opp_scoring_multiple,
    ),
    Rule("hit and stay", StoneBand.LATE, ShotType.HIT_AND_ROLL, _opp_scoring_one),
    Rule("draw for position", StoneBand.LATE, ShotType.DRAW_TO_HOUSE),
    Rule(
        "blank the end",
        StoneBand.FINAL,
        ShotType.BLANK,
        lambda b, c: c.play_blank(b),
    ),
    Rule(
        "trade single for single",
        StoneBand.FINAL,
        ShotType.HIT_AND_ROLL,
        lambda b, c: b.opp_scoring > b.bot_scoring
        and b.opp_scoring == 1
        and b.bot_scoring == 0,
    ),
    Rule(
        "remove their counters",
        StoneBand.FINAL,
        ShotType.TAKEOUT,
        lambda b, c: b.opp_scoring > b.bot_scoring,
    ),
    Rule("draw for the win", StoneBand.FINAL, ShotType.DRAW_TO_BUTTON),
]


class ShotSelector:
    """Picks a shot type from the rule tables and builds it."""

    def __init__(
        self,
        builder: ShotBuilder,
        thresholds: Optional[StrategyThresholds] = None,
        with_hammer: Optional[list[Rule]] = None,
        without_hammer: Optional[list[Rule]] = None,
    ):
        self.builder = builder
        self.thresholds = thresholds or StrategyThresholds()
        self.with_hammer = with_hammer if with_hammer is not None else WITH_HAMMER_RULES
        self.without_hammer = (
            without_hammer if without_hammer is not None else WITHOUT_HAMMER_RULES
        )

    def rules_for(self, board: BoardState) -> list[Rule]:
        return self.with_hammer if board.has_hammer else self.without_hammer

    def choose_rule(self, board: BoardState) -> Rule:
        """First rule in the board's stone band whose predicate holds."""
        band = StoneBand.for_stone(board.bot_stone_num)
        ctx = SelectionContext(thresholds=self.thresholds, rng=self.builder.rng)
        for rule in self.rules_for(board):
            if rule.band is band and rule.when(board, ctx):
                logger.debug(
                    f"Rule fired: {band.value} / {rule.name} -> {rule.shot.value}"
                )
                return rule

        # Rule tables end every band unconditionally; custom tables may not
        logger.debug(f"No rule matched in band {band.value}, drawing")
        return Rule("default draw", band, ShotType.DRAW_TO_HOUSE)

    def choose_shot_type(self, board: BoardState) -> ShotType:
        return self.choose_rule(board).shot

    def select(self, board: BoardState) -> ShotPlan:
        """Choose and construct the shot for this board."""
        return self.builder.build(self.choose_shot_type(board), board)
