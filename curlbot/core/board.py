"""Board evaluation.

Turns the raw stone list plus match metadata into a BoardState: which
stones are in the house and in what order, who holds shot stone and how
many each side is counting, where the guards are, whether the free guard
zone still applies, and which phase of the game this end belongs to.
"""

import logging
import math
from typing import Optional

from ..config.schemas import StrategyThresholds
from .constants import FAR_HOG_LINE, FAR_TEE_LINE, STONE_RADIUS, TEE_X, TWELVE_FOOT
from .models import BoardState, MatchSnapshot, RankedStone, Stone, Team
from .utils.math import distance

logger = logging.getLogger(__name__)

# A stone counts as in the house while any part of it touches the 12-foot
HOUSE_REACH = TWELVE_FOOT + STONE_RADIUS


def tee_distance(stone: Stone) -> float:
    """Distance from a stone's centre to the far tee."""
    return distance(stone.x, stone.y, TEE_X, FAR_TEE_LINE)


def is_in_house(stone: Stone) -> bool:
    return tee_distance(stone) <= HOUSE_REACH


def is_guard(stone: Stone) -> bool:
    """Between the far hog line and the house, outside the 12-foot."""
    return stone.y >= FAR_HOG_LINE and tee_distance(stone) > HOUSE_REACH


def count_scoring(in_house_sorted: list[RankedStone], team: Team) -> int:
    """Stones of ``team`` closer to the tee than the nearest opposing stone."""
    count = 0
    for ranked in in_house_sorted:
        if ranked.team is not team:
            break
        count += 1
    return count


class BoardEvaluator:
    """Builds the per-turn BoardState for one side of the match."""

    def __init__(
        self, team: Team = Team.YELLOW, thresholds: Optional[StrategyThresholds] = None
    ):
        self.team = team
        self.thresholds = thresholds or StrategyThresholds()

    def evaluate(self, snapshot: MatchSnapshot) -> BoardState:
        """Assess the board from the engine's point of view.

        Never fails: an empty sheet yields empty collections and no shot stone.
        """
        t = self.thresholds
        bot, opp = self.team, self.team.opponent

        active = snapshot.get_active_stones()
        bot_stones = [s for s in active if s.team is bot]
        opp_stones = [s for s in active if s.team is opp]

        ranked = sorted(
            (RankedStone(stone=s, dist=tee_distance(s)) for s in active),
            key=lambda r: r.dist,
        )
        in_house_sorted = [r for r in ranked if r.dist <= HOUSE_REACH]

        shot_stone = in_house_sorted[0] if in_house_sorted else None
        shot_team = shot_stone.team if shot_stone else None

        bot_scoring = 0
        opp_scoring = 0
        if shot_team is not None:
            counting = count_scoring(in_house_sorted, shot_team)
            if shot_team is bot:
                bot_scoring = counting
            else:
                opp_scoring = counting

        guards = [s for s in active if is_guard(s)]
        center_guards = [s for s in guards if abs(s.x) < t.center_lane_half_width]

        total_thrown = snapshot.red_thrown + snapshot.yellow_thrown
        score_diff = snapshot.score(bot) - snapshot.score(opp)

        current_end = snapshot.current_end
        total_ends = snapshot.total_ends
        ends_remaining = total_ends - current_end
        early_cutoff = math.floor(total_ends * t.early_game_fraction)
        late_cutoff = math.floor(total_ends * t.late_game_fraction)
        is_early = current_end <= early_cutoff
        is_late = current_end > late_cutoff
        is_mid = not is_early and current_end <= late_cutoff

        board = BoardState(
            bot_team=bot,
            active_stones=active,
            bot_stones=bot_stones,
            opp_stones=opp_stones,
            bot_in_house=[s for s in bot_stones if is_in_house(s)],
            opp_in_house=[s for s in opp_stones if is_in_house(s)],
            in_house_sorted=in_house_sorted,
            shot_stone=shot_stone,
            shot_team=shot_team,
            bot_scoring=bot_scoring,
            opp_scoring=opp_scoring,
            bot_guards=[s for s in guards if s.team is bot],
            opp_guards=[s for s in guards if s.team is opp],
            center_guards=center_guards,
            center_blocked=len(center_guards) > 0,
            fgz_active=total_thrown < t.fgz_stone_limit,
            total_thrown=total_thrown,
            bot_stone_num=snapshot.thrown(bot) + 1,
            score_diff=score_diff,
            has_hammer=snapshot.hammer is bot,
            current_end=current_end,
            total_ends=total_ends,
            ends_remaining=ends_remaining,
            is_early_game=is_early,
            is_mid_game=is_mid,
            is_late_game=is_late,
            is_desperate_trailing=(
                score_diff < t.desperate_score_diff
                and ends_remaining <= t.desperate_ends_remaining
            ),
        )

        logger.debug(
            f"Board: stone {board.bot_stone_num}, hammer={board.has_hammer}, "
            f"shot={shot_team.value if shot_team else None}, "
            f"scoring bot={bot_scoring} opp={opp_scoring}, diff={score_diff}"
        )
        return board


def evaluate_board(
    snapshot: MatchSnapshot,
    team: Team = Team.YELLOW,
    thresholds: Optional[StrategyThresholds] = None,
) -> BoardState:
    """Convenience wrapper around BoardEvaluator.evaluate."""
    return BoardEvaluator(team, thresholds).evaluate(snapshot)
