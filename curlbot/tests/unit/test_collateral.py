"""Unit tests for collateral-damage analysis."""

import pytest

from curlbot.core.analysis.collateral import (
    DANGER_DEPTH,
    DANGER_RADIUS,
    CollateralAnalyzer,
)
from curlbot.core.models import Team


@pytest.fixture()
def analyzer():
    return CollateralAnalyzer()


@pytest.mark.unit()
class TestHasFriendlyBehind:
    """Test the knock-on lane check."""

    def test_danger_window_dimensions(self):
        assert DANGER_DEPTH > 1.0
        assert DANGER_RADIUS > 0.5

    def test_friendly_directly_behind(self, analyzer, house_stone, make_board):
        target = house_stone(x=0.0, team=Team.RED)
        friendly = house_stone(x=0.0, dy=1.0, team=Team.YELLOW)
        board = make_board([target, friendly])

        assert analyzer.has_friendly_behind(target, board) is True

    def test_friendly_in_front_is_safe(self, analyzer, house_stone, make_board):
        target = house_stone(x=0.0, team=Team.RED)
        friendly = house_stone(x=0.0, dy=-0.5, team=Team.YELLOW)
        board = make_board([target, friendly])

        assert analyzer.has_friendly_behind(target, board) is False

    def test_friendly_outside_lane(self, analyzer, house_stone, make_board):
        target = house_stone(x=0.0, team=Team.RED)
        friendly = house_stone(x=1.0, dy=1.0, team=Team.YELLOW)
        board = make_board([target, friendly])

        assert analyzer.has_friendly_behind(target, board) is False

    def test_friendly_beyond_depth(self, analyzer, house_stone, make_board):
        target = house_stone(x=0.0, dy=-1.0, team=Team.RED)
        friendly = house_stone(x=0.0, dy=-1.0 + DANGER_DEPTH + 0.1, team=Team.YELLOW)
        board = make_board([target, friendly])

        assert analyzer.has_friendly_behind(target, board) is False

    def test_opponent_stone_behind_is_ignored(self, analyzer, house_stone, make_board):
        target = house_stone(x=0.0, team=Team.RED)
        other = house_stone(x=0.0, dy=1.0, team=Team.RED)
        board = make_board([target, other])

        assert analyzer.has_friendly_behind(target, board) is False


@pytest.mark.unit()
class TestFindSafeTarget:
    """Test safe target selection."""

    def test_no_opponent_stones(self, analyzer, house_stone, make_board):
        board = make_board([house_stone(x=0.0, team=Team.YELLOW)])
        assert analyzer.find_safe_target(board) is None

    def test_nearest_safe_target(self, analyzer, house_stone, make_board):
        near = house_stone(x=0.0, team=Team.RED)
        far = house_stone(x=0.9, dy=0.3, team=Team.RED)
        board = make_board([far, near])

        assert analyzer.find_safe_target(board) is near

    def test_skips_unsafe_target(self, analyzer, house_stone, make_board):
        near = house_stone(x=0.0, team=Team.RED)
        far = house_stone(x=0.9, dy=0.3, team=Team.RED)
        behind_near = house_stone(x=0.0, dy=0.5, team=Team.YELLOW)
        board = make_board([near, far, behind_near])

        assert analyzer.find_safe_target(board) is far

    def test_all_targets_unsafe(self, analyzer, house_stone, make_board):
        near = house_stone(x=0.0, team=Team.RED)
        far = house_stone(x=0.9, dy=0.3, team=Team.RED)
        board = make_board(
            [
                near,
                far,
                house_stone(x=0.0, dy=0.5, team=Team.YELLOW),
                house_stone(x=0.9, dy=0.8, team=Team.YELLOW),
            ]
        )

        assert analyzer.find_safe_target(board) is None
