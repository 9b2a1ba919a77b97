"""Unit tests for sweep advice."""

import pytest

from curlbot.config import SweepSettings
from curlbot.core.analysis.sweep import SweepAdvisor
from curlbot.core.constants import NEAR_HOG_LINE
from curlbot.core.models import Stone, SweepLevel, Team


def moving(x=0.0, y=20.0, vx=0.0, vy=1.0, team=Team.YELLOW):
    return Stone(x=x, y=y, team=team, moving=True, vx=vx, vy=vy)


@pytest.fixture()
def advisor():
    return SweepAdvisor(Team.YELLOW)


@pytest.mark.unit()
class TestSweepAdvisor:
    """Test suite for SweepAdvisor."""

    @pytest.mark.parametrize(
        "x,level",
        [
            (1.5, SweepLevel.HARD),
            (-1.5, SweepLevel.HARD),
            (1.0, SweepLevel.LIGHT),
            (1.2, SweepLevel.LIGHT),
        ],
    )
    def test_fast_stone(self, advisor, x, level):
        assert advisor.advise(moving(x=x, y=15.0, vy=3.0)) is level

    def test_before_near_hog(self, advisor):
        stone = moving(y=NEAR_HOG_LINE - 0.5, vy=1.0)
        assert advisor.advise(stone) is SweepLevel.NONE

    def test_stationary_stone(self, advisor):
        stone = Stone(x=0.0, y=20.0, team=Team.YELLOW)
        assert advisor.advise(stone) is SweepLevel.NONE

    def test_opponent_stone(self, advisor):
        assert advisor.advise(moving(team=Team.RED, vy=3.0)) is SweepLevel.NONE

    def test_no_stone(self, advisor):
        assert advisor.advise(None) is SweepLevel.NONE

    def test_slow_stone_well_short(self, advisor):
        # Stops about 6.4 m past y=15, far short of the house
        assert advisor.advise(moving(y=15.0, vy=1.0)) is SweepLevel.HARD

    def test_slow_stone_in_front_of_four_foot(self, advisor):
        # Stops about 7.2 m past y=30, inside the 12-foot but short of the 4-foot
        assert advisor.advise(moving(y=30.0, vy=1.063)) is SweepLevel.LIGHT

    def test_slow_stone_reaching_the_button(self, advisor):
        assert advisor.advise(moving(y=30.0, vy=2.0)) is SweepLevel.NONE

    def test_stopping_distance(self, advisor):
        assert advisor.stopping_distance(1.0) == pytest.approx(1 / (2 * 0.008 * 9.81))
        assert advisor.stopping_distance(0.0) == 0.0

    def test_projected_stop_follows_velocity(self, advisor):
        stone = moving(y=20.0, vx=0.6, vy=0.8)
        assert advisor.projected_stop_y(stone) == pytest.approx(
            20.0 + advisor.stopping_distance(1.0) * 0.8
        )

    def test_custom_settings(self):
        advisor = SweepAdvisor(Team.RED, SweepSettings(fast_speed=5.0, wide_line=0.5))
        # Below the raised fast threshold, treated as a draw reaching the back
        assert advisor.advise(moving(x=1.0, y=30.0, vy=3.0, team=Team.RED)) is (
            SweepLevel.NONE
        )

    def test_repeated_calls_agree(self, advisor):
        stone = moving(y=25.0, vy=1.2)
        first = advisor.advise(stone)
        assert all(advisor.advise(stone) is first for _ in range(5))
