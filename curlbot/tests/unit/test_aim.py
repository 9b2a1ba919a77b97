"""Unit tests for aim solving."""

import math

import pytest

from curlbot.core.analysis.aim import CURL_SCALE, AimSolver
from curlbot.core.constants import FAR_TEE_LINE, RELEASE_Y
from curlbot.core.models import ShotPlan, ShotType


def make_plan(x=0.0, y=FAR_TEE_LINE, weight=35.0, spin=1, spin_amount=3.0):
    return ShotPlan(
        target_x=x,
        target_y=y,
        weight=weight,
        spin=spin,
        spin_amount=spin_amount,
        shot_type=ShotType.DRAW_TO_HOUSE,
        description="Draw",
    )


@pytest.mark.unit()
class TestAimSolver:
    """Test suite for AimSolver."""

    def test_straight_hit(self):
        assert AimSolver().solve(make_plan(weight=65.0)) == pytest.approx(0.0)

    def test_bearing_without_compensation(self):
        plan = make_plan(x=0.8, weight=50.0)
        expected = math.degrees(math.atan2(0.8, FAR_TEE_LINE - RELEASE_Y))
        assert AimSolver().solve(plan) == pytest.approx(expected)

    def test_clamped_to_slider_range(self):
        solver = AimSolver()
        assert solver.solve(make_plan(x=10.0, y=20.0, weight=70.0)) == 5.0
        assert solver.solve(make_plan(x=-10.0, y=20.0, weight=70.0)) == -5.0

    def test_custom_aim_limit(self):
        solver = AimSolver(aim_limit=1.0)
        assert solver.solve(make_plan(x=3.0, weight=70.0)) == 1.0

    @pytest.mark.parametrize("spin,sign", [(1, -1), (-1, 1)])
    def test_draw_compensates_against_curl(self, spin, sign):
        aim = AimSolver().solve(make_plan(spin=spin))
        assert aim != 0.0
        assert math.copysign(1, aim) == sign

    def test_compensation_magnitude(self):
        solver = AimSolver(speed_model=lambda w: 3.0)
        plan = make_plan(weight=35.0, spin=1, spin_amount=3.0)
        dist = FAR_TEE_LINE - RELEASE_Y
        expected = -math.degrees(math.atan2(CURL_SCALE, dist))
        assert solver.solve(plan) == pytest.approx(expected)

    def test_no_compensation_at_control_weight(self):
        solver = AimSolver()
        assert solver.solve(make_plan(weight=43.0, spin=1)) == pytest.approx(0.0)
        assert solver.solve(make_plan(weight=42.9, spin=1)) < 0.0

    def test_curl_shrinks_with_weight(self):
        solver = AimSolver()
        curls = [solver.estimate_curl(w, 3.0) for w in (5, 20, 35, 42)]
        assert curls == sorted(curls, reverse=True)

    def test_curl_grows_with_spin(self):
        solver = AimSolver(speed_model=lambda w: 3.0)
        assert solver.estimate_curl(30, 2.0) < solver.estimate_curl(30, 4.0)
        assert solver.estimate_curl(30, 3.0) == pytest.approx(CURL_SCALE)

    def test_zero_speed_model_is_bounded(self):
        solver = AimSolver(speed_model=lambda w: 0.0)
        aim = solver.solve(make_plan())
        assert -5.0 <= aim <= 5.0
