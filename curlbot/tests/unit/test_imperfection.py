"""Unit tests for the execution error model."""

import numpy as np
import pytest

from curlbot.config import DIFFICULTY_PROFILES, Difficulty, DifficultyProfile
from curlbot.core.analysis.imperfection import ImperfectionModel
from curlbot.core.models import ShotPlan, ShotType


def make_plan(weight=35.0, spin=-1, spin_amount=3.0):
    return ShotPlan(
        target_x=0.3,
        target_y=38.4,
        weight=weight,
        spin=spin,
        spin_amount=spin_amount,
        shot_type=ShotType.DRAW_TO_HOUSE,
        description="Draw",
    )


@pytest.mark.unit()
class TestImperfectionModel:
    """Test suite for ImperfectionModel."""

    @pytest.mark.parametrize("level", list(Difficulty), ids=lambda d: d.value)
    def test_perfect_rate(self, level):
        profile = DIFFICULTY_PROFILES[level]
        model = ImperfectionModel(np.random.default_rng(42), profile)
        plan = make_plan()

        trials = 10_000
        perfect = sum(model.apply(0.0, plan).perfect for _ in range(trials))
        assert abs(perfect / trials - profile.perfect_rate) < 0.02

    @pytest.mark.parametrize("level", list(Difficulty), ids=lambda d: d.value)
    def test_outputs_in_range(self, level):
        model = ImperfectionModel(np.random.default_rng(3), DIFFICULTY_PROFILES[level])
        plans = [
            make_plan(weight=1.0, spin_amount=2.0),
            make_plan(weight=99.0, spin_amount=4.0),
        ]
        for _ in range(2000):
            for aim, plan in ((4.9, plans[0]), (-4.9, plans[1])):
                throw = model.apply(aim, plan)
                assert -5.0 <= throw.aim <= 5.0
                assert 0.0 <= throw.weight <= 100.0
                assert 2.0 <= throw.spin_amount <= 5.0
                assert throw.spin == plan.spin
                assert throw.shot_type is plan.shot_type
                assert throw.description == plan.description

    def test_always_perfect_keeps_spin_amount(self):
        profile = DifficultyProfile(
            label="Test", aim_error=0.4, weight_error=5, perfect_rate=1.0
        )
        model = ImperfectionModel(np.random.default_rng(0), profile)
        for _ in range(100):
            throw = model.apply(0.0, make_plan(spin_amount=3.3))
            assert throw.perfect is True
            assert throw.spin_amount == 3.3

    def test_perfect_error_is_small(self):
        profile = DifficultyProfile(
            label="Test", aim_error=1.0, weight_error=10, perfect_rate=1.0
        )
        model = ImperfectionModel(np.random.default_rng(0), profile)
        weights = [model.apply(0.0, make_plan(weight=50.0)).weight for _ in range(2000)]
        # Perfect attempts keep 15% of the tier's weight error
        assert np.std(weights) == pytest.approx(1.5, rel=0.1)

    def test_never_perfect(self):
        profile = DifficultyProfile(
            label="Test", aim_error=0.4, weight_error=5, perfect_rate=0.0
        )
        model = ImperfectionModel(np.random.default_rng(0), profile)
        assert not any(model.apply(0.0, make_plan()).perfect for _ in range(500))

    def test_zero_error_is_exact(self):
        profile = DifficultyProfile(
            label="Test",
            aim_error=0.0,
            weight_error=0.0,
            perfect_rate=0.0,
            spin_error=0.0,
        )
        model = ImperfectionModel(np.random.default_rng(0), profile)
        throw = model.apply(1.25, make_plan(weight=33.0, spin_amount=2.7))
        assert (throw.aim, throw.weight, throw.spin_amount) == (1.25, 33.0, 2.7)

    def test_seeded_runs_reproduce(self):
        plan = make_plan()
        first = ImperfectionModel(np.random.default_rng(77))
        second = ImperfectionModel(np.random.default_rng(77))
        for _ in range(20):
            assert first.apply(0.5, plan) == second.apply(0.5, plan)
