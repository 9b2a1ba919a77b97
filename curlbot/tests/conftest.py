"""Shared test configuration and fixtures for the curling bot."""

from typing import Optional

import numpy as np
import pytest

from curlbot.config import Config, StrategyThresholds
from curlbot.core.board import BoardEvaluator
from curlbot.core.constants import FAR_BACK_LINE, FAR_HOG_LINE, FAR_TEE_LINE
from curlbot.core.models import BoardState, MatchSnapshot, Stone, Team


@pytest.fixture()
def rng():
    """Seeded random source."""
    return np.random.default_rng(1234)


@pytest.fixture()
def house_stone():
    """Factory for a stone placed relative to the far tee."""

    def _make(x: float = 0.0, dy: float = 0.0, team: Team = Team.RED) -> Stone:
        return Stone(x=x, y=FAR_TEE_LINE + dy, team=team)

    return _make


@pytest.fixture()
def guard_stone():
    """Factory for a stone placed relative to the far hog line."""

    def _make(x: float = 0.0, dy: float = 2.0, team: Team = Team.RED) -> Stone:
        return Stone(x=x, y=FAR_HOG_LINE + dy, team=team)

    return _make


@pytest.fixture()
def make_board():
    """Factory evaluating a snapshot from the yellow side by default."""

    def _make(
        stones=(),
        team: Team = Team.YELLOW,
        thresholds: Optional[StrategyThresholds] = None,
        **snapshot_fields,
    ) -> BoardState:
        snapshot = MatchSnapshot(stones=list(stones), **snapshot_fields)
        return BoardEvaluator(team, thresholds).evaluate(snapshot)

    return _make


@pytest.fixture()
def random_snapshot():
    """Factory for arbitrary (possibly unrealistic) snapshots."""

    def _make(rng: np.random.Generator, max_stones: int = 16) -> MatchSnapshot:
        count = int(rng.integers(0, max_stones + 1))
        stones = [
            Stone(
                x=float(rng.uniform(-2.2, 2.2)),
                y=float(rng.uniform(FAR_HOG_LINE - 2.0, FAR_BACK_LINE)),
                team=Team.RED if rng.random() < 0.5 else Team.YELLOW,
                active=bool(rng.random() < 0.9),
            )
            for _ in range(count)
        ]
        total_ends = int(rng.integers(4, 11))
        return MatchSnapshot(
            stones=stones,
            red_thrown=int(rng.integers(0, 8)),
            yellow_thrown=int(rng.integers(0, 8)),
            hammer=[Team.RED, Team.YELLOW, None][int(rng.integers(0, 3))],
            red_score=int(rng.integers(0, 10)),
            yellow_score=int(rng.integers(0, 10)),
            current_end=int(rng.integers(1, total_ends + 1)),
            total_ends=total_ends,
        )

    return _make


@pytest.fixture()
def isolated_config(tmp_path):
    """Point the Config singleton at a temp file, restoring it afterwards."""
    saved_file = Config._config_file
    saved_data = Config._config_data
    saved_loaded = Config._loaded
    config_file = tmp_path / "config.json"
    config_file.write_text("{}", encoding="utf-8")
    Config.set_config_file(config_file)
    yield config_file
    Config._config_file = saved_file
    Config._config_data = saved_data
    Config._loaded = saved_loaded
