"""Core Module - turn orchestration for the curling bot.

This module provides the primary interface for the decision engine:
- Board evaluation of the simulator's snapshot
- Shot selection and construction
- Aim solving and difficulty-scaled execution error
- Sweep advice for the engine's own travelling stone

Each CurlingBot instance owns its difficulty, random source and thinking
flag, so several matches can run side by side in one process.
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

import numpy as np

from ..config import DIFFICULTY_PROFILES, BotSettings, Difficulty, config
from .analysis.aim import AimSolver
from .analysis.collateral import CollateralAnalyzer
from .analysis.imperfection import ImperfectionModel
from .analysis.selection import ShotSelector
from .analysis.shots import ShotBuilder
from .analysis.sweep import SweepAdvisor
from .board import BoardEvaluator
from .constants import weight_to_speed
from .models import (
    BoardState,
    MatchSnapshot,
    ShotPlan,
    ShotType,
    Stone,
    SweepLevel,
    Team,
    ThrowParameters,
    TurnDecision,
)

logger = logging.getLogger(__name__)


class CurlBotError(Exception):
    """Base exception for curling bot errors."""

    pass


class TurnInProgressError(CurlBotError):
    """A turn was requested while another is still being decided."""

    pass


@dataclass
class TurnMetrics:
    """Per-engine decision statistics."""

    turns_taken: int = 0
    perfect_shots: int = 0
    shots_by_type: dict[str, int] = field(default_factory=dict)
    last_decision_time: float = 0.0
    avg_decision_time: float = 0.0

    def record(self, decision: TurnDecision) -> None:
        key = decision.plan.shot_type.value
        self.shots_by_type[key] = self.shots_by_type.get(key, 0) + 1
        if decision.throw.perfect:
            self.perfect_shots += 1
        self.avg_decision_time = (
            self.avg_decision_time * self.turns_taken + decision.decision_time
        ) / (self.turns_taken + 1)
        self.turns_taken += 1
        self.last_decision_time = decision.decision_time


class CurlingBot:
    """Plays one side of a curling match.

    Args:
        settings: Bot settings; read from the ``bot`` config section if omitted
        rng: Random source for every draw the engine makes; seeded from
            ``settings.seed`` if omitted
        speed_model: Slider-weight to release-speed mapping used for curl
            compensation
    """

    def __init__(
        self,
        settings: Optional[BotSettings] = None,
        rng: Optional[np.random.Generator] = None,
        speed_model: Callable[[float], float] = weight_to_speed,
    ):
        self.settings = settings or BotSettings.from_config(config)
        self.team = self.settings.team
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)

        self._difficulty = self.settings.difficulty
        self._thinking = False
        self.metrics = TurnMetrics()

        self._initialize_components(speed_model)

        logger.info(
            f"Curling bot initialized: team={self.team.value}, "
            f"difficulty={self._difficulty.value}"
        )

    def _initialize_components(self, speed_model: Callable[[float], float]) -> None:
        """Wire the turn pipeline."""
        strategy = self.settings.strategy

        self.evaluator = BoardEvaluator(self.team, strategy)
        self.collateral = CollateralAnalyzer()
        self.builder = ShotBuilder(self.rng, self.collateral)
        self.selector = ShotSelector(self.builder, strategy)
        self.aim_solver = AimSolver(speed_model)
        self.imperfection = ImperfectionModel(
            self.rng, DIFFICULTY_PROFILES[self._difficulty]
        )
        self.sweep_advisor = SweepAdvisor(self.team, self.settings.sweep)

    # ------------------------------------------------------------------
    # Difficulty
    # ------------------------------------------------------------------

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def set_difficulty(self, level: Union[str, Difficulty]) -> bool:
        """Select a difficulty tier for subsequent turns.

        Unrecognised values leave the current tier in place.

        Returns:
            True if the tier was changed
        """
        try:
            new_level = Difficulty(level)
        except ValueError:
            logger.warning(
                f"Unknown difficulty {level!r}, keeping {self._difficulty.value}"
            )
            return False

        self._difficulty = new_level
        self.imperfection.profile = DIFFICULTY_PROFILES[new_level]
        logger.info(f"Difficulty set to {new_level.value}")
        return True

    # ------------------------------------------------------------------
    # Turn
    # ------------------------------------------------------------------

    @property
    def is_thinking(self) -> bool:
        return self._thinking

    @contextmanager
    def _thinking_guard(self) -> Iterator[None]:
        if self._thinking:
            logger.warning("Turn requested while a decision is in flight")
            raise TurnInProgressError("A turn is already being decided")
        self._thinking = True
        try:
            yield
        finally:
            self._thinking = False

    def evaluate(self, snapshot: MatchSnapshot) -> BoardState:
        return self.evaluator.evaluate(snapshot)

    def plan_shot(self, board: BoardState) -> ShotPlan:
        """Ideal shot for ``board``, before execution error."""
        return self.selector.select(board)

    def take_turn(self, snapshot: MatchSnapshot) -> TurnDecision:
        """Decide the throw for the current snapshot.

        Raises:
            TurnInProgressError: If called while another turn is being decided
        """
        with self._thinking_guard():
            start_time = time.perf_counter()

            board = self.evaluate(snapshot)
            plan = self.plan_shot(board)
            ideal_aim = self.aim_solver.solve(plan)
            throw = self.imperfection.apply(ideal_aim, plan)

            decision = TurnDecision(
                board=board,
                plan=plan,
                ideal_aim=ideal_aim,
                throw=throw,
                decision_time=time.perf_counter() - start_time,
            )
            self.metrics.record(decision)

            logger.info(
                f"[Bot] {plan.description}: aim={throw.aim:.2f}° "
                f"weight={throw.weight:.0f}% spin={throw.spin_label} "
                f"rot={throw.spin_amount:.1f}"
            )
            return decision

    # ------------------------------------------------------------------
    # Sweeping
    # ------------------------------------------------------------------

    def advise_sweep(self, stone: Optional[Stone]) -> SweepLevel:
        return self.sweep_advisor.advise(stone)

    def decide_sweep(self, snapshot: MatchSnapshot) -> SweepLevel:
        """Sweep advice for the snapshot's delivered stone."""
        return self.advise_sweep(snapshot.delivered_stone)


__all__ = [
    "BoardState",
    "CurlBotError",
    "CurlingBot",
    "MatchSnapshot",
    "ShotPlan",
    "ShotType",
    "Stone",
    "SweepLevel",
    "Team",
    "ThrowParameters",
    "TurnDecision",
    "TurnInProgressError",
    "TurnMetrics",
]
