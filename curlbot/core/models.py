"""Core data models and types for the curling bot.

This module contains the data structures exchanged between the engine and
its collaborators, and between the engine's own stages:

- Stone / MatchSnapshot: read-only view of the simulator's game state
- BoardState: derived per-turn assessment built by the board evaluator
- ShotPlan: ideal shot produced by a shot constructor
- ThrowParameters: final executable slider values after the error model
- SweepLevel: sweep advice for a travelling stone

All positions are in metres in the sheet frame described in constants.py.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..config.schemas import Team


class ShotType(Enum):
    """Shot archetypes the engine can construct."""

    CENTER_GUARD = "center_guard"
    CORNER_GUARD = "corner_guard"
    DRAW_BEHIND_GUARD = "draw_behind_guard"
    DRAW_TO_HOUSE = "draw_to_house"
    DRAW_TO_BUTTON = "draw_to_button"
    GUARD_OWN_STONE = "guard_own_stone"
    TAKEOUT = "takeout"
    TAKEOUT_GUARD = "takeout_guard"
    PEEL = "peel"
    BLANK = "blank"
    HIT_AND_ROLL = "hit_and_roll"
    FREEZE = "freeze"
    TAP = "tap"


class SweepLevel(Enum):
    """Sweep intensity advice."""

    NONE = "none"
    LIGHT = "light"
    HARD = "hard"


@dataclass
class Stone:
    """A stone as reported by the physics collaborator.

    The engine only reads stones; it never moves or mutates them.
    """

    x: float
    y: float
    team: Team
    active: bool = True
    moving: bool = False
    vx: float = 0.0
    vy: float = 0.0
    id: Optional[str] = None

    @property
    def speed(self) -> float:
        return math.sqrt(self.vx**2 + self.vy**2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "team": self.team.value,
            "active": self.active,
            "moving": self.moving,
            "vx": self.vx,
            "vy": self.vy,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stone":
        """Create a stone from a dictionary.

        Raises:
            ValueError: If the team name is not recognised
        """
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            team=Team(data["team"]),
            active=bool(data.get("active", True)),
            moving=bool(data.get("moving", False)),
            vx=float(data.get("vx", 0.0)),
            vy=float(data.get("vy", 0.0)),
            id=data.get("id"),
        )


@dataclass
class MatchSnapshot:
    """Read-only snapshot of the match handed to the engine each turn."""

    stones: list[Stone] = field(default_factory=list)
    red_thrown: int = 0
    yellow_thrown: int = 0
    hammer: Optional[Team] = None
    red_score: int = 0
    yellow_score: int = 0
    current_end: int = 1
    total_ends: int = 10
    delivered_stone: Optional[Stone] = None

    def thrown(self, team: Team) -> int:
        """Stones thrown so far this end by ``team``."""
        return self.red_thrown if team is Team.RED else self.yellow_thrown

    def score(self, team: Team) -> int:
        return self.red_score if team is Team.RED else self.yellow_score

    def get_active_stones(self) -> list[Stone]:
        return [s for s in self.stones if s.active]

    def to_dict(self) -> dict[str, Any]:
        return {
            "stones": [s.to_dict() for s in self.stones],
            "red_thrown": self.red_thrown,
            "yellow_thrown": self.yellow_thrown,
            "hammer": self.hammer.value if self.hammer else None,
            "red_score": self.red_score,
            "yellow_score": self.yellow_score,
            "current_end": self.current_end,
            "total_ends": self.total_ends,
            "delivered_stone": (
                self.delivered_stone.to_dict() if self.delivered_stone else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchSnapshot":
        """Create a snapshot from a dictionary, defaulting missing fields."""
        hammer = data.get("hammer")
        delivered = data.get("delivered_stone")
        return cls(
            stones=[Stone.from_dict(s) for s in data.get("stones", [])],
            red_thrown=int(data.get("red_thrown", 0)),
            yellow_thrown=int(data.get("yellow_thrown", 0)),
            hammer=Team(hammer) if hammer else None,
            red_score=int(data.get("red_score", 0)),
            yellow_score=int(data.get("yellow_score", 0)),
            current_end=int(data.get("current_end", 1)),
            total_ends=int(data.get("total_ends", 10)),
            delivered_stone=Stone.from_dict(delivered) if delivered else None,
        )


@dataclass(frozen=True)
class RankedStone:
    """A stone paired with its distance to the tee."""

    stone: Stone
    dist: float

    @property
    def team(self) -> Team:
        return self.stone.team


@dataclass
class BoardState:
    """Derived board assessment, rebuilt every turn and then discarded.

    Team-relative fields are from the engine's point of view: ``bot_*`` is
    the engine's own side, ``opp_*`` the opponent.
    """

    bot_team: Team
    active_stones: list[Stone] = field(default_factory=list)
    bot_stones: list[Stone] = field(default_factory=list)
    opp_stones: list[Stone] = field(default_factory=list)
    bot_in_house: list[Stone] = field(default_factory=list)
    opp_in_house: list[Stone] = field(default_factory=list)
    in_house_sorted: list[RankedStone] = field(default_factory=list)
    shot_stone: Optional[RankedStone] = None
    shot_team: Optional[Team] = None
    bot_scoring: int = 0
    opp_scoring: int = 0
    bot_guards: list[Stone] = field(default_factory=list)
    opp_guards: list[Stone] = field(default_factory=list)
    center_guards: list[Stone] = field(default_factory=list)
    center_blocked: bool = False
    fgz_active: bool = True
    total_thrown: int = 0
    bot_stone_num: int = 1
    score_diff: int = 0
    has_hammer: bool = False
    current_end: int = 1
    total_ends: int = 10
    ends_remaining: int = 9
    is_early_game: bool = True
    is_mid_game: bool = False
    is_late_game: bool = False
    is_desperate_trailing: bool = False

    @property
    def opp_team(self) -> Team:
        return self.bot_team.opponent

    def in_house_for(self, team: Team) -> list[RankedStone]:
        """In-house entries for ``team``, closest to the tee first."""
        return [r for r in self.in_house_sorted if r.team is team]

    def center_guards_for(self, team: Team) -> list[Stone]:
        return [s for s in self.center_guards if s.team is team]


@dataclass
class ShotPlan:
    """Ideal shot chosen by a shot constructor, before execution error."""

    target_x: float
    target_y: float
    weight: float  # slider 0-100
    spin: int  # +1 clockwise (in-turn), -1 counter-clockwise (out-turn)
    spin_amount: float  # rotations, 2.0-5.0
    shot_type: ShotType
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_x": self.target_x,
            "target_y": self.target_y,
            "weight": self.weight,
            "spin": self.spin,
            "spin_amount": self.spin_amount,
            "shot_type": self.shot_type.value,
            "description": self.description,
        }


@dataclass
class ThrowParameters:
    """Final slider values handed to the thrower, after execution error."""

    aim: float  # degrees, [-5, 5]
    weight: float  # slider, [0, 100]
    spin: int
    spin_amount: float  # [2, 5]
    description: str
    shot_type: ShotType
    perfect: bool = False

    @property
    def spin_label(self) -> str:
        return "CW" if self.spin > 0 else "CCW"

    def to_dict(self) -> dict[str, Any]:
        """Throw message fields for the transport collaborator."""
        return {
            "aim": self.aim,
            "weight": self.weight,
            "spin_dir": self.spin,
            "spin_amount": self.spin_amount,
        }


@dataclass
class TurnDecision:
    """Everything the engine decided for one turn."""

    board: BoardState
    plan: ShotPlan
    ideal_aim: float
    throw: ThrowParameters
    decision_time: float = 0.0
