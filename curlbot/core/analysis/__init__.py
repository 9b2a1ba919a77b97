"""Analysis module exports."""

from .aim import AimSolver
from .collateral import CollateralAnalyzer
from .imperfection import ImperfectionModel
from .selection import (
    WITH_HAMMER_RULES,
    WITHOUT_HAMMER_RULES,
    Rule,
    SelectionContext,
    ShotSelector,
    StoneBand,
)
from .shots import SHOT_WEIGHT_BANDS, ShotBuilder
from .sweep import SweepAdvisor

__all__ = [
    "AimSolver",
    "CollateralAnalyzer",
    "ImperfectionModel",
    "Rule",
    "SelectionContext",
    "ShotBuilder",
    "ShotSelector",
    "SHOT_WEIGHT_BANDS",
    "StoneBand",
    "SweepAdvisor",
    "WITH_HAMMER_RULES",
    "WITHOUT_HAMMER_RULES",
]
