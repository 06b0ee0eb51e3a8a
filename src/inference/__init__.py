"""
Mine inference module.

Provides probability estimation over the visible grid:
- ConstraintProbabilityEngine: Local clue arithmetic per undetermined cell
- SuggestionPlanner: Fixpoint promotion of certainties plus next-move suggestion
- MonteCarloEstimator: Rejection sampling over a textual clue grid
"""
from .probability import (
    ASSUMED_BOMB_DENSITY,
    ConstraintProbabilityEngine,
    LocalEstimate,
)
from .planner import Plan, SuggestionPlanner
from .montecarlo import (
    MonteCarloEstimator,
    MonteCarloResult,
    parse_clue_grid,
)

__all__ = [
    "ASSUMED_BOMB_DENSITY",
    "ConstraintProbabilityEngine",
    "LocalEstimate",
    "Plan",
    "SuggestionPlanner",
    "MonteCarloEstimator",
    "MonteCarloResult",
    "parse_clue_grid",
]
