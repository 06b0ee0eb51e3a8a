"""
Suggestion planner.

Runs the probability engine to a fixpoint, turning certainties into
flags and known-safe marks, then suggests the least risky cells.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from game import (
    CellKind,
    Position,
    VisibleCell,
    VisibleGrid,
    FLAGGED,
    KNOWN_SAFE,
    SUGGESTED,
    UNREVEALED,
    make_rng,
)
from game.board import RandomSource

from .probability import ConstraintProbabilityEngine


logger = logging.getLogger(__name__)


@dataclass
class Plan:
    """
    Result of one planning run.

    Attributes:
        grid: Annotated copy of the input grid.
        passes: Number of probability passes performed.
        probabilities: Probabilities of the cells still undetermined
            at the fixpoint.
        suggested: Cells marked as the suggested next click.
        known_safe: Every known-safe cell in the annotated grid.
        flagged: Every flagged cell in the annotated grid.
    """

    grid: VisibleGrid
    passes: int
    probabilities: Dict[Position, float] = field(default_factory=dict)
    suggested: List[Position] = field(default_factory=list)
    known_safe: List[Position] = field(default_factory=list)
    flagged: List[Position] = field(default_factory=list)

    @property
    def lowest_probability(self) -> Optional[float]:
        if not self.probabilities:
            return None
        return min(self.probabilities.values())


class SuggestionPlanner:
    """
    Fixpoint loop over `ConstraintProbabilityEngine`.

    Each pass promotes probability-0 cells to known safe and
    probability-1 cells to flagged. Promotions change the clue
    denominators of neighbouring cells, so passes repeat until one
    promotes nothing or no undetermined cell is left. Every non-final
    pass promotes at least one cell, so a W x H grid needs at most
    W * H passes.
    """

    def __init__(self, engine: Optional[ConstraintProbabilityEngine] = None) -> None:
        self.engine = engine or ConstraintProbabilityEngine()

    def plan(self, grid: VisibleGrid) -> Plan:
        """
        Annotate `grid` with deductions and a suggestion.

        The input grid is not modified.
        """
        current = grid
        passes = 0
        max_passes = grid.width * grid.height

        while True:
            passes += 1
            probabilities = self.engine.probabilities(current)
            promotions = {}
            for position, probability in probabilities.items():
                if probability == 0.0:
                    promotions[position] = KNOWN_SAFE
                elif probability == 1.0:
                    promotions[position] = FLAGGED

            logger.debug("Pass %d promoted %d cells", passes, len(promotions))
            if not promotions:
                break
            current = current.replace(promotions)
            if not current.count(CellKind.UNREVEALED, CellKind.SUGGESTED):
                probabilities = {}
                break
            if passes >= max_passes:
                raise RuntimeError("Planner exceeded its pass bound")

        suggested = self._lowest(probabilities)
        current = current.replace(self._suggestion_updates(current, suggested))

        return Plan(
            grid=current,
            passes=passes,
            probabilities=probabilities,
            suggested=suggested,
            known_safe=current.positions_of(CellKind.KNOWN_SAFE),
            flagged=current.positions_of(CellKind.FLAGGED),
        )

    @staticmethod
    def _lowest(probabilities: Dict[Position, float]) -> List[Position]:
        """Cells sharing the globally minimal probability."""
        if not probabilities:
            return []
        lowest = min(probabilities.values())
        return sorted(
            position
            for position, probability in probabilities.items()
            if probability == lowest
        )

    @staticmethod
    def _suggestion_updates(
        grid: VisibleGrid, suggested: List[Position]
    ) -> Dict[Position, VisibleCell]:
        """Mark `suggested`, and clear stale suggestions elsewhere."""
        chosen = set(suggested)
        updates = {position: SUGGESTED for position in chosen}
        for position in grid.positions_of(CellKind.SUGGESTED):
            if position not in chosen:
                updates[position] = UNREVEALED
        return updates

    def next_move(
        self, plan: Plan, rng: RandomSource = None
    ) -> Optional[Position]:
        """
        Pick the next cell to click.

        Samples uniformly among known-safe cells when there are any,
        otherwise among suggested cells.

        Returns:
            (col, row), or None if nothing is left to click.
        """
        candidates = plan.known_safe or plan.suggested
        if not candidates:
            return None
        generator = make_rng(rng)
        return candidates[int(generator.integers(len(candidates)))]
