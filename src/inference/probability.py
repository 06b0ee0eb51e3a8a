"""
Constraint-based mine probability estimation.

Works on the visible grid only. Every revealed clue gives a local
estimate for its closed neighbours; the estimates touching a cell
are combined into that cell's mine probability.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from game import CellKind, Position, VisibleGrid


ASSUMED_BOMB_DENSITY = 0.1


# ============================================================================
# Local Constraint
# ============================================================================

@dataclass(frozen=True)
class LocalEstimate:
    """
    What one revealed clue says about its undetermined neighbours.

    For example, a revealed "2" with one flagged neighbour and four
    unrevealed ones leaves 1 mine among 4 cells: estimate 0.25.
    Exploded neighbours count as known mines, the same as flags.
    """

    remaining_mines: int
    undetermined: int

    @property
    def is_safe(self) -> bool:
        return self.remaining_mines <= 0

    @property
    def is_mine(self) -> bool:
        return self.remaining_mines >= self.undetermined

    @property
    def value(self) -> float:
        """Estimate clamped to [0, 1]; contradictory clues saturate."""
        if self.is_safe:
            return 0.0
        if self.is_mine:
            return 1.0
        return self.remaining_mines / self.undetermined


# ============================================================================
# Probability Engine
# ============================================================================

class ConstraintProbabilityEngine:
    """
    Derives a mine probability for every undetermined cell.

    Combination rule for a cell's constraining clues:
        - any certainly-safe estimate -> 0
        - otherwise any certainly-mined estimate -> 1
        - otherwise 1 - prod(1 - p_i)
    Cells with no revealed neighbour get `assumed_bomb_density`.
    """

    def __init__(self, assumed_bomb_density: float = ASSUMED_BOMB_DENSITY) -> None:
        if not 0.0 <= assumed_bomb_density <= 1.0:
            raise ValueError("Assumed bomb density must be within [0, 1]")
        self.assumed_bomb_density = assumed_bomb_density

    def local_estimates(self, grid: VisibleGrid) -> Dict[Position, LocalEstimate]:
        """
        Build the local estimate of every applicable revealed clue.

        Clues with no undetermined neighbour are inapplicable and are
        left out.
        """
        estimates: Dict[Position, LocalEstimate] = {}
        for (col, row), cell in grid.cells():
            if cell.kind != CellKind.REVEALED:
                continue

            undetermined = 0
            known_mines = 0
            for neighbor in grid.neighbors_of(col, row):
                other = grid[neighbor]
                if other.is_undetermined:
                    undetermined += 1
                elif other.is_known_mine:
                    known_mines += 1

            if undetermined == 0:
                continue
            estimates[(col, row)] = LocalEstimate(
                remaining_mines=cell.count - known_mines,
                undetermined=undetermined,
            )
        return estimates

    def _combine(self, constraints: List[LocalEstimate]) -> float:
        if not constraints:
            return self.assumed_bomb_density
        if any(estimate.is_safe for estimate in constraints):
            return 0.0
        if any(estimate.is_mine for estimate in constraints):
            return 1.0
        safe_product = 1.0
        for estimate in constraints:
            safe_product *= 1.0 - estimate.value
        return 1.0 - safe_product

    def probabilities(self, grid: VisibleGrid) -> Dict[Position, float]:
        """
        Mine probability of every unrevealed or suggested cell.

        Returns:
            Dict mapping (col, row) to a probability in [0, 1].
        """
        estimates = self.local_estimates(grid)
        result: Dict[Position, float] = {}
        for (col, row), cell in grid.cells():
            if not cell.is_undetermined:
                continue
            constraints = [
                estimates[neighbor]
                for neighbor in grid.neighbors_of(col, row)
                if neighbor in estimates
            ]
            result[(col, row)] = self._combine(constraints)
        return result

    def probability_at(
        self, grid: VisibleGrid, col: int, row: int
    ) -> Optional[float]:
        """
        Mine probability of a single cell.

        Returns:
            The probability, or None if the cell is not undetermined.

        Raises:
            InvalidCoordinate: If (col, row) is outside the grid.
        """
        cell = grid.get(col, row)
        if not cell.is_undetermined:
            return None
        estimates = self.local_estimates(grid)
        return self._combine([
            estimates[neighbor]
            for neighbor in grid.neighbors_of(col, row)
            if neighbor in estimates
        ])

    def probability_array(self, grid: VisibleGrid) -> np.ndarray:
        """Probabilities as a [row, col] float array, NaN where determined."""
        array = np.full((grid.height, grid.width), np.nan)
        for (col, row), probability in self.probabilities(grid).items():
            array[row, col] = probability
        return array
