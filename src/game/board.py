"""
Board module for Minesweeper game.

Owns the hidden ground truth: board dimensions and the mine layout.
The layout is drawn once at generation and is read-only afterwards;
everything the player sees lives in separate `VisibleGrid` snapshots.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .cell import CellKind
from .errors import InvalidCoordinate, InvalidDimensions
from .grid import Position, VisibleGrid, neighbor_positions


RandomSource = Union[np.random.Generator, int, None]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        density: Probability that any given cell is a mine.
    """

    width: int = 9
    height: int = 9
    density: float = 0.12

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions("Board dimensions must be positive")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError("Mine density must be within [0, 1]")


# Preset difficulty levels (densities match the classic mine counts)
BEGINNER = BoardConfig(9, 9, 10 / 81)
INTERMEDIATE = BoardConfig(16, 16, 40 / 256)
EXPERT = BoardConfig(30, 16, 99 / 480)


def make_rng(rng: RandomSource = None) -> np.random.Generator:
    """Accept a Generator, a seed or None and return a Generator."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper ground truth.

    Holds the mine layout as a read-only boolean array indexed
    [row, col]. Use `generate` for random boards and `from_layout`
    for explicit ones.
    """

    def __init__(self, mines: np.ndarray) -> None:
        """
        Wrap a mine layout.

        Args:
            mines: Boolean array of shape (height, width), True = mine.

        Raises:
            InvalidDimensions: If the layout is not a non-empty 2-D array.
        """
        layout = np.array(mines, dtype=bool)
        if layout.ndim != 2 or layout.shape[0] < 1 or layout.shape[1] < 1:
            raise InvalidDimensions("Board dimensions must be positive")
        layout.setflags(write=False)
        self._mines = layout
        self._counts = self._calculate_adjacent_mines(layout)

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        density: float,
        rng: RandomSource = None,
    ) -> "Board":
        """
        Generate a random board.

        Each cell becomes a mine independently with probability `density`.

        Args:
            width: Number of columns, must be > 0.
            height: Number of rows, must be > 0.
            density: Mine probability per cell, within [0, 1].
            rng: Generator or seed for reproducible layouts.

        Raises:
            InvalidDimensions: If width or height is not positive.
            ValueError: If density is outside [0, 1].
        """
        return cls.from_config(BoardConfig(width, height, density), rng)

    @classmethod
    def from_config(
        cls, config: BoardConfig, rng: RandomSource = None
    ) -> "Board":
        """Generate a random board for `config`."""
        generator = make_rng(rng)
        mines = generator.random((config.height, config.width)) < config.density
        return cls(mines)

    @classmethod
    def from_layout(cls, layout: Sequence[Sequence[object]]) -> "Board":
        """
        Build a board from an explicit layout.

        Rows may be strings (``*`` marks a mine, anything else is empty)
        or sequences of truthy/falsy values.
        """
        rows = [
            [ch == "*" for ch in row] if isinstance(row, str) else list(row)
            for row in layout
        ]
        return cls(np.array(rows, dtype=bool))

    @staticmethod
    def _calculate_adjacent_mines(mines: np.ndarray) -> np.ndarray:
        """Calculate adjacent mine counts for all cells at once."""
        height, width = mines.shape
        padded = np.pad(mines.astype(np.int8), 1)
        counts = np.zeros((height, width), dtype=np.int8)
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                counts += padded[
                    1 + delta_row:1 + delta_row + height,
                    1 + delta_col:1 + delta_col + width,
                ]
        counts.setflags(write=False)
        return counts

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def width(self) -> int:
        return self._mines.shape[1]

    @property
    def height(self) -> int:
        return self._mines.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order."""
        return self._mines.shape

    @property
    def mines(self) -> np.ndarray:
        """Read-only mine layout indexed [row, col]."""
        return self._mines

    @property
    def mine_count(self) -> int:
        return int(self._mines.sum())

    @property
    def safe_cell_count(self) -> int:
        return self._mines.size - self.mine_count

    def _check(self, col: int, row: int) -> None:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise InvalidCoordinate(col, row, self.width, self.height)

    def is_mine(self, col: int, row: int) -> bool:
        """Check whether (col, row) holds a mine."""
        self._check(col, row)
        return bool(self._mines[row, col])

    def neighbors_of(self, col: int, row: int) -> List[Position]:
        """
        Get in-bounds neighbors of a cell.

        Returns:
            Up to 8 (col, row) tuples, fewer at edges and corners.
        """
        self._check(col, row)
        return neighbor_positions(col, row, self.width, self.height)

    def mine_count_at(self, col: int, row: int) -> int:
        """Count mines adjacent to a specific cell."""
        self._check(col, row)
        return int(self._counts[row, col])

    # ========================================================================
    # Visible State Helpers
    # ========================================================================

    def initial_grid(self) -> VisibleGrid:
        """All-unrevealed visible grid matching this board."""
        return VisibleGrid.blank(self.width, self.height)

    def game_state(self, grid: VisibleGrid) -> GameState:
        """
        Classify a visible snapshot of this board.

        Lost if any cell exploded, won if every non-mine cell is revealed.
        """
        revealed = 0
        for _, cell in grid.cells():
            if cell.kind == CellKind.EXPLODED:
                return GameState.LOST
            if cell.kind == CellKind.REVEALED:
                revealed += 1
        if revealed >= self.safe_cell_count:
            return GameState.WON
        return GameState.PLAYING

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, mines={self.mine_count})"
