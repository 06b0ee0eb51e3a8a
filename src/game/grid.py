"""
Visible grid module for Minesweeper game.

A `VisibleGrid` is an immutable snapshot of what the player sees.
Every operation that changes the board returns a new grid, so
earlier snapshots stay valid for replay and inspection.
"""
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

import numpy as np

from .cell import (
    CellKind,
    VisibleCell,
    UNREVEALED,
)
from .errors import InvalidCoordinate, InvalidDimensions, ParseError


Position = Tuple[int, int]  # (col, row)


# ============================================================================
# Neighbor Utilities
# ============================================================================

_NEIGHBOR_OFFSETS = tuple(
    (delta_col, delta_row)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_col, delta_row) != (0, 0)
)


def neighbor_positions(
    col: int, row: int, width: int, height: int
) -> List[Position]:
    """
    Get valid neighboring cell positions.

    Args:
        col: Column index of center cell.
        row: Row index of center cell.
        width: Grid width.
        height: Grid height.

    Returns:
        List of (col, row) tuples for in-bounds neighbors (at most 8).
    """
    neighbors = []
    for delta_col, delta_row in _NEIGHBOR_OFFSETS:
        new_col = col + delta_col
        new_row = row + delta_row
        if 0 <= new_col < width and 0 <= new_row < height:
            neighbors.append((new_col, new_row))
    return neighbors


# ============================================================================
# Visible Grid
# ============================================================================

class VisibleGrid:
    """
    Immutable W x H snapshot of visible cell states.

    Cells are addressed as (col, row). Rows are stored as tuples, so a
    grid handed to a caller can never change underneath them.
    """

    __slots__ = ("_rows", "_width", "_height")

    def __init__(self, rows: Iterable[Iterable[VisibleCell]]) -> None:
        """
        Build a grid from rows of cells.

        Args:
            rows: One iterable of `VisibleCell` per board row.

        Raises:
            InvalidDimensions: If the grid is empty.
            ParseError: If rows have different lengths.
        """
        frozen = tuple(tuple(row) for row in rows)
        if not frozen or not frozen[0]:
            raise InvalidDimensions("Grid dimensions must be positive")
        width = len(frozen[0])
        if any(len(row) != width for row in frozen):
            raise ParseError("Inconsistent row lengths")
        self._rows = frozen
        self._width = width
        self._height = len(frozen)

    @classmethod
    def blank(cls, width: int, height: int) -> "VisibleGrid":
        """Create an all-unrevealed grid."""
        if width <= 0 or height <= 0:
            raise InvalidDimensions("Board dimensions must be positive")
        return cls([UNREVEALED] * width for _ in range(height))

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def rows(self) -> Tuple[Tuple[VisibleCell, ...], ...]:
        return self._rows

    def in_bounds(self, col: int, row: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= col < self._width and 0 <= row < self._height

    def check_bounds(self, col: int, row: int) -> None:
        """Raise `InvalidCoordinate` for out-of-range positions."""
        if not self.in_bounds(col, row):
            raise InvalidCoordinate(col, row, self._width, self._height)

    def get(self, col: int, row: int) -> VisibleCell:
        """Get the cell at (col, row)."""
        self.check_bounds(col, row)
        return self._rows[row][col]

    def __getitem__(self, position: Position) -> VisibleCell:
        col, row = position
        return self.get(col, row)

    def neighbors_of(self, col: int, row: int) -> List[Position]:
        """In-bounds neighbors of (col, row)."""
        return neighbor_positions(col, row, self._width, self._height)

    def positions(self) -> Iterator[Position]:
        """Iterate all positions in row-major order."""
        for row in range(self._height):
            for col in range(self._width):
                yield col, row

    def cells(self) -> Iterator[Tuple[Position, VisibleCell]]:
        """Iterate ((col, row), cell) pairs in row-major order."""
        for row, cells in enumerate(self._rows):
            for col, cell in enumerate(cells):
                yield (col, row), cell

    def positions_of(self, *kinds: CellKind) -> List[Position]:
        """All positions whose cell kind is one of `kinds`."""
        return [pos for pos, cell in self.cells() if cell.kind in kinds]

    def count(self, *kinds: CellKind) -> int:
        """Number of cells whose kind is one of `kinds`."""
        return sum(1 for _, cell in self.cells() if cell.kind in kinds)

    # ========================================================================
    # Updates
    # ========================================================================

    def replace(self, updates: Mapping[Position, VisibleCell]) -> "VisibleGrid":
        """
        Return a new grid with `updates` applied.

        Rows that are not touched are shared with this grid.
        """
        if not updates:
            return self
        by_row: Dict[int, Dict[int, VisibleCell]] = {}
        for (col, row), cell in updates.items():
            self.check_bounds(col, row)
            by_row.setdefault(row, {})[col] = cell

        rows = list(self._rows)
        for row, changes in by_row.items():
            new_row = list(rows[row])
            for col, cell in changes.items():
                new_row[col] = cell
            rows[row] = tuple(new_row)
        return VisibleGrid(rows)

    # ========================================================================
    # Conversions
    # ========================================================================

    def to_observation(self) -> np.ndarray:
        """
        Get grid as numpy array for agents, indexed [row, col].

        See `VisibleCell.to_observation` for the encoding.
        """
        obs = np.empty((self._height, self._width), dtype=np.int8)
        for (col, row), cell in self.cells():
            obs[row, col] = cell.to_observation()
        return obs

    @classmethod
    def from_observation(cls, observation: np.ndarray) -> "VisibleGrid":
        """Rebuild a grid from an observation array."""
        observation = np.asarray(observation)
        if observation.ndim != 2:
            raise ParseError(
                f"Observation must be 2-D, got shape {observation.shape}"
            )
        return cls(
            [VisibleCell.from_observation(value) for value in row]
            for row in observation
        )

    def to_clue_text(self, unknown: str = "#", exploded: str = "*") -> str:
        """
        Serialize to the clue text read by the Monte Carlo estimator.

        Deductions (flags, known safe, suggestions) are written as
        unknown: only opened cells are facts.
        """
        lines = []
        for cells in self._rows:
            chars = []
            for cell in cells:
                if cell.kind == CellKind.REVEALED:
                    chars.append(str(cell.count))
                elif cell.kind == CellKind.EXPLODED:
                    chars.append(exploded)
                else:
                    chars.append(unknown)
            lines.append("".join(chars))
        return "\n".join(lines)

    def render(self) -> str:
        """Render grid as ASCII string."""
        symbols = {
            CellKind.UNREVEALED: ".",
            CellKind.FLAGGED: "F",
            CellKind.KNOWN_SAFE: "s",
            CellKind.SUGGESTED: "?",
            CellKind.EXPLODED: "*",
        }
        lines = []
        for cells in self._rows:
            row_str = ""
            for cell in cells:
                if cell.kind == CellKind.REVEALED:
                    row_str += " " if cell.count == 0 else str(cell.count)
                else:
                    row_str += symbols[cell.kind]
                row_str += " "
            lines.append(row_str)
        return "\n".join(lines)

    # ========================================================================
    # Dunder helpers
    # ========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VisibleGrid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"VisibleGrid({self._width}x{self._height})"
