"""
Cell module for Minesweeper game.

Represents the player-visible state of a single cell: still hidden,
opened with a clue, blown up, or annotated by the deduction engine.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from .errors import ParseError


# ============================================================================
# Constants
# ============================================================================

class CellKind(Enum):
    """Possible visible states of a cell."""

    UNREVEALED = auto()
    REVEALED = auto()
    EXPLODED = auto()
    FLAGGED = auto()
    KNOWN_SAFE = auto()
    SUGGESTED = auto()


# Observation codes for numpy/gymnasium consumers
OBS_UNREVEALED = -1
OBS_FLAGGED = -2
OBS_KNOWN_SAFE = -3
OBS_SUGGESTED = -4
OBS_EXPLODED = 9

_KIND_TO_OBS = {
    CellKind.UNREVEALED: OBS_UNREVEALED,
    CellKind.FLAGGED: OBS_FLAGGED,
    CellKind.KNOWN_SAFE: OBS_KNOWN_SAFE,
    CellKind.SUGGESTED: OBS_SUGGESTED,
    CellKind.EXPLODED: OBS_EXPLODED,
}


# ============================================================================
# Visible Cell
# ============================================================================

@dataclass(frozen=True)
class VisibleCell:
    """
    A single cell as seen by the player.

    Attributes:
        kind: Which visible state the cell is in.
        count: Mined-neighbour count, only set for revealed cells.
    """

    kind: CellKind = CellKind.UNREVEALED
    count: Optional[int] = None

    def __post_init__(self) -> None:
        """Reject counts on non-revealed cells and out-of-range clues."""
        if self.kind == CellKind.REVEALED:
            if self.count is None or not 0 <= self.count <= 8:
                raise ValueError(f"Revealed count must be 0-8, got {self.count}")
        elif self.count is not None:
            raise ValueError(f"{self.kind.name} cell cannot carry a count")

    @classmethod
    def revealed(cls, count: int) -> "VisibleCell":
        """Create an opened cell showing `count`."""
        return cls(CellKind.REVEALED, count)

    @property
    def is_opened(self) -> bool:
        """True once the cell was clicked (revealed or exploded)."""
        return self.kind in (CellKind.REVEALED, CellKind.EXPLODED)

    @property
    def is_undetermined(self) -> bool:
        """True for cells the probability engine still has to rate."""
        return self.kind in (CellKind.UNREVEALED, CellKind.SUGGESTED)

    @property
    def is_known_mine(self) -> bool:
        """True for flagged or exploded cells."""
        return self.kind in (CellKind.FLAGGED, CellKind.EXPLODED)

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents.

        Returns:
            -1: Unrevealed
            -2: Flagged mine
            -3: Known safe
            -4: Suggested
            0-8: Revealed cell with adjacent mine count
            9: Exploded mine
        """
        if self.kind == CellKind.REVEALED:
            return self.count
        return _KIND_TO_OBS[self.kind]

    @classmethod
    def from_observation(cls, value: int) -> "VisibleCell":
        """Inverse of `to_observation`."""
        value = int(value)
        if 0 <= value <= 8:
            return _REVEALED[value]
        for kind, code in _KIND_TO_OBS.items():
            if code == value:
                return _SINGLETONS[kind]
        raise ParseError(f"Unknown observation code {value}")


# Shared instances; cells are immutable so reuse is safe
UNREVEALED = VisibleCell(CellKind.UNREVEALED)
EXPLODED = VisibleCell(CellKind.EXPLODED)
FLAGGED = VisibleCell(CellKind.FLAGGED)
KNOWN_SAFE = VisibleCell(CellKind.KNOWN_SAFE)
SUGGESTED = VisibleCell(CellKind.SUGGESTED)

_SINGLETONS = {
    CellKind.UNREVEALED: UNREVEALED,
    CellKind.EXPLODED: EXPLODED,
    CellKind.FLAGGED: FLAGGED,
    CellKind.KNOWN_SAFE: KNOWN_SAFE,
    CellKind.SUGGESTED: SUGGESTED,
}
_REVEALED = tuple(VisibleCell.revealed(n) for n in range(9))
