"""
Exception types shared across the Minesweeper advisor.
"""


class MinesweeperError(Exception):
    """Base class for all advisor errors."""


class InvalidDimensions(MinesweeperError, ValueError):
    """Raised when a board is requested with non-positive width or height."""


class InvalidCoordinate(MinesweeperError, IndexError):
    """Raised when a click or query falls outside the grid."""

    def __init__(self, col: int, row: int, width: int, height: int) -> None:
        super().__init__(
            f"Coordinate ({col}, {row}) outside {width}x{height} grid"
        )
        self.col = col
        self.row = row


class ParseError(MinesweeperError, ValueError):
    """Raised when a textual or encoded grid cannot be parsed."""


class NoAcceptedSamples(MinesweeperError):
    """Raised when Monte Carlo sampling accepted no layout at all."""
