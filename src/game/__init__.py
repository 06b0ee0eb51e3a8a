"""
Minesweeper game module.

Provides the hidden board model, visible grid snapshots, the reveal
engine and a gymnasium environment.
"""
from .errors import (
    MinesweeperError,
    InvalidDimensions,
    InvalidCoordinate,
    ParseError,
    NoAcceptedSamples,
)
from .cell import (
    CellKind,
    VisibleCell,
    UNREVEALED,
    EXPLODED,
    FLAGGED,
    KNOWN_SAFE,
    SUGGESTED,
)
from .grid import Position, VisibleGrid, neighbor_positions
from .board import (
    Board,
    BoardConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    make_rng,
)
from .reveal import click, revealed_region
from .environment import MinesweeperEnv

__all__ = [
    "MinesweeperError",
    "InvalidDimensions",
    "InvalidCoordinate",
    "ParseError",
    "NoAcceptedSamples",
    "CellKind",
    "VisibleCell",
    "UNREVEALED",
    "EXPLODED",
    "FLAGGED",
    "KNOWN_SAFE",
    "SUGGESTED",
    "Position",
    "VisibleGrid",
    "neighbor_positions",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "make_rng",
    "click",
    "revealed_region",
    "MinesweeperEnv",
]
