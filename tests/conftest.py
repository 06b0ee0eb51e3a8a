"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, VisibleGrid
from inference import ConstraintProbabilityEngine, SuggestionPlanner


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_config() -> BoardConfig:
    """Default 9x9 configuration."""
    return BoardConfig()


@pytest.fixture
def empty_board() -> Board:
    """A 3x3 board with no mines for cascade testing."""
    return Board.from_layout(["...", "...", "..."])


@pytest.fixture
def center_mine_board() -> Board:
    """A 3x3 board with a single mine in the middle."""
    return Board.from_layout(["...", ".*.", "..."])


@pytest.fixture
def walled_board() -> Board:
    """
    A 5x4 board whose mine column splits two regions.

        . . * . .
        . . * . .
        . . * . .
        . . * . .
    """
    return Board.from_layout(["..*..", "..*..", "..*..", "..*.."])


@pytest.fixture
def pocket_board() -> Board:
    """
    A 6x5 board with a zero region in the top-left corner.

        . . . . * .
        . . . . . .
        . . . * . .
        * . . . . .
        . . . . . *
    """
    return Board.from_layout([
        "....*.",
        "......",
        "...*..",
        "*.....",
        ".....*",
    ])


@pytest.fixture
def random_board() -> Board:
    """Seeded 16x16 board at 15% density."""
    return Board.generate(16, 16, 0.15, rng=1234)


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def blank_grid() -> VisibleGrid:
    """An all-unrevealed 4x3 grid."""
    return VisibleGrid.blank(4, 3)


# ============================================================================
# Inference Fixtures
# ============================================================================

@pytest.fixture
def engine() -> ConstraintProbabilityEngine:
    """Probability engine with the default prior."""
    return ConstraintProbabilityEngine()


@pytest.fixture
def planner(engine: ConstraintProbabilityEngine) -> SuggestionPlanner:
    """Planner over the default engine."""
    return SuggestionPlanner(engine)


# ============================================================================
# Helpers
# ============================================================================

def grid_from_text(text: str) -> VisibleGrid:
    """
    Build a visible grid from a compact text picture.

    ``.`` unrevealed, ``0``-``8`` revealed, ``*`` exploded, ``F`` flagged,
    ``s`` known safe, ``?`` suggested.
    """
    from game import (
        VisibleCell, UNREVEALED, EXPLODED, FLAGGED, KNOWN_SAFE, SUGGESTED,
    )
    symbols = {
        ".": UNREVEALED,
        "*": EXPLODED,
        "F": FLAGGED,
        "s": KNOWN_SAFE,
        "?": SUGGESTED,
    }
    rows = []
    for line in text.strip().splitlines():
        line = line.strip()
        rows.append([
            VisibleCell.revealed(int(ch)) if ch.isdigit() else symbols[ch]
            for ch in line
        ])
    return VisibleGrid(rows)


@pytest.fixture
def make_grid():
    """Factory fixture wrapping `grid_from_text`."""
    return grid_from_text
