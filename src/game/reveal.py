"""
Reveal engine for Minesweeper game.

Computes the grid that results from clicking a cell, expanding
breadth-first through connected zero-clue regions.
"""
from collections import deque
from typing import Deque, Dict, Set

from .board import Board
from .cell import CellKind, VisibleCell, EXPLODED
from .errors import InvalidDimensions
from .grid import Position, VisibleGrid


# Cells a flood fill may open
_EXPANDABLE = (CellKind.UNREVEALED, CellKind.SUGGESTED, CellKind.KNOWN_SAFE)


def _check_matching(board: Board, grid: VisibleGrid) -> None:
    if (grid.width, grid.height) != (board.width, board.height):
        raise InvalidDimensions(
            f"Grid {grid.width}x{grid.height} does not match "
            f"board {board.width}x{board.height}"
        )


def revealed_region(
    board: Board, grid: VisibleGrid, col: int, row: int
) -> Dict[Position, VisibleCell]:
    """
    Compute the cells a click at (col, row) would open.

    Args:
        board: Ground truth.
        grid: Current visible snapshot.
        col: Column index to click.
        row: Row index to click.

    Returns:
        Mapping of position to its new visible cell. Empty when the
        target is already opened.

    Raises:
        InvalidCoordinate: If (col, row) is outside the grid.
    """
    _check_matching(board, grid)
    target = grid.get(col, row)
    if target.is_opened:
        return {}

    if board.is_mine(col, row):
        return {(col, row): EXPLODED}

    opened: Dict[Position, VisibleCell] = {}
    frontier: Deque[Position] = deque([(col, row)])
    visited: Set[Position] = {(col, row)}

    while frontier:
        current_col, current_row = frontier.popleft()
        count = board.mine_count_at(current_col, current_row)
        opened[(current_col, current_row)] = VisibleCell.revealed(count)
        if count > 0:
            continue
        for neighbor in board.neighbors_of(current_col, current_row):
            if neighbor in visited:
                continue
            if grid[neighbor].kind not in _EXPANDABLE:
                continue
            visited.add(neighbor)
            frontier.append(neighbor)

    return opened


def click(board: Board, grid: VisibleGrid, col: int, row: int) -> VisibleGrid:
    """
    Reveal a cell and return the resulting snapshot.

    A mine turns the cell into an exploded mine and stops. A safe cell
    shows its mined-neighbour count; a zero count opens every still
    closed neighbour, repeating through the connected zero region.
    Re-clicking an opened cell returns `grid` itself.

    The input grid is never modified.

    Raises:
        InvalidCoordinate: If (col, row) is outside the grid.
    """
    return grid.replace(revealed_region(board, grid, col, row))
