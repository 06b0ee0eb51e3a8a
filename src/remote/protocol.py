"""
Text protocol for remote play.

The game server speaks a line-oriented protocol. Outbound commands are
``new <level>``, ``open <col> <row>`` and ``map``. Responses start with
a ``<command>: <message>`` status line; a ``map`` response is followed
by one text row per board row.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from game import (
    CellKind,
    GameState,
    ParseError,
    VisibleCell,
    VisibleGrid,
    EXPLODED,
    UNREVEALED,
)


UNKNOWN_GLYPH = "□"
EXPLODED_GLYPH = "*"

COMMANDS = ("new", "open", "map")

_MESSAGE_STATES = {
    "You lose": GameState.LOST,
    "You win": GameState.WON,
}


# ============================================================================
# Outbound Commands
# ============================================================================

def format_new(level: int) -> str:
    """Serialize a ``new`` command."""
    if int(level) < 1:
        raise ValueError(f"Level must be positive, got {level}")
    return f"new {int(level)}"


def format_open(col: int, row: int) -> str:
    """Serialize an ``open`` command."""
    if col < 0 or row < 0:
        raise ValueError(f"Coordinates must be non-negative, got ({col}, {row})")
    return f"open {col} {row}"


def format_map() -> str:
    """Serialize a ``map`` command."""
    return "map"


# ============================================================================
# Inbound Responses
# ============================================================================

@dataclass(frozen=True)
class Response:
    """
    A parsed server response.

    Attributes:
        command: Command the response answers (``new``, ``open``, ``map``).
        message: Text after the colon, e.g. ``OK`` or ``You lose``.
        grid: Board for ``map`` responses, otherwise None.
    """

    command: str
    message: str
    grid: Optional[VisibleGrid] = None

    @property
    def status(self) -> GameState:
        """Game state implied by the message."""
        return _MESSAGE_STATES.get(self.message, GameState.PLAYING)


def _parse_glyph(char: str, col: int, row: int) -> VisibleCell:
    if char == UNKNOWN_GLYPH:
        return UNREVEALED
    if char == EXPLODED_GLYPH:
        return EXPLODED
    if char in "012345678":
        return VisibleCell.revealed(int(char))
    raise ParseError(f"Unexpected character {char!r} at ({col}, {row})")


def parse_map(rows: Sequence[str]) -> VisibleGrid:
    """
    Parse map rows into a visible grid.

    Raises:
        ParseError: On an unknown glyph, ragged rows or no rows.
    """
    if not rows:
        raise ParseError("Map has no rows")
    width = len(rows[0])
    cells: List[List[VisibleCell]] = []
    for row_index, line in enumerate(rows):
        if len(line) != width:
            raise ParseError(
                f"Row {row_index} has {len(line)} cells, expected {width}"
            )
        cells.append([
            _parse_glyph(char, col_index, row_index)
            for col_index, char in enumerate(line)
        ])
    return VisibleGrid(cells)


def parse_response(text: str) -> Response:
    """
    Parse a complete response block.

    Raises:
        ParseError: If the status line is missing or malformed, or the
            map rows are invalid.
    """
    lines = [line.rstrip("\r") for line in text.strip("\n").split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        raise ParseError("Empty response")

    status = lines[0]
    command, separator, message = status.partition(":")
    command = command.strip()
    if not separator or command not in COMMANDS:
        raise ParseError(f"Malformed status line {status!r}")

    if command != "map":
        if len(lines) > 1:
            raise ParseError(f"Unexpected data after {command!r} status")
        return Response(command, message.strip())

    rows = [line.strip() for line in lines[1:]]
    return Response(command, message.strip(), parse_map(rows))


def format_map_rows(grid: VisibleGrid) -> List[str]:
    """
    Serialize a grid into map rows.

    Deductions are not part of the protocol and are written as unknown.
    """
    rows = []
    for cells in grid.rows:
        line = ""
        for cell in cells:
            if cell.kind == CellKind.REVEALED:
                line += str(cell.count)
            elif cell.kind == CellKind.EXPLODED:
                line += EXPLODED_GLYPH
            else:
                line += UNKNOWN_GLYPH
        rows.append(line)
    return rows
