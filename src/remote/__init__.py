"""
Remote play module.

Parses server responses into visible grids and serializes commands.
"""
from .protocol import (
    UNKNOWN_GLYPH,
    EXPLODED_GLYPH,
    Response,
    format_new,
    format_open,
    format_map,
    format_map_rows,
    parse_map,
    parse_response,
)

__all__ = [
    "UNKNOWN_GLYPH",
    "EXPLODED_GLYPH",
    "Response",
    "format_new",
    "format_open",
    "format_map",
    "format_map_rows",
    "parse_map",
    "parse_response",
]
