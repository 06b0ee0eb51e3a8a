"""
Unit tests for VisibleGrid snapshots.
"""
import pytest
import numpy as np
from game import (
    CellKind,
    InvalidCoordinate,
    InvalidDimensions,
    ParseError,
    VisibleCell,
    VisibleGrid,
    FLAGGED,
    KNOWN_SAFE,
    UNREVEALED,
)


class TestGridConstruction:
    """Test grid creation."""

    def test_blank_grid_dimensions(self, blank_grid: VisibleGrid) -> None:
        assert blank_grid.width == 4
        assert blank_grid.height == 3
        assert blank_grid.count(CellKind.UNREVEALED) == 12

    def test_blank_rejects_bad_dimensions(self) -> None:
        with pytest.raises(InvalidDimensions):
            VisibleGrid.blank(0, 3)

    def test_ragged_rows_raise(self) -> None:
        with pytest.raises(ParseError, match="row lengths"):
            VisibleGrid([[UNREVEALED, UNREVEALED], [UNREVEALED]])

    def test_empty_grid_raises(self) -> None:
        with pytest.raises(InvalidDimensions):
            VisibleGrid([])


class TestGridAccess:
    """Test lookups and iteration."""

    def test_get_uses_col_row_order(self, make_grid) -> None:
        grid = make_grid("""
            1.
            .F
        """)
        assert grid.get(0, 0) == VisibleCell.revealed(1)
        assert grid.get(1, 1) == FLAGGED
        assert grid[(1, 1)] == FLAGGED

    @pytest.mark.parametrize("col,row", [(-1, 0), (4, 0), (0, 3), (0, -1)])
    def test_out_of_bounds_raises(
        self, blank_grid: VisibleGrid, col: int, row: int
    ) -> None:
        with pytest.raises(InvalidCoordinate):
            blank_grid.get(col, row)

    def test_positions_are_row_major(self) -> None:
        grid = VisibleGrid.blank(2, 2)
        assert list(grid.positions()) == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_positions_of_kind(self, make_grid) -> None:
        grid = make_grid("F.s\n..F")
        assert grid.positions_of(CellKind.FLAGGED) == [(0, 0), (2, 1)]
        assert grid.positions_of(CellKind.KNOWN_SAFE) == [(2, 0)]


class TestGridUpdates:
    """Test copy-on-write updates."""

    def test_replace_returns_new_grid(self, blank_grid: VisibleGrid) -> None:
        updated = blank_grid.replace({(2, 1): KNOWN_SAFE})
        assert updated.get(2, 1) == KNOWN_SAFE
        assert blank_grid.get(2, 1) == UNREVEALED

    def test_replace_shares_untouched_rows(self, blank_grid: VisibleGrid) -> None:
        updated = blank_grid.replace({(0, 0): FLAGGED})
        assert updated.rows[2] is blank_grid.rows[2]

    def test_empty_replace_returns_same_grid(self, blank_grid: VisibleGrid) -> None:
        assert blank_grid.replace({}) is blank_grid

    def test_replace_out_of_bounds_raises(self, blank_grid: VisibleGrid) -> None:
        with pytest.raises(InvalidCoordinate):
            blank_grid.replace({(9, 9): FLAGGED})

    def test_grids_compare_by_value(self) -> None:
        assert VisibleGrid.blank(3, 2) == VisibleGrid.blank(3, 2)
        assert hash(VisibleGrid.blank(3, 2)) == hash(VisibleGrid.blank(3, 2))
        assert VisibleGrid.blank(3, 2) != VisibleGrid.blank(2, 3)


class TestGridConversions:
    """Test observation and text conversions."""

    def test_observation_layout(self, make_grid) -> None:
        grid = make_grid("""
            0*F
            s?3
        """)
        obs = grid.to_observation()
        assert obs.dtype == np.int8
        assert obs.shape == (2, 3)
        np.testing.assert_array_equal(obs, [[0, 9, -2], [-3, -4, 3]])

    def test_observation_round_trip(self, make_grid) -> None:
        grid = make_grid("0*F.\ns?38")
        assert VisibleGrid.from_observation(grid.to_observation()) == grid

    def test_from_observation_rejects_1d(self) -> None:
        with pytest.raises(ParseError):
            VisibleGrid.from_observation(np.array([-1, 0]))

    def test_clue_text_hides_deductions(self, make_grid) -> None:
        grid = make_grid("""
            1F?
            s*0
        """)
        assert grid.to_clue_text() == "1##\n#*0"

    def test_render(self, make_grid) -> None:
        grid = make_grid("0F\n?2")
        assert grid.render() == "  F \n? 2 "
