"""
Unit tests for VisibleCell.

Tests cell kind validation, convenience properties and observation
conversion.
"""
import pytest
from game import (
    CellKind,
    ParseError,
    VisibleCell,
    UNREVEALED,
    EXPLODED,
    FLAGGED,
    KNOWN_SAFE,
    SUGGESTED,
)


# ============================================================================
# Construction Tests
# ============================================================================

class TestCellConstruction:
    """Test cell creation and validation."""

    def test_default_cell_is_unrevealed(self) -> None:
        """New cell should be unrevealed without a count."""
        cell = VisibleCell()
        assert cell.kind == CellKind.UNREVEALED
        assert cell.count is None

    def test_revealed_cell_keeps_count(self) -> None:
        """Revealed cell should carry its clue."""
        cell = VisibleCell.revealed(5)
        assert cell.kind == CellKind.REVEALED
        assert cell.count == 5

    @pytest.mark.parametrize("count", [-1, 9, None])
    def test_revealed_count_out_of_range_raises(self, count) -> None:
        """Revealed counts must be within 0-8."""
        with pytest.raises(ValueError, match="0-8"):
            VisibleCell(CellKind.REVEALED, count)

    def test_count_on_unrevealed_cell_raises(self) -> None:
        """Only revealed cells may carry a count."""
        with pytest.raises(ValueError, match="cannot carry a count"):
            VisibleCell(CellKind.FLAGGED, 2)

    def test_cells_are_immutable(self) -> None:
        """Cells are frozen dataclasses."""
        cell = VisibleCell.revealed(1)
        with pytest.raises(AttributeError):
            cell.count = 2

    def test_equal_cells_compare_equal(self) -> None:
        """Cells compare by value."""
        assert VisibleCell.revealed(3) == VisibleCell.revealed(3)
        assert VisibleCell() == UNREVEALED


# ============================================================================
# Property Tests
# ============================================================================

class TestCellProperties:
    """Test derived cell properties."""

    def test_opened_cells(self) -> None:
        """Revealed and exploded cells count as opened."""
        assert VisibleCell.revealed(0).is_opened is True
        assert EXPLODED.is_opened is True
        for cell in (UNREVEALED, FLAGGED, KNOWN_SAFE, SUGGESTED):
            assert cell.is_opened is False

    def test_undetermined_cells(self) -> None:
        """Only unrevealed and suggested cells are undetermined."""
        assert UNREVEALED.is_undetermined is True
        assert SUGGESTED.is_undetermined is True
        for cell in (KNOWN_SAFE, FLAGGED, EXPLODED, VisibleCell.revealed(2)):
            assert cell.is_undetermined is False

    def test_known_mines(self) -> None:
        """Flagged and exploded cells are known mines."""
        assert FLAGGED.is_known_mine is True
        assert EXPLODED.is_known_mine is True
        assert KNOWN_SAFE.is_known_mine is False


# ============================================================================
# Observation Tests
# ============================================================================

class TestCellObservation:
    """Test observation encoding."""

    def test_unrevealed_observation(self) -> None:
        assert UNREVEALED.to_observation() == -1

    def test_flagged_observation(self) -> None:
        assert FLAGGED.to_observation() == -2

    def test_known_safe_observation(self) -> None:
        assert KNOWN_SAFE.to_observation() == -3

    def test_suggested_observation(self) -> None:
        assert SUGGESTED.to_observation() == -4

    def test_exploded_observation(self) -> None:
        assert EXPLODED.to_observation() == 9

    def test_revealed_observation_is_count(self) -> None:
        assert VisibleCell.revealed(4).to_observation() == 4

    @pytest.mark.parametrize("code", [-4, -3, -2, -1, 0, 1, 5, 8, 9])
    def test_observation_decodes_back(self, code: int) -> None:
        """Every valid code maps back to a cell with the same code."""
        assert VisibleCell.from_observation(code).to_observation() == code

    @pytest.mark.parametrize("code", [-5, 10, 42])
    def test_unknown_observation_raises(self, code: int) -> None:
        with pytest.raises(ParseError):
            VisibleCell.from_observation(code)
