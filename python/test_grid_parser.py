"""Tests for grid_parser module."""

import pytest

from grid_parser import parse_grid, parse_grid_concise, validate_endpoints
from grid_types import CellState, Grid


class TestParseGrid:
    """Tests for the standard datacenter format."""

    def test_sample(self) -> None:
        """Parse the worked example."""
        grid = parse_grid(
            """
            4 3
            2 0 0 0
            0 0 0 0
            0 0 3 1
            """
        )
        assert grid.width == 4
        assert grid.height == 3
        assert grid.start == 0
        assert grid.end == 10
        assert grid.cell_state(11) is CellState.BLOCKED
        assert grid.total_open == 11

    def test_layout_is_free_form(self) -> None:
        """Line breaks are just whitespace, as with scanf."""
        assert parse_grid("2 2 2 0 0 3") == parse_grid("2\n2\n2 0\n0 3\n")

    def test_missing_dimensions(self) -> None:
        with pytest.raises(ValueError, match="Missing grid dimensions"):
            parse_grid("4")

    def test_non_integer_token(self) -> None:
        with pytest.raises(ValueError, match="Invalid value: 'x'") as exc_info:
            parse_grid("2 1 2 x")
        assert "value 4 of 4" in str(exc_info.value)

    def test_too_few_cells(self) -> None:
        with pytest.raises(ValueError, match="Cell count does not match"):
            parse_grid("2 2 2 0 3")

    def test_too_many_cells(self) -> None:
        with pytest.raises(ValueError, match="Got: 5 cells"):
            parse_grid("2 2 2 0 0 3 0")

    def test_bad_dimensions(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            parse_grid("0 2")

    def test_unknown_code(self) -> None:
        with pytest.raises(ValueError, match="Invalid room code"):
            parse_grid("2 2 2 0 4 3")

    def test_missing_start(self) -> None:
        with pytest.raises(ValueError, match="exactly one start"):
            parse_grid("2 1 0 3")

    def test_duplicate_end(self) -> None:
        with pytest.raises(ValueError, match="exactly one end") as exc_info:
            parse_grid("3 1 2 3 3")
        assert "(0, 1), (0, 2)" in str(exc_info.value)


class TestParseGridConcise:
    """Tests for the concise single-character format."""

    def test_aliases_match_digits(self) -> None:
        """Letters and symbols mean the same as the digit codes."""
        assert parse_grid_concise("S...|....|..E#") == parse_grid_concise("2000|0000|0031")

    def test_matches_standard_format(self) -> None:
        assert parse_grid_concise("S...|....|..E#") == parse_grid("4 3 2 0 0 0 0 0 0 0 0 0 3 1")

    def test_newline_separated_rows(self) -> None:
        grid = parse_grid_concise(
            """
            S.
            .E
            """
        )
        assert grid == Grid.from_codes(2, 2, [2, 0, 0, 3])

    def test_invalid_character(self) -> None:
        with pytest.raises(ValueError, match="Invalid character 'x'") as exc_info:
            parse_grid_concise("S.|xE")
        assert "Row 1" in str(exc_info.value)
        assert "column 0" in str(exc_info.value)

    def test_inconsistent_row_lengths(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent row lengths") as exc_info:
            parse_grid_concise("S..|.E")
        assert "Row 1: 2 columns" in str(exc_info.value)

    def test_empty_definition(self) -> None:
        with pytest.raises(ValueError, match="Empty grid definition"):
            parse_grid_concise("  \n ")

    def test_single_room_rejected(self) -> None:
        """A lone room cannot be both start and end."""
        with pytest.raises(ValueError, match="exactly one end"):
            parse_grid_concise("S")


class TestValidateEndpoints:
    """Tests for validate_endpoints."""

    def test_valid_grid(self) -> None:
        validate_endpoints(Grid.from_codes(2, 1, [2, 3]))

    def test_two_starts(self) -> None:
        with pytest.raises(ValueError, match="Found: 2"):
            validate_endpoints(Grid.from_codes(3, 1, [2, 2, 3]))
