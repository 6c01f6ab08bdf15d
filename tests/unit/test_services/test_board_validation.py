"""Unit tests for board placement validation.

Tests cover:
- Footprint shapes in both orientations
- Unknown types, wrong sizes, overlap and bounds
- The capacity band [C, 2 x C]
"""

import pytest

from services.board_validation import capacity_upper_bound, is_rectangle, validate_board
from stores import (
    CapacityOutOfRange,
    EmptyBoard,
    InvalidBoard,
    InvalidCoordinate,
    InvalidPlantShape,
    InvalidPlantType,
    OverlappingPlants,
)
from tests.factories import board, plant, solar_board

NUCLEAR_TOP_LEFT = plant("NUCLEAR", "A1", "A2", "A3", "B1", "B2", "B3", "C1", "C2", "C3")


class TestCapacityUpperBound:
    """The one upper bound used by both the check and its error message."""

    def test_upper_bound_is_twice_required(self) -> None:
        assert capacity_upper_bound(1000) == 2000
        assert capacity_upper_bound(100) == 200

    def test_factor_override(self) -> None:
        assert capacity_upper_bound(1000, factor=1.5) == 1500

    def test_bound_is_floored(self) -> None:
        assert capacity_upper_bound(75, factor=1.1) == 82


class TestShapes:
    """Footprint checks."""

    def test_nuclear_square(self) -> None:
        assert validate_board(board(NUCLEAR_TOP_LEFT), 10, 1000) == 1000

    def test_coordinates_in_any_order(self) -> None:
        shuffled = plant("GAS", "B2", "A1", "B1", "A2")
        assert validate_board(board(shuffled), 5, 300) == 300

    @pytest.mark.parametrize("coords", [("A1", "A2"), ("A1", "B1")])
    def test_wind_either_orientation(self, coords: tuple[str, str]) -> None:
        assert validate_board(board(plant("WIND", *coords)), 5, 100) == 100

    def test_wind_diagonal_rejected(self) -> None:
        with pytest.raises(InvalidPlantShape):
            validate_board(board(plant("WIND", "A1", "B2")), 5, 100)

    def test_gas_l_shape_rejected(self) -> None:
        with pytest.raises(InvalidPlantShape):
            validate_board(board(plant("GAS", "A1", "A2", "B1", "C1")), 5, 300)

    def test_gas_split_rejected(self) -> None:
        """Four cells in a row are not a 2x2 square."""
        with pytest.raises(InvalidPlantShape):
            validate_board(board(plant("GAS", "A1", "A2", "A3", "A4")), 5, 300)

    def test_wrong_cell_count(self) -> None:
        with pytest.raises(InvalidPlantShape):
            validate_board(board(plant("SOLAR", "A1", "A2")), 5, 25)

    def test_repeated_cell_inside_one_plant(self) -> None:
        with pytest.raises(InvalidPlantShape):
            validate_board(board(plant("GAS", "A1", "A1", "A2", "B1")), 5, 300)

    def test_is_rectangle_helper(self) -> None:
        assert is_rectangle([(1, 1), (1, 2), (2, 1), (2, 2)], 2, 2)
        assert not is_rectangle([(1, 1), (1, 2), (2, 2), (2, 3)], 2, 2)
        assert not is_rectangle([(0, 0)], 2, 1)


class TestRejections:
    """Errors other than shape."""

    def test_empty_board(self) -> None:
        with pytest.raises(EmptyBoard):
            validate_board(board(), 5, 100)

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidPlantType):
            validate_board(board(plant("COAL", "A1")), 5, 100)

    def test_lowercase_type_is_unknown(self) -> None:
        with pytest.raises(InvalidPlantType):
            validate_board(board(plant("solar", "A1")), 5, 25)

    def test_out_of_bounds(self) -> None:
        with pytest.raises(InvalidCoordinate):
            validate_board(board(plant("SOLAR", "F1")), 5, 25)

    def test_overlap(self) -> None:
        with pytest.raises(OverlappingPlants):
            validate_board(board(plant("SOLAR", "A1"), plant("WIND", "A1", "A2")), 5, 100)

    def test_overlap_through_alternate_spelling(self) -> None:
        with pytest.raises(OverlappingPlants):
            validate_board(board(plant("SOLAR", "A1"), plant("SOLAR", "A01")), 5, 50)

    def test_all_board_errors_share_base(self) -> None:
        with pytest.raises(InvalidBoard):
            validate_board(board(), 5, 100)


class TestCapacityBand:
    """Total capacity must lie in [C, 2 x C]."""

    def test_exactly_required(self) -> None:
        assert validate_board(solar_board(), 5, 100) == 100

    def test_below_required(self) -> None:
        with pytest.raises(CapacityOutOfRange):
            validate_board(solar_board(["A1", "A2", "A3"]), 5, 100)

    def test_exactly_upper_bound_accepted(self) -> None:
        eight = ["A1", "A2", "A3", "A4", "A5", "B1", "B2", "B3"]
        assert validate_board(solar_board(eight), 5, 100) == 200

    def test_above_upper_bound(self) -> None:
        nine = ["A1", "A2", "A3", "A4", "A5", "B1", "B2", "B3", "B4"]
        with pytest.raises(CapacityOutOfRange) as exc_info:
            validate_board(solar_board(nine), 5, 100)
        # the message reports the same bound the check uses
        assert "200" in str(exc_info.value)
        assert "225" in str(exc_info.value)

    def test_upper_bound_follows_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("config.CAPACITY_UPPER_FACTOR", 1.0)
        with pytest.raises(CapacityOutOfRange):
            validate_board(solar_board(["A1", "A2", "A3", "A4", "A5"]), 5, 100)
