"""Board placement validation.

`validate_board` is pure: it inspects a proposed board and either returns the
board's total capacity or raises the first violation it finds. Committing the
board is the caller's job.
"""
import logging

import config
from models.domain_models import Board, Plant, PlantSpec, plant_spec
from stores.exceptions import (
    EmptyBoard,
    InvalidPlantType,
    InvalidPlantShape,
    OverlappingPlants,
    CapacityOutOfRange,
)
from . import coordinates
from .coordinates import Cell

logger = logging.getLogger(__name__)


def capacity_upper_bound(required_capacity: int, factor: float | None = None) -> int:
    """Largest total capacity a board may carry for a game requiring `required_capacity`."""
    if factor is None:
        factor = config.CAPACITY_UPPER_FACTOR
    return int(required_capacity * factor)


def is_rectangle(cells: list[Cell], width: int, height: int) -> bool:
    """True if `cells` fill exactly one width x height rectangle.

    Sorted row-major, cell i must sit at (min_row + i // width, min_col + i % width).
    """
    if len(cells) != width * height:
        return False
    ordered = sorted(cells)
    min_row, min_col = ordered[0]
    for i, (row, col) in enumerate(ordered):
        if row != min_row + i // width or col != min_col + i % width:
            return False
    return True


def _check_shape(plant: Plant, spec: PlantSpec, cells: list[Cell]) -> None:
    for width, height in spec.orientations():
        if is_rectangle(cells, width, height):
            return
    raise InvalidPlantShape(f"invalid plant shape for {plant.type}")


def validate_board(board: Board, size: int, required_capacity: int) -> int:
    """Validate a placement and return its total capacity.

    Raises:
        EmptyBoard: no plants.
        InvalidPlantType: unknown plant type.
        InvalidPlantShape: wrong coordinate count or not a contiguous rectangle.
        InvalidCoordinate: malformed or out-of-bounds coordinate.
        OverlappingPlants: a cell already claimed by an earlier plant.
        CapacityOutOfRange: total capacity outside [required, upper bound].
    """
    if not board.plants:
        raise EmptyBoard("board has no plants")

    occupied: set[Cell] = set()
    total = 0

    for plant in board.plants:
        spec = plant_spec(plant.type)
        if spec is None:
            raise InvalidPlantType(f"invalid plant type: {plant.type}")

        if len(plant.coordinates) != spec.cells:
            raise InvalidPlantShape(
                f"invalid number of coordinates for {plant.type} plant: "
                f"expected {spec.cells}, got {len(plant.coordinates)}"
            )

        cells = []
        for coord in plant.coordinates:
            cell = coordinates.validate(coord, size)
            if cell in occupied:
                raise OverlappingPlants(f"coordinate {coord} is used by more than one plant")
            cells.append(cell)

        _check_shape(plant, spec, cells)
        occupied.update(cells)
        total += spec.capacity

    upper = capacity_upper_bound(required_capacity)
    if total < required_capacity or total > upper:
        raise CapacityOutOfRange(
            f"total capacity should be between {required_capacity} and {upper}, got {total}"
        )

    logger.debug(f"Board with {len(board.plants)} plants validated, capacity {total}")
    return total
