"""Grid coordinate codec.

A coordinate is a row letter followed by a 1-based column number: "A1" is
the top-left cell, "C10" is row 2 / column 9 (zero-based). Internally cells
are `(row, col)` tuples.
"""
from models.domain_models import MAX_BOARD_SIZE
from stores.exceptions import InvalidCoordinate

Cell = tuple[int, int]


def parse(text: str) -> Cell:
    """Parse a coordinate string into a zero-based (row, col) pair.

    Raises:
        InvalidCoordinate: if the text is shorter than two characters, does
            not start with an uppercase letter, or the rest is not a
            positive integer no wider than the largest board.
    """
    if not isinstance(text, str) or len(text) < 2:
        raise InvalidCoordinate(f"invalid coordinate format: {text!r}")

    letter, digits = text[0], text[1:]
    if not ("A" <= letter <= "Z"):
        raise InvalidCoordinate(f"invalid row letter in {text!r}")
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidCoordinate(f"invalid column number in {text!r}")

    # no board is wider than MAX_BOARD_SIZE; refuse long digit runs before int()
    significant = digits.lstrip("0")
    if len(significant) > len(str(MAX_BOARD_SIZE)):
        raise InvalidCoordinate(f"column out of range in {text[:8]!r}...")

    column = int(significant or "0")
    if column < 1:
        raise InvalidCoordinate(f"column must be positive in {text!r}")

    return ord(letter) - ord("A"), column - 1


def validate(text: str, size: int) -> Cell:
    """Parse `text` and check it lies on a `size` x `size` grid."""
    row, col = parse(text)
    if not (0 <= row < size):
        raise InvalidCoordinate(f"row out of bounds: {text}")
    if not (0 <= col < size):
        raise InvalidCoordinate(f"column out of bounds: {text}")
    return row, col


def format(row: int, col: int) -> str:
    """Inverse of `parse`."""
    if not (0 <= row < 26) or col < 0:
        raise InvalidCoordinate(f"cell ({row}, {col}) has no coordinate")
    return f"{chr(ord('A') + row)}{col + 1}"


def normalize(text: str, size: int) -> str:
    """Validate and return the canonical spelling ("A01" -> "A1")."""
    return format(*validate(text, size))
