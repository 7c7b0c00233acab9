"""Square type and coordinate helpers.

Board layout (row-major, black at the top)::

    row 0:  a8 b8 c8 d8 e8 f8 g8 h8
    row 1:  a7 ...
    ...
    row 7:  a1 b1 c1 d1 e1 f1 g1 h1

Files come from the column (``a`` = column 0), ranks are ``8 - row``.
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 8
FILES = "abcdefgh"


class Square(NamedTuple):
    """A board coordinate. Construct via :func:`make_square` at boundaries."""

    row: int
    col: int

    def __str__(self) -> str:
        return square_name(self)


def is_on_board(row: int, col: int) -> bool:
    """Whether ``(row, col)`` lies inside the 8x8 grid."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def make_square(row: int, col: int) -> Square:
    """Create a square, rejecting out-of-range coordinates."""
    if not is_on_board(row, col):
        raise ValueError(f"Square out of range: ({row}, {col})")
    return Square(row, col)


def file_char(col: int) -> str:
    return FILES[col]


def rank_number(row: int) -> int:
    return BOARD_SIZE - row


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(7, 1)`` → ``'b1'``."""
    return f"{file_char(sq.col)}{rank_number(sq.row)}"


def parse_square(name: str) -> Square:
    """Parse a square name, e.g. ``'e4'`` → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)
