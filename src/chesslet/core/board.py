"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chesslet.core.enums import Color, PieceType
from chesslet.core.piece import Piece
from chesslet.core.types import BOARD_SIZE, Square

if TYPE_CHECKING:
    from chesslet.core.move import Move

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Rows a pawn of each color promotes on.
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_SIZE - 1}


class Board:
    """Mutable 8x8 grid of optional pieces with value semantics.

    Coordinates are trusted: callers bounds-check before indexing.
    """

    __slots__ = ("_rows",)

    def __init__(self) -> None:
        self._rows: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._rows[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._rows[sq[0]][sq[1]] = piece

    def get(self, sq: Square) -> Piece | None:
        return self._rows[sq[0]][sq[1]]

    def set(self, sq: Square, piece: Piece | None) -> None:
        self._rows[sq[0]][sq[1]] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._rows[sq[0]][sq[1]] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one *color*."""
        for row, cells in enumerate(self._rows):
            for col, piece in enumerate(cells):
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                yield Square(row, col), piece

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is not on the board."""
        for sq, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Immutable snapshot of the grid, row 0 first."""
        return tuple(tuple(cells) for cells in self._rows)

    # -- Mutation / copying -------------------------------------------------

    def make_move(self, move: Move, *, promote: bool = True) -> Piece:
        """Move a piece in place and return the piece now on ``move.to_sq``.

        With *promote*, a pawn landing on its promotion row becomes a queen.
        Search and legality checks pass ``promote=False`` to keep the pawn.
        """
        piece = self[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq} to move")
        if promote and piece.is_pawn and move.to_sq[0] == PROMOTION_ROW[piece.color]:
            piece = Piece(piece.color, PieceType.QUEEN)
        self[move.to_sq] = piece
        self[move.from_sq] = None
        return piece

    def clone(self) -> Board:
        """Independent copy; pieces are immutable so only rows are copied."""
        b = Board()
        b._rows = [cells.copy() for cells in self._rows]
        return b

    def clear(self) -> None:
        self._rows = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard opening array, black on rows 0-1 and white on rows 6-7."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._rows[0][col] = Piece(Color.BLACK, pt)
            b._rows[1][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._rows[6][col] = Piece(Color.WHITE, PieceType.PAWN)
            b._rows[7][col] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        lines: list[str] = []
        for row, cells in enumerate(self._rows):
            text = " ".join(str(p) if p else "." for p in cells)
            lines.append(f"{BOARD_SIZE - row} {text}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
