"""Move value object and the move-list notation."""

from __future__ import annotations

from dataclasses import dataclass

from chesslet.core.piece import Piece
from chesslet.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A proposed move; it only becomes a history entry once validated.

    ``piece`` is the piece as it stood on ``from_sq`` (a promoting pawn is
    still recorded as a pawn) and ``captured`` is whatever occupied
    ``to_sq`` beforehand.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_promotion(self) -> bool:
        return self.piece.is_pawn and self.to_sq.row in (0, 7)

    @property
    def notation(self) -> str:
        """Long-form notation, e.g. ``Nb1-c3`` or ``e4-d5x``."""
        return move_notation(self)

    def __str__(self) -> str:
        return self.notation


def move_notation(move: Move) -> str:
    """Render ``<Letter><from>-<to><x if capture>``; pawns carry no letter."""
    suffix = "x" if move.captured is not None else ""
    return (
        f"{move.piece.piece_type.letter}{square_name(move.from_sq)}"
        f"-{square_name(move.to_sq)}{suffix}"
    )
