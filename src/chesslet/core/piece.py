"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslet.core.enums import Color, PieceType

_FEN_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

# White glyphs run U+2654 (king) .. U+2659 (pawn); black ones follow at +6.
_GLYPH_ORDER: tuple[PieceType, ...] = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
)

_TYPE_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _FEN_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable ``{color, kind}`` value.

    Pieces are never mutated in place; a promoted pawn is replaced by a new
    queen on the destination square.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _FEN_LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        ptype = _TYPE_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol used by captured-piece trays, e.g. ♞."""
        offset = _GLYPH_ORDER.index(self.piece_type)
        if self.color == Color.BLACK:
            offset += 6
        return chr(0x2654 + offset)

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING
