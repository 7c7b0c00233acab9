"""Pseudo-legal move generation, attack detection and legality filtering."""

from __future__ import annotations

from chesslet.core.board import Board
from chesslet.core.enums import Color, PieceType
from chesslet.core.move import Move
from chesslet.core.piece import Piece
from chesslet.core.types import BOARD_SIZE, Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = KING_OFFSETS

# White pawns walk toward row 0, black pawns toward row 7.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


class MoveGenerator:
    """Move generation and king-safety checks for a :class:`Board`.

    Never mutates the board it wraps; legality is verified on clones.
    Target lists are ordered and duplicate-free, so enumeration order is
    deterministic: row-major over pieces, then per-piece generation order.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    # -- Pseudo-legal moves -------------------------------------------------

    def raw_moves(self, sq: Square) -> list[Square]:
        """Squares the piece on *sq* could reach, ignoring its own king."""
        piece = self._board[sq]
        if piece is None:
            return []

        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            return self._pawn_targets(sq, piece.color)
        if ptype == PieceType.KNIGHT:
            return self._step_targets(sq, piece.color, KNIGHT_OFFSETS)
        if ptype == PieceType.KING:
            return self._step_targets(sq, piece.color, KING_OFFSETS)
        return self._sliding_targets(sq, piece.color, _SLIDING_DIRS[ptype])

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* among the raw moves of any piece of *by_color*?"""
        for from_sq, _ in self._board.pieces(by_color):
            if sq in self.raw_moves(from_sq):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? A missing king is never in check."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    # -- Legal moves --------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Square]:
        """Raw moves of the piece on *sq* that keep its own king safe."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            to_sq
            for to_sq in self.raw_moves(sq)
            if self._is_safe_after(Move(sq, to_sq, piece, self._board[to_sq]))
        ]

    def has_any_legal_move(self, color: Color) -> bool:
        for sq, _ in self._board.pieces(color):
            if self.legal_moves(sq):
                return True
        return False

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, row-major over the board."""
        board = self._board
        moves: list[Move] = []
        for from_sq, piece in board.pieces(color):
            for to_sq in self.legal_moves(from_sq):
                moves.append(Move(from_sq, to_sq, piece, board[to_sq]))
        return moves

    # -- Internals ----------------------------------------------------------

    def _is_safe_after(self, move: Move) -> bool:
        trial = self._board.clone()
        trial.make_move(move, promote=False)
        return not MoveGenerator(trial).is_in_check(move.piece.color)

    def _pawn_targets(self, sq: Square, color: Color) -> list[Square]:
        board = self._board
        row, col = sq
        step = PAWN_DIRECTION[color]
        targets: list[Square] = []

        ahead = row + step
        if not 0 <= ahead < BOARD_SIZE:
            return targets

        one_step = Square(ahead, col)
        if board[one_step] is None:
            targets.append(one_step)
            if row == PAWN_START_ROW[color]:
                two_step = Square(row + 2 * step, col)
                if board[two_step] is None:
                    targets.append(two_step)

        for dc in (-1, 1):
            c = col + dc
            if not 0 <= c < BOARD_SIZE:
                continue
            cap_sq = Square(ahead, c)
            target = board[cap_sq]
            if target is not None and target.color != color:
                targets.append(cap_sq)
        return targets

    def _step_targets(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        row, col = sq
        targets: list[Square] = []
        for dr, dc in offsets:
            r, c = row + dr, col + dc
            if not is_on_board(r, c):
                continue
            to_sq = Square(r, c)
            target = board[to_sq]
            if target is None or target.color != color:
                targets.append(to_sq)
        return targets

    def _sliding_targets(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        row, col = sq
        targets: list[Square] = []
        for dr, dc in directions:
            r, c = row + dr, col + dc
            while is_on_board(r, c):
                to_sq = Square(r, c)
                target: Piece | None = board[to_sq]
                if target is None:
                    targets.append(to_sq)
                else:
                    if target.color != color:
                        targets.append(to_sq)
                    break
                r += dr
                c += dc
        return targets
