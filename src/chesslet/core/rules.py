"""High-level chess rules: check, checkmate and stalemate."""

from __future__ import annotations

from chesslet.core.board import Board
from chesslet.core.enums import Color, GameStatus
from chesslet.core.move_generator import MoveGenerator


class Rules:
    """Static rule-checker operating on a board and the side to move.

    Castling, en passant, repetition and the fifty-move rule are not part
    of this rule set; a game ends only by checkmate or stalemate.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        return gen.is_in_check(color) and not gen.has_any_legal_move(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        return not gen.is_in_check(color) and not gen.has_any_legal_move(color)

    @staticmethod
    def game_status(board: Board, side_to_move: Color) -> GameStatus:
        """Status of *side_to_move* on *board*."""
        gen = MoveGenerator(board)
        in_check = gen.is_in_check(side_to_move)

        if not gen.has_any_legal_move(side_to_move):
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        if in_check:
            return GameStatus.CHECK
        return GameStatus.IN_PROGRESS

    @staticmethod
    def winner(board: Board, side_to_move: Color) -> Color | None:
        """The side that delivered mate, or ``None`` if nobody has won."""
        if Rules.is_checkmate(board, side_to_move):
            return side_to_move.opposite
        return None
