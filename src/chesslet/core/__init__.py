"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chesslet.core import Board, Color, MoveGenerator, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.generate_legal_moves(Color.WHITE):
        print(move.notation)
"""

from chesslet.core.board import Board
from chesslet.core.enums import Color, GameStatus, PieceType
from chesslet.core.move import Move, move_notation
from chesslet.core.move_generator import MoveGenerator
from chesslet.core.notation import (
    STARTING_PLACEMENT,
    board_from_fen,
    board_to_fen,
    history_lines,
)
from chesslet.core.piece import Piece
from chesslet.core.rules import Rules
from chesslet.core.types import Square, make_square, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_fen",
    "board_to_fen",
    "history_lines",
    "move_notation",
]
