"""Tests for the minimax engine and evaluation."""

from __future__ import annotations

import math

import pytest

from chesslet.core.board import Board
from chesslet.core.enums import Color, PieceType
from chesslet.core.move_generator import MoveGenerator
from chesslet.core.notation import board_from_fen, board_to_fen
from chesslet.core.piece import Piece
from chesslet.core.types import parse_square
from chesslet.engine import DefaultEngine
from chesslet.engine.python_search import MATE_SCORE, MinimaxEngine, evaluate
from chesslet.engine.search import SearchLimits

BEFORE_FOOLS_MATE = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR"
STALEMATE_BLACK = "7k/8/5KQ1/8/8/8/8/8"


class TestEvaluate:
    def test_initial_position_is_balanced(self) -> None:
        assert evaluate(Board.initial()) == pytest.approx(0.0)

    def test_black_material_is_positive(self) -> None:
        board = Board()
        board[parse_square("d4")] = Piece(Color.BLACK, PieceType.QUEEN)
        assert evaluate(board) == pytest.approx(90.6)

    def test_white_material_is_negative(self) -> None:
        board = Board()
        board[parse_square("a1")] = Piece(Color.WHITE, PieceType.PAWN)
        assert evaluate(board) == pytest.approx(-10.0)

    def test_empty_board(self) -> None:
        assert evaluate(Board()) == 0.0


class TestMinimaxEngine:
    def test_default_engine_alias(self) -> None:
        assert DefaultEngine is MinimaxEngine

    def test_rejects_zero_depth(self) -> None:
        with pytest.raises(ValueError):
            MinimaxEngine().search(Board.initial(), Color.WHITE, SearchLimits(max_depth=0))

    def test_opening_move_is_legal(self) -> None:
        board = Board.initial()
        move = MinimaxEngine().best_move(board, Color.BLACK)
        assert move is not None
        assert move in MoveGenerator(board).generate_legal_moves(Color.BLACK)

    def test_search_does_not_mutate_board(self) -> None:
        board = Board.initial()
        MinimaxEngine().search(board, Color.WHITE, SearchLimits())
        assert board == Board.initial()

    def test_deterministic(self) -> None:
        board = board_from_fen(BEFORE_FOOLS_MATE)
        first = MinimaxEngine().search(board, Color.WHITE, SearchLimits())
        second = MinimaxEngine().search(board, Color.WHITE, SearchLimits())
        assert first.best_move == second.best_move
        assert first.score == second.score

    def test_black_takes_hanging_queen(self) -> None:
        board = board_from_fen("4k3/8/8/3n4/8/2Q5/8/4K3")
        move = MinimaxEngine().best_move(board, Color.BLACK)
        assert move is not None
        assert (move.from_sq, move.to_sq) == (parse_square("d5"), parse_square("c3"))

    def test_white_takes_hanging_queen(self) -> None:
        board = board_from_fen("4k3/8/3q4/8/4N3/8/8/4K3")
        move = MinimaxEngine().best_move(board, Color.WHITE)
        assert move is not None
        assert move.notation == "Ne4-d6x"

    def test_black_finds_mate_in_one(self) -> None:
        board = board_from_fen(BEFORE_FOOLS_MATE)
        result = MinimaxEngine().search(board, Color.BLACK, SearchLimits())
        assert result.best_move is not None
        assert result.best_move.notation == "Qd8-h4"
        assert result.score == MATE_SCORE

    def test_white_finds_back_rank_mate(self) -> None:
        board = board_from_fen("6k1/5ppp/8/8/8/8/8/R5K1")
        result = MinimaxEngine().search(board, Color.WHITE, SearchLimits())
        assert result.best_move is not None
        assert result.best_move.notation == "Ra1-a8"
        assert result.score == -MATE_SCORE

    def test_stalemate_inside_search_scores_zero(self) -> None:
        board = board_from_fen(STALEMATE_BLACK)
        engine = MinimaxEngine()
        assert engine.minimax(board, 2, -math.inf, math.inf, True) == 0.0

    def test_checkmate_inside_search_scores_mate(self) -> None:
        board = board_from_fen("R5k1/5ppp/8/8/8/8/8/6K1")
        assert MinimaxEngine().minimax(board, 2, -math.inf, math.inf, True) == -MATE_SCORE

    def test_search_does_not_promote_pawns(self) -> None:
        # A queen on a8 would shift the score by about 80 in white's favour.
        board = board_from_fen("4k3/P7/8/8/8/8/8/K7")
        result = MinimaxEngine().search(board, Color.WHITE, SearchLimits(max_depth=1))
        assert abs(result.score - evaluate(board)) < 5
        assert board[parse_square("a7")] == Piece(Color.WHITE, PieceType.PAWN)

    def test_no_moves_returns_none(self) -> None:
        board = board_from_fen(STALEMATE_BLACK)
        result = MinimaxEngine().search(board, Color.BLACK, SearchLimits())
        assert result.best_move is None
        assert result.depth == 0

    def test_counts_nodes(self) -> None:
        engine = MinimaxEngine()
        result = engine.search(Board.initial(), Color.WHITE, SearchLimits(max_depth=1))
        assert result.nodes == 20
        assert engine.nodes == 20
        assert result.depth == 1
        assert not result.interrupted


class TestSearchBudget:
    def test_node_limit_falls_back_to_first_legal_move(self) -> None:
        board = Board.initial()
        result = MinimaxEngine().search(
            board, Color.WHITE, SearchLimits(max_depth=3, max_nodes=1)
        )
        first = MoveGenerator(board).generate_legal_moves(Color.WHITE)[0]
        assert result.interrupted
        assert result.best_move == first
        assert result.depth == 0

    def test_cancel_callback_stops_search(self) -> None:
        calls: list[int] = []

        def cancelled() -> bool:
            calls.append(1)
            return True

        result = MinimaxEngine().search(
            Board.initial(), Color.BLACK, SearchLimits(max_depth=4), cancelled
        )
        assert calls
        assert result.interrupted
        assert result.best_move is not None

    def test_keeps_completed_root_move_when_budget_runs_out(self) -> None:
        board = board_from_fen("4k3/8/8/3n4/8/2Q5/8/4K3")
        result = MinimaxEngine().search(
            board, Color.BLACK, SearchLimits(max_nodes=2)
        )
        first = MoveGenerator(board).generate_legal_moves(Color.BLACK)[0]
        assert result.interrupted
        assert result.best_move == first

    @pytest.mark.slow
    def test_time_limit_returns_legal_move(self) -> None:
        board = Board.initial()
        result = MinimaxEngine().search(
            board, Color.WHITE, SearchLimits(max_depth=6, time_limit_ms=50)
        )
        assert result.interrupted
        assert result.best_move in MoveGenerator(board).generate_legal_moves(Color.WHITE)
        assert board_to_fen(board) == board_to_fen(Board.initial())
