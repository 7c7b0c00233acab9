"""Pure-Python chess engine search (minimax + alpha-beta)."""

from __future__ import annotations

import logging
from time import perf_counter

from chesslet.core.board import Board
from chesslet.core.enums import Color, PieceType
from chesslet.core.move import Move
from chesslet.core.move_generator import MoveGenerator
from chesslet.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = float("inf")
MATE_SCORE = 10_000
_CENTER = 3.5
_CENTER_WEIGHT = 0.1

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 10,
    PieceType.KNIGHT: 30,
    PieceType.BISHOP: 30,
    PieceType.ROOK: 50,
    PieceType.QUEEN: 90,
    PieceType.KING: 900,
}


def _never_cancelled() -> bool:
    return False


def evaluate(board: Board) -> float:
    """Static material + centrality score. Positive favours black."""
    score = 0.0
    for (row, col), piece in board.pieces():
        center_bonus = (_CENTER - abs(col - _CENTER)) * _CENTER_WEIGHT + (
            _CENTER - abs(row - _CENTER)
        ) * _CENTER_WEIGHT
        value = PIECE_VALUES[piece.piece_type] + center_bonus
        if piece.color == Color.WHITE:
            score -= value
        else:
            score += value
    return score


def _child(board: Board, move: Move) -> Board:
    child = board.clone()
    child.make_move(move, promote=False)
    return child


class MinimaxEngine(IEngine):
    """Fixed-depth minimax searcher with alpha-beta pruning.

    Black is always the maximizing side and white the minimizing one,
    whichever color the engine plays. Every ply works on its own board
    copy, so the caller's board is never touched.
    """

    __slots__ = (
        "_cancel_check",
        "_deadline",
        "_max_nodes",
        "_nodes",
        "_stopped",
    )

    def __init__(self) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._max_nodes: int | None = None
        self._cancel_check: CancelCheck = _never_cancelled
        self._stopped = False

    @property
    def nodes(self) -> int:
        return self._nodes

    # ── IEngine protocol ─────────────────────────────────────────────────

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._stopped = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._max_nodes = limits.max_nodes
        self._deadline = None
        started = perf_counter()
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = started + (ms / 1000.0)

        root_moves = MoveGenerator(board).generate_legal_moves(color)
        if not root_moves:
            return SearchResult(None, evaluate(board), 0, self._nodes)

        maximizing = color == Color.BLACK
        best_move = root_moves[0]
        best_score: float | None = None

        for move in root_moves:
            if self._should_stop():
                break

            score = self.minimax(
                _child(board, move),
                limits.max_depth - 1,
                -_INF_SCORE,
                _INF_SCORE,
                not maximizing,
            )
            if self._stopped:
                break

            if best_score is None or (
                score > best_score if maximizing else score < best_score
            ):
                best_score = score
                best_move = move

        if best_score is None:
            best_score = evaluate(board)
        completed_depth = 0 if self._stopped else limits.max_depth
        elapsed_ms = (perf_counter() - started) * 1000.0

        if self._stopped:
            _LOGGER.warning(
                "Search for %s stopped early after %d nodes (%.0f ms); using %s",
                color,
                self._nodes,
                elapsed_ms,
                best_move.notation,
            )
        else:
            _LOGGER.debug(
                "Search for %s: %s score=%.1f depth=%d nodes=%d in %.0f ms",
                color,
                best_move.notation,
                best_score,
                completed_depth,
                self._nodes,
                elapsed_ms,
            )

        return SearchResult(
            best_move,
            best_score,
            completed_depth,
            self._nodes,
            interrupted=self._stopped,
        )

    # ── Convenience ──────────────────────────────────────────────────────

    def best_move(self, board: Board, color: Color, depth: int = 2) -> Move | None:
        """Best move for *color* at a fixed *depth*, without any budget."""
        return self.search(board, color, SearchLimits(max_depth=depth)).best_move

    # ── Search ───────────────────────────────────────────────────────────

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        """Alpha-beta minimax value of *board*; black to move iff *maximizing*."""
        self._nodes += 1
        if depth <= 0:
            return evaluate(board)
        if self._should_stop():
            return evaluate(board)

        color = Color.BLACK if maximizing else Color.WHITE
        gen = MoveGenerator(board)
        moves = gen.generate_legal_moves(color)

        if not moves:
            if gen.is_in_check(color):
                return -MATE_SCORE if maximizing else MATE_SCORE
            return 0.0

        if maximizing:
            max_eval = -_INF_SCORE
            for move in moves:
                score = self.minimax(_child(board, move), depth - 1, alpha, beta, False)
                max_eval = max(max_eval, score)
                alpha = max(alpha, score)
                if beta <= alpha or self._stopped:
                    break
            return max_eval

        min_eval = _INF_SCORE
        for move in moves:
            score = self.minimax(_child(board, move), depth - 1, alpha, beta, True)
            min_eval = min(min_eval, score)
            beta = min(beta, score)
            if beta <= alpha or self._stopped:
                break
        return min_eval

    def _should_stop(self) -> bool:
        if self._stopped:
            return True
        if self._cancel_check():
            self._stopped = True
        elif self._max_nodes is not None and self._nodes >= self._max_nodes:
            self._stopped = True
        elif self._deadline is not None and perf_counter() >= self._deadline:
            self._stopped = True
        return self._stopped
