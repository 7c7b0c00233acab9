"""Deferred computer replies: worker-thread search plus a presentation delay."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from chesslet.core.move import Move
from chesslet.core.notation import board_to_fen
from chesslet.engine.qt_bridge import EngineWorker
from chesslet.engine.search import IEngine, SearchLimits
from chesslet.game.interfaces import GamePhase
from chesslet.game.player import AIPlayer

if TYPE_CHECKING:
    from chesslet.core.board import Board
    from chesslet.core.enums import Color
    from chesslet.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class _EngineCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    search_requested = pyqtSignal(object, int, int)
    set_limits_requested = pyqtSignal(object)


class EngineSession:
    """Owns the worker-thread search lifecycle and the move handoff.

    At most one request is outstanding; answers to older requests, or for a
    board that has changed since, are dropped. The engine's move is applied
    through ``GameController.submit_move`` once ``reply_delay_ms`` has
    passed since the request, so it takes exactly the path a human move does.
    """

    _MAX_FAILURE_RETRIES = 1

    __slots__ = (
        "__weakref__",
        "_controller",
        "_reply_delay_ms",
        "_command_bus",
        "_move_apply_timer",
        "_pending_move",
        "_engine_thread",
        "_engine_worker",
        "_engine_request_id",
        "_pending_engine_request",
        "_pending_engine_fen",
        "_requested_at",
        "_remaining_failure_retries",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        parent: QObject | None = None,
        reply_delay_ms: int | None = None,
        engine: IEngine | None = None,
    ) -> None:
        settings = controller.settings
        self._controller = controller
        self._reply_delay_ms = (
            settings.reply_delay_ms if reply_delay_ms is None else reply_delay_ms
        )

        self._command_bus = _EngineCommandBus(parent)
        self._move_apply_timer = QTimer(parent)
        self._move_apply_timer.setSingleShot(True)
        self._move_apply_timer.timeout.connect(self._apply_delayed_move)
        self._pending_move: Move | None = None

        self._engine_thread = QThread(parent)
        self._engine_worker = EngineWorker(limits=settings.search_limits(), engine=engine)
        self._engine_request_id = 0
        self._pending_engine_request: int | None = None
        self._pending_engine_fen: str | None = None
        self._requested_at = 0.0
        self._remaining_failure_retries = 0
        self._is_shutting_down = False
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    def setup(self) -> None:
        """Start the worker thread and route computer turns through it.

        Takes effect for players created from the next ``reset()`` on.
        """
        if self._is_started:
            return
        self._is_shutting_down = False
        self._engine_worker.moveToThread(self._engine_thread)
        self._command_bus.search_requested.connect(self._engine_worker.request_move)
        self._command_bus.set_limits_requested.connect(self._engine_worker.set_limits)
        self._engine_worker.best_move_ready.connect(self._on_engine_best_move)
        self._engine_worker.search_cancelled.connect(self._on_engine_cancelled)
        self._engine_worker.search_no_move.connect(self._on_engine_no_move)
        self._engine_worker.search_error.connect(self._on_engine_error)
        self._engine_thread.start()
        self._controller.ai_player_factory = self.create_ai_player
        self._is_started = True

    def shutdown(self) -> None:
        """Stop the active search and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_ai_search()
        self._engine_thread.quit()
        self._engine_thread.wait(2000)
        self._controller.ai_player_factory = None
        self._is_started = False

    def set_limits(self, limits: SearchLimits) -> None:
        """Update engine limits for subsequent searches."""
        if self._is_started:
            self._command_bus.set_limits_requested.emit(limits)
            return
        self._engine_worker.set_limits(limits)

    def create_ai_player(self, color: Color) -> AIPlayer:
        """Create a computer player wired to this session."""
        return AIPlayer(
            color,
            "Computer",
            on_request_move=self.request_ai_move,
            on_cancel=self.cancel_ai_search,
        )

    def request_ai_move(self, board: Board) -> None:
        """Queue a best-move search for *board*.

        Once the session is shut down, players it created still reach this
        method; the controller then searches on the calling thread instead.
        """
        if self._is_shutting_down:
            self._controller.play_engine_move()
            return
        if not self._is_started:
            return
        self._queue_request(board.clone(), reset_retry_budget=True)

    def cancel_ai_search(self) -> None:
        """Cancel any pending/active engine request."""
        self._move_apply_timer.stop()
        self._clear_pending_request()
        self._pending_move = None
        # Direct call: the flag must reach the worker while it is searching.
        self._engine_worker.cancel()

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _on_engine_best_move(
        self,
        request_id: int,
        move_obj: object,
        score: float,
        depth: int,
        nodes: int,
    ) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return
        if not isinstance(move_obj, Move):
            return

        state = self._controller.state
        if state.phase != GamePhase.THINKING:
            return
        if self._pending_engine_fen != board_to_fen(state.board):
            return

        _LOGGER.debug(
            "Engine reply %s (score=%.1f depth=%d nodes=%d)",
            move_obj.notation,
            score,
            depth,
            nodes,
        )
        self._clear_pending_request()
        self._remaining_failure_retries = 0

        elapsed_ms = (perf_counter() - self._requested_at) * 1000.0
        self._pending_move = move_obj
        self._move_apply_timer.start(max(0, int(self._reply_delay_ms - elapsed_ms)))

    def _apply_delayed_move(self) -> None:
        """Apply the pending move once the reply delay has passed."""
        if self._is_shutting_down or self._pending_move is None:
            return

        move = self._pending_move
        self._pending_move = None
        if not self._controller.submit_move(move):
            _LOGGER.warning("Controller rejected engine move %s", move.notation)

    def _on_engine_no_move(self, request_id: int) -> None:
        self._handle_engine_failure(request_id, "Engine produced no move")

    def _on_engine_error(self, request_id: int, message: str) -> None:
        self._handle_engine_failure(request_id, message)

    def _on_engine_cancelled(self, request_id: int) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return
        self._clear_pending_request()
        self._remaining_failure_retries = 0

    # ── Internal ─────────────────────────────────────────────────────────

    def _queue_request(self, board: Board, *, reset_retry_budget: bool) -> None:
        self.cancel_ai_search()
        if self._is_shutting_down:
            return

        self._engine_request_id += 1
        self._pending_engine_request = self._engine_request_id
        self._pending_engine_fen = board_to_fen(board)
        self._requested_at = perf_counter()
        if reset_retry_budget:
            self._remaining_failure_retries = self._MAX_FAILURE_RETRIES

        color = self._controller.state.side_to_move
        self._command_bus.search_requested.emit(
            board, int(color), self._engine_request_id
        )

    def _clear_pending_request(self) -> None:
        self._pending_engine_request = None
        self._pending_engine_fen = None

    def _handle_engine_failure(self, request_id: int, message: str) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return

        state = self._controller.state
        if state.phase != GamePhase.THINKING:
            self._clear_pending_request()
            return

        if self._remaining_failure_retries > 0:
            self._remaining_failure_retries -= 1
            _LOGGER.warning("Engine request %d failed (%s); retrying", request_id, message)
            self._queue_request(state.board.clone(), reset_retry_budget=False)
            return

        self._clear_pending_request()
        _LOGGER.error(
            "Engine request %d failed (%s); searching on the calling thread",
            request_id,
            message,
        )
        self._controller.play_engine_move()
