"""Tests for EngineSession: deferred replies, stale drops and fallbacks."""

from __future__ import annotations

import weakref

import pytest
from PyQt6.QtTest import QTest

from chesslet.core.enums import Color
from chesslet.core.move import Move
from chesslet.core.types import parse_square
from chesslet.engine.search import SearchLimits
from chesslet.game.controller import GameController
from chesslet.game.engine_session import EngineSession
from chesslet.game.interfaces import GamePhase
from chesslet.game.settings import GameSettings

pytestmark = pytest.mark.usefixtures("qapp")


def _thinking_session(reply_delay_ms: int = 0) -> tuple[GameController, EngineSession]:
    """Controller waiting on the computer (black) after 1. e2-e4, worker not started."""
    ctrl = GameController(GameSettings(search_depth=1), start=False)
    session = EngineSession(controller=ctrl, reply_delay_ms=reply_delay_ms)
    ctrl.ai_player_factory = session.create_ai_player
    ctrl.reset()
    ctrl.select_or_move(parse_square("e2"))
    ctrl.select_or_move(parse_square("e4"))
    assert ctrl.state.phase == GamePhase.THINKING
    session._queue_request(ctrl.state.board.clone(), reset_retry_budget=True)
    return ctrl, session


def _black_move(ctrl: GameController, src: str, dst: str) -> Move:
    piece = ctrl.state.board[parse_square(src)]
    assert piece is not None
    return Move(parse_square(src), parse_square(dst), piece)


class TestLifecycle:
    def test_shutdown_before_setup_is_noop(self) -> None:
        session = EngineSession(controller=GameController())
        session.shutdown()
        assert session.is_started is False

    def test_setup_twice_keeps_started_state(self) -> None:
        ctrl = GameController()
        session = EngineSession(controller=ctrl)
        session.setup()
        session.setup()
        assert session.is_started is True
        assert ctrl.ai_player_factory is not None
        session.shutdown()
        assert session.is_started is False
        assert ctrl.ai_player_factory is None

    def test_weakref_supported(self) -> None:
        session = EngineSession(controller=GameController())
        assert weakref.ref(session)() is session

    def test_request_ignored_when_not_started(self) -> None:
        ctrl = GameController()
        session = EngineSession(controller=ctrl)
        session.request_ai_move(ctrl.state.board)
        assert session._pending_engine_request is None

    def test_players_fall_back_to_sync_search_after_shutdown(self) -> None:
        ctrl = GameController(GameSettings(search_depth=1), start=False)
        session = EngineSession(controller=ctrl)
        session.setup()
        ctrl.reset()
        session.shutdown()

        ctrl.select_or_move(parse_square("e2"))
        ctrl.select_or_move(parse_square("e4"))

        assert ctrl.state.ply_count == 2
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE

    def test_reply_delay_defaults_to_settings(self) -> None:
        ctrl = GameController(GameSettings(reply_delay_ms=250))
        assert EngineSession(controller=ctrl)._reply_delay_ms == 250
        assert EngineSession(controller=ctrl, reply_delay_ms=0)._reply_delay_ms == 0

    def test_set_limits_before_setup_reaches_worker(self) -> None:
        session = EngineSession(controller=GameController())
        limits = SearchLimits(max_depth=3)
        session.set_limits(limits)
        assert session._engine_worker.limits == limits


class TestReplyHandling:
    def test_best_move_applied_after_delay(self) -> None:
        ctrl, session = _thinking_session(reply_delay_ms=500)
        move = _black_move(ctrl, "e7", "e5")

        session._on_engine_best_move(session._engine_request_id, move, 0.0, 1, 20)
        assert session._move_apply_timer.isActive()
        assert ctrl.state.ply_count == 1

        session._apply_delayed_move()
        assert ctrl.snapshot().history == ("e2-e4", "e7-e5")
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        session.cancel_ai_search()

    def test_stale_request_id_is_dropped(self) -> None:
        ctrl, session = _thinking_session()
        move = _black_move(ctrl, "e7", "e5")

        session._on_engine_best_move(session._engine_request_id + 1, move, 0.0, 1, 20)

        assert session._pending_move is None
        assert session._pending_engine_request == session._engine_request_id

    def test_changed_board_is_dropped(self) -> None:
        ctrl, session = _thinking_session()
        move = _black_move(ctrl, "e7", "e5")
        session._pending_engine_fen = "8/8/8/8/8/8/8/8"

        session._on_engine_best_move(session._engine_request_id, move, 0.0, 1, 20)

        assert session._pending_move is None

    def test_reply_after_reset_is_dropped(self) -> None:
        ctrl, session = _thinking_session()
        move = _black_move(ctrl, "e7", "e5")
        request_id = session._engine_request_id

        ctrl.reset()
        session._on_engine_best_move(request_id, move, 0.0, 1, 20)

        assert session._pending_move is None
        assert ctrl.state.ply_count == 0

    def test_cancelled_clears_pending_request(self) -> None:
        _ctrl, session = _thinking_session()
        session._on_engine_cancelled(session._engine_request_id)
        assert session._pending_engine_request is None


class TestFailureHandling:
    def test_error_retries_once_then_falls_back(self) -> None:
        ctrl, session = _thinking_session()
        first_id = session._engine_request_id

        session._on_engine_error(first_id, "boom")
        assert session._engine_request_id == first_id + 1
        assert session._pending_engine_request == first_id + 1
        assert ctrl.state.ply_count == 1

        session._on_engine_no_move(first_id + 1)
        assert session._pending_engine_request is None
        assert ctrl.state.ply_count == 2
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE

    def test_failure_for_stale_request_is_ignored(self) -> None:
        ctrl, session = _thinking_session()
        session._on_engine_error(session._engine_request_id - 1, "old")
        assert ctrl.state.ply_count == 1
        assert session._remaining_failure_retries == 1


class TestWorkerThread:
    def test_computer_reply_arrives_through_worker(self) -> None:
        ctrl = GameController(GameSettings(search_depth=1, reply_delay_ms=0))
        session = EngineSession(controller=ctrl)
        session.setup()
        try:
            ctrl.reset()
            ctrl.select_or_move(parse_square("e2"))
            ctrl.select_or_move(parse_square("e4"))
            assert ctrl.state.phase == GamePhase.THINKING

            for _ in range(500):
                if ctrl.state.ply_count == 2:
                    break
                QTest.qWait(10)

            assert ctrl.state.ply_count == 2
            assert ctrl.state.side_to_move == Color.WHITE
            assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        finally:
            session.shutdown()
