"""GameController, the central orchestrator of a chess game.

Coordinates: Players, GameState, MoveGenerator and the search engine.
Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslet.core.enums import Color, GameStatus
from chesslet.core.move import Move
from chesslet.core.types import Square, make_square
from chesslet.engine import DefaultEngine
from chesslet.engine.search import IEngine
from chesslet.game.interfaces import GameMode, GamePhase, IGameController, IPlayer
from chesslet.game.player import AIPlayer, HumanPlayer
from chesslet.game.settings import GameSettings
from chesslet.game.state import GameSnapshot, GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameStatus, Color | None], None]  # status, winner
PhaseCallback = Callable[[GamePhase], None]
AIPlayerFactory = Callable[[Color], IPlayer]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the single :class:`GameState`: validates moves, switches turns,
    prompts the computer and notifies listeners.

    Thread-safety: methods are designed to be called from a single thread.
    A deferred computer reply (``EngineSession``) arrives through
    ``submit_move`` on that same thread.
    """

    __slots__ = (
        "_settings",
        "_pending_mode",
        "_engine",
        "_ai_player_factory",
        "_state",
        "_players",
        "events",
    )

    def __init__(
        self,
        settings: GameSettings | None = None,
        *,
        engine: IEngine | None = None,
        start: bool = True,
    ) -> None:
        self._settings = settings or GameSettings()
        self._pending_mode = self._settings.mode
        self._engine: IEngine = engine or DefaultEngine()
        self._ai_player_factory: AIPlayerFactory | None = None
        self._state = GameState(mode=self._pending_mode)
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()
        if start:
            self.reset()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def mode(self) -> GameMode:
        """Mode of the game in progress (changes only on reset)."""
        return self._state.mode

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    @property
    def ai_player_factory(self) -> AIPlayerFactory | None:
        return self._ai_player_factory

    @ai_player_factory.setter
    def ai_player_factory(self, factory: AIPlayerFactory | None) -> None:
        """Replace how computer players are built; applies from the next game."""
        self._ai_player_factory = factory

    def snapshot(self) -> GameSnapshot:
        return self._state.snapshot()

    # ── IGameController impl ─────────────────────────────────────────────

    def reset(self) -> None:
        self.new_game()

    def new_game(
        self,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Start a game from the opening array or a FEN *placement*."""
        self._cancel_thinking()

        mode = self._pending_mode
        self._state = GameState(mode=mode)
        self._state.setup(placement, side_to_move)
        self._players = {
            Color.WHITE: self._make_player(Color.WHITE, mode),
            Color.BLACK: self._make_player(Color.BLACK, mode),
        }
        _LOGGER.info(
            "New game: mode=%s, %s to move", mode.name.lower(), self._state.side_to_move
        )

        if self._state.is_game_over:
            self._emit_game_over()
            return
        self._prompt_current_player()

    def set_mode(self, mode: GameMode) -> None:
        self._pending_mode = mode
        _LOGGER.info("Mode %s takes effect on next reset", mode.name.lower())

    def select_or_move(self, square: Square) -> bool:
        square = make_square(square[0], square[1])
        state = self._state
        if state.phase != GamePhase.AWAITING_MOVE:
            return False
        cp = self.current_player
        if cp is None or not cp.is_human:
            return False

        piece = state.board[square]
        if state.selected is not None and square in state.legal_targets:
            mover = state.board[state.selected]
            if mover is not None:
                self._apply(Move(state.selected, square, mover, piece))
                return True

        if piece is not None and piece.color == state.side_to_move:
            state.select(square)
        else:
            state.clear_selection()
        return False

    def submit_move(self, move: Move) -> bool:
        state = self._state
        if state.is_game_over:
            return False
        if state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        if move not in state.legal_moves():
            _LOGGER.debug("Rejected illegal move %s", move.notation)
            return False

        self._apply(move)
        return True

    def play_engine_move(self) -> bool:
        """Search synchronously for the side to move and play the result."""
        state = self._state
        if state.is_game_over:
            return False

        result = self._engine.search(
            state.board, state.side_to_move, self._settings.search_limits()
        )
        if result.best_move is None:
            _LOGGER.warning("Engine found no move for %s", state.side_to_move)
            return False
        return self.submit_move(result.best_move)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _make_player(self, color: Color, mode: GameMode) -> IPlayer:
        if mode == GameMode.HUMAN_VS_COMPUTER and color == self._settings.computer_color:
            if self._ai_player_factory is not None:
                return self._ai_player_factory(color)
            return AIPlayer(color, on_request_move=lambda _board: self.play_engine_move())
        return HumanPlayer(color)

    def _apply(self, move: Move) -> None:
        record = self._state.apply_move(move)
        _LOGGER.debug("Played %s, status=%s", record.notation, self._state.status)
        self._emit_move(record)

        if self._state.is_game_over:
            self._emit_game_over()
            return
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
        else:
            self._set_phase(GamePhase.THINKING)
            cp.request_move(self._state.board.clone())

    def _cancel_thinking(self) -> None:
        if self._state.phase != GamePhase.THINKING:
            return
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _set_phase(self, phase: GamePhase) -> None:
        self._state.phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self) -> None:
        state = self._state
        _LOGGER.info("Game over: %s after %d plies", state.status, state.ply_count)
        for cb in self.events.on_phase_changed:
            cb(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(state.status, state.winner)
