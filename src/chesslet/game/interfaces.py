"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chesslet.core.enums import Color

if TYPE_CHECKING:
    from chesslet.core.board import Board
    from chesslet.core.move import Move
    from chesslet.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # engine is computing
    GAME_OVER = auto()


class GameMode(IntEnum):
    """Who controls the pieces. Read once per game, at reset."""

    HUMAN_VS_HUMAN = auto()
    HUMAN_VS_COMPUTER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or computer)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via square selection).
        For the computer this starts a search on a copy of the board.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (computer only)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def reset(self) -> None:
        """Replace the game with a fresh one from the opening position."""

    @abstractmethod
    def set_mode(self, mode: GameMode) -> None:
        """Choose the mode used from the next :meth:`reset` on."""

    @abstractmethod
    def select_or_move(self, square: Square) -> bool:
        """Handle one square selection. Returns True if a move was played."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""
