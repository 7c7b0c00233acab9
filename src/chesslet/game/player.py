"""Players seated at the board: a human clicking squares, or the computer."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chesslet.core.enums import Color
from chesslet.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chesslet.core.board import Board

MoveRequest = Callable[["Board"], None]


class _Seat(IPlayer):
    """Color and display name shared by both kinds of player."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._color!s}, {self._name!r})"


class HumanPlayer(_Seat):
    """Moves arrive through ``GameController.select_or_move``; nothing to start."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color!s})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(_Seat):
    """The computer; its turn is handed to *on_request_move*.

    By default the controller wires this to its synchronous search. An
    ``EngineSession`` passes its worker-thread request and cancel instead.
    """

    __slots__ = ("_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Computer",
        on_request_move: MoveRequest | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, board: Board) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
