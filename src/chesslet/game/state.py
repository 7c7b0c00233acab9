"""Game state aggregate: board, turn, history, captures and status."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslet.core.board import Board
from chesslet.core.enums import Color, GameStatus
from chesslet.core.move import Move
from chesslet.core.move_generator import MoveGenerator
from chesslet.core.notation import board_from_fen, history_lines
from chesslet.core.piece import Piece
from chesslet.core.rules import Rules
from chesslet.core.types import Square
from chesslet.game.interfaces import GameMode, GamePhase


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    was_check: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game for the presentation layer."""

    board: tuple[tuple[Piece | None, ...], ...]
    side_to_move: Color
    status: GameStatus
    selected: Square | None
    legal_targets: tuple[Square, ...]
    history: tuple[str, ...]
    captured: dict[Color, tuple[Piece, ...]]
    last_move: Move | None
    check_square: Square | None
    winner: Color | None
    is_thinking: bool = False

    @property
    def numbered_history(self) -> list[str]:
        return history_lines(self.history)

    @property
    def status_text(self) -> str:
        """Status line, e.g. ``"Current turn: White"`` or ``"Stalemate! Draw."``."""
        if self.status == GameStatus.CHECKMATE and self.winner is not None:
            return f"Checkmate! {str(self.winner).capitalize()} wins!"
        if self.status == GameStatus.STALEMATE:
            return "Stalemate! Draw."
        text = f"Current turn: {str(self.side_to_move).capitalize()}"
        if self.status == GameStatus.CHECK:
            text += " Check!"
        return text


def _empty_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameState:
    """One game's worth of mutable state, changed only through ``apply_move``.

    ``captured[color]`` lists the pieces *color* has taken. This is a pure
    data/logic class without threading or UI.
    """

    mode: GameMode = GameMode.HUMAN_VS_COMPUTER
    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    history: list[MoveRecord] = field(default_factory=list, init=False)
    captured: dict[Color, list[Piece]] = field(
        default_factory=_empty_captures, init=False
    )
    selected: Square | None = field(default=None, init=False)
    legal_targets: list[Square] = field(default_factory=list, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Start from the opening array, or from a FEN *placement*."""
        self.board = board_from_fen(placement) if placement else Board.initial()
        self.side_to_move = side_to_move
        self.history.clear()
        self.captured = _empty_captures()
        self.clear_selection()
        self.status = Rules.game_status(self.board, side_to_move)
        self.phase = (
            GamePhase.GAME_OVER if self.status.is_terminal else GamePhase.AWAITING_MOVE
        )

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for the legality check. Board, history,
        captures, turn, status and selection are all updated here.
        """
        mover = self.side_to_move
        self.board.make_move(move)

        if move.captured is not None:
            self.captured[mover].append(move.captured)

        self.side_to_move = mover.opposite
        self.status = Rules.game_status(self.board, self.side_to_move)

        record = MoveRecord(
            move=move,
            notation=move.notation,
            was_check=self.status in (GameStatus.CHECK, GameStatus.CHECKMATE),
        )
        self.history.append(record)
        self.clear_selection()
        if self.status.is_terminal:
            self.phase = GamePhase.GAME_OVER
        return record

    # ── Selection ────────────────────────────────────────────────────────

    def select(self, square: Square) -> None:
        self.selected = square
        self.legal_targets = MoveGenerator(self.board).legal_moves(square)

    def clear_selection(self) -> None:
        self.selected = None
        self.legal_targets = []

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def last_move(self) -> Move | None:
        return self.history[-1].move if self.history else None

    @property
    def winner(self) -> Color | None:
        if self.status == GameStatus.CHECKMATE:
            return self.side_to_move.opposite
        return None

    @property
    def check_square(self) -> Square | None:
        """King square of the side to move while it is in check."""
        if self.status not in (GameStatus.CHECK, GameStatus.CHECKMATE):
            return None
        return self.board.king_square(self.side_to_move)

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return MoveGenerator(self.board).generate_legal_moves(self.side_to_move)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=self.board.rows(),
            side_to_move=self.side_to_move,
            status=self.status,
            selected=self.selected,
            legal_targets=tuple(self.legal_targets),
            history=tuple(r.notation for r in self.history),
            captured={c: tuple(p) for c, p in self.captured.items()},
            last_move=self.last_move,
            check_square=self.check_square,
            winner=self.winner,
            is_thinking=self.phase == GamePhase.THINKING,
        )
