"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesslet.core.board import Board
    from chesslet.core.enums import Color
    from chesslet.core.move import Move

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``max_depth`` counts plies including the root move. ``time_limit_ms``
    and ``max_nodes`` are optional budgets; ``None`` means unbounded.
    """

    max_depth: int = 2
    time_limit_ms: int | None = None
    max_nodes: int | None = None


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` follows the evaluator's sign convention: positive favours
    black. ``interrupted`` is set when a budget or cancellation cut the
    search short and ``best_move`` is the best of the moves finished so far.
    """

    best_move: Move | None
    score: float
    depth: int
    nodes: int
    interrupted: bool = False


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
