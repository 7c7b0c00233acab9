"""User-configurable game and engine settings."""

from __future__ import annotations

from dataclasses import dataclass

from chesslet.core.enums import Color
from chesslet.engine.search import SearchLimits
from chesslet.game.interfaces import GameMode


@dataclass
class GameSettings:
    """All settings the controller reads when a game starts."""

    # Game
    mode: GameMode = GameMode.HUMAN_VS_COMPUTER
    computer_color: Color = Color.BLACK

    # Engine
    search_depth: int = 2
    search_time_ms: int | None = None
    search_max_nodes: int | None = None

    # Presentation delay before the computer's reply is applied
    reply_delay_ms: int = 500

    def search_limits(self) -> SearchLimits:
        return SearchLimits(
            max_depth=self.search_depth,
            time_limit_ms=self.search_time_ms,
            max_nodes=self.search_max_nodes,
        )
