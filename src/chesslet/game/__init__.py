"""Game management layer: controller, players and the game state machine.

Quick start::

    from chesslet.core import parse_square
    from chesslet.game import GameController, GameMode, GameSettings

    ctrl = GameController(GameSettings(mode=GameMode.HUMAN_VS_HUMAN))
    ctrl.select_or_move(parse_square("e2"))
    ctrl.select_or_move(parse_square("e4"))
    print(ctrl.snapshot().history)  # ('e2-e4',)

``EngineSession`` (Qt worker thread + reply delay) lives in
``chesslet.game.engine_session``.
"""

from chesslet.game.controller import GameController, GameEvents
from chesslet.game.interfaces import GameMode, GamePhase, IGameController, IPlayer
from chesslet.game.player import AIPlayer, HumanPlayer
from chesslet.game.settings import GameSettings
from chesslet.game.state import GameSnapshot, GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameMode",
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameSettings",
    "GameSnapshot",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
]
