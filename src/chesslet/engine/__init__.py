"""Chess engine package: minimax search and Qt worker bridge.

The Qt bridge is imported lazily so the search can be used without PyQt6
being loaded (``from chesslet.engine.qt_bridge import EngineWorker``).
"""

from chesslet.engine.python_search import MATE_SCORE, PIECE_VALUES, MinimaxEngine, evaluate
from chesslet.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "MATE_SCORE",
    "PIECE_VALUES",
    "CancelCheck",
    "DefaultEngine",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "evaluate",
]
