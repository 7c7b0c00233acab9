"""chesslet: chess rules, a minimax opponent and a game controller."""

__version__ = "0.1.0"
