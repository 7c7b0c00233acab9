"""Board placement (FEN first field) and move-list rendering."""

from __future__ import annotations

from collections.abc import Iterable

from chesslet.core.board import Board
from chesslet.core.piece import Piece
from chesslet.core.types import BOARD_SIZE, Square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def board_from_fen(placement: str) -> Board:
    """Parse the piece-placement field of a FEN string into a :class:`Board`.

    Only the first field is read; anything after a space is ignored since
    castling and en-passant state do not exist in this rule set.
    """
    placement = placement.strip().split(" ", 1)[0]
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                col += step
            else:
                if col >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {placement!r}")
                board[Square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {placement!r}")
        if col != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {placement!r}")
    return board


def board_to_fen(board: Board) -> str:
    """Serialise *board* to a FEN piece-placement field."""
    ranks: list[str] = []
    for cells in board.rows():
        empty = 0
        text = ""
        for piece in cells:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def history_lines(notations: Iterable[str]) -> list[str]:
    """Numbered move-list lines: ``1. e2-e4``, ``1... e7-e5``, ``2. Ng1-f3``."""
    lines: list[str] = []
    for ply, text in enumerate(notations):
        number = ply // 2 + 1
        marker = "." if ply % 2 == 0 else "..."
        lines.append(f"{number}{marker} {text}")
    return lines
