"""
FEN encoding of the drop-phase position.

Only the piece-placement field reflects the position. The remaining fields are
fixed placeholders (``w - - 0 1``) while pieces are still being dropped: the
string is a positional snapshot, not a move-legal game state.
"""
from __future__ import annotations

from typing import Dict, List, Mapping

import chess

from .squares import Color, Piece, Role, Square

PLACEHOLDER_FIELDS = "w - - 0 1"

FALLBACK_KING_SQUARES = {
    Color.WHITE: Square(4, 1),  # e1
    Color.BLACK: Square(4, 8),  # e8
}


def with_fallback_kings(position: Mapping[Square, Piece]) -> Dict[Square, Piece]:
    """Copy of *position* with a king synthesized for any side that lacks one.

    A king is only synthesized when its fallback square is empty.
    """
    out = dict(position)
    for color, fallback in FALLBACK_KING_SQUARES.items():
        king = Piece(Role.KING, color)
        if king in out.values():
            continue
        if fallback not in out:
            out[fallback] = king
    return out


def encode_placement(position: Mapping[Square, Piece]) -> str:
    board = with_fallback_kings(position)
    rows: List[str] = []
    for rank in range(8, 0, -1):
        row_chars: List[str] = []
        empty_count = 0
        for file in range(8):
            piece = board.get(Square(file, rank))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                row_chars.append(str(empty_count))
                empty_count = 0
            row_chars.append(piece.symbol)
        if empty_count > 0:
            row_chars.append(str(empty_count))
        rows.append("".join(row_chars))
    return "/".join(rows)


def encode(position: Mapping[Square, Piece]) -> str:
    return f"{encode_placement(position)} {PLACEHOLDER_FIELDS}"


def position_from_fen(text: str) -> Dict[Square, Piece]:
    """Decode a placement field (or a full FEN string) into a position mapping."""
    placement = text.strip().split(" ", 1)[0]
    board = chess.BaseBoard(placement)
    out: Dict[Square, Piece] = {}
    for index, piece in board.piece_map().items():
        sq = Square(chess.square_file(index), chess.square_rank(index) + 1)
        out[sq] = Piece.from_symbol(piece.symbol())
    return out


__all__ = [
    "FALLBACK_KING_SQUARES",
    "PLACEHOLDER_FIELDS",
    "encode",
    "encode_placement",
    "position_from_fen",
    "with_fallback_kings",
]
