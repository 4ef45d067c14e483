from __future__ import annotations

from typing import Mapping

from .rules import PIECE_LIMITS, count_pieces
from .sequencer import Category
from .squares import Color, Piece, Role, Square

SUGGESTION_ORDER = (Role.KNIGHT, Role.BISHOP, Role.ROOK, Role.QUEEN)


def suggest(category: Category, color: Color, position: Mapping[Square, Piece]) -> Role:
    """Advisory next piece for *color*; never blocks a drop."""
    if category is Category.PAWN:
        return Role.PAWN
    for role in SUGGESTION_ORDER:
        if count_pieces(position, color, role) < PIECE_LIMITS[role]:
            return role
    # All four saturated: should not happen with correct counts
    return Role.PAWN


__all__ = ["SUGGESTION_ORDER", "suggest"]
