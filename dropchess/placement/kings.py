from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

from .sequencer import Phase, PlacementSequenceState
from .squares import FILES, Color, Piece, Role, Square

WHITE_KING_RANKS = (1, 2)
BLACK_KING_RANKS = (7, 8)


class RandomKingInitializer:
    """Draws the two starting king squares.

    The random source only needs a ``choice`` method, so tests can pass a
    scripted object instead of ``random.Random``. Draw order is white file,
    white rank, black file, black rank.
    """

    def __init__(self, rng=None, seed: Optional[int] = None) -> None:
        if rng is None:
            rng = random.Random(seed)
        self.rng = rng

    def draw(self) -> Tuple[Square, Square]:
        wf = FILES.index(self.rng.choice(FILES))
        wr = self.rng.choice(WHITE_KING_RANKS)
        bf = FILES.index(self.rng.choice(FILES))
        br = self.rng.choice(BLACK_KING_RANKS)
        # Rank ranges never intersect, so no collision check
        return Square(wf, wr), Square(bf, br)

    def reset(self) -> Tuple[Dict[Square, Piece], PlacementSequenceState]:
        white_sq, black_sq = self.draw()
        position = {
            white_sq: Piece(Role.KING, Color.WHITE),
            black_sq: Piece(Role.KING, Color.BLACK),
        }
        return position, PlacementSequenceState(move_count=1, phase=Phase.PLACEMENT)


__all__ = ["BLACK_KING_RANKS", "RandomKingInitializer", "WHITE_KING_RANKS"]
