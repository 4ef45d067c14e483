from __future__ import annotations

from typing import Mapping, Optional

import chess

from ..config import log, warn
from .fen import FALLBACK_KING_SQUARES, encode_placement
from .rules import king_square
from .squares import Color, Piece, Role, Square
from .verdicts import LegalityVerdict, ReasonCode


class CheckOracle:
    """Answers whether *side_to_move* is in check in a full position.

    Any object with a matching ``in_check`` method can stand in for it.
    """

    def in_check(self, position: Mapping[Square, Piece], side_to_move: Color) -> bool:
        raise NotImplementedError


class PythonChessOracle(CheckOracle):
    def in_check(self, position: Mapping[Square, Piece], side_to_move: Color) -> bool:
        turn = "w" if side_to_move is Color.WHITE else "b"
        board = chess.Board(f"{encode_placement(position)} {turn} - - 0 1")
        return board.is_check()


class CheckAvoidanceGate:
    """Rejects a drop that would put the opponent in check."""

    def __init__(self, oracle: Optional[CheckOracle] = None) -> None:
        self.oracle = oracle if oracle is not None else PythonChessOracle()

    def hypothetical(self, position: Mapping[Square, Piece], square: Square, piece: Piece):
        board = dict(position)
        board[square] = piece
        for color, fallback in FALLBACK_KING_SQUARES.items():
            if king_square(board, color) is not None:
                continue
            # Reset/orchestrator bug, not a user error
            warn(f"[CheckGate] invariant violated: no {color.name} king on the board; "
                 f"using {fallback.name} for the oracle")
            if fallback not in board:
                board[fallback] = Piece(Role.KING, color)
        return board

    def check(self, position: Mapping[Square, Piece], square: Square, piece: Piece) -> LegalityVerdict:
        board = self.hypothetical(position, square, piece)
        side = piece.color.opponent
        if self.oracle.in_check(board, side):
            log(f"[CheckGate] {piece.symbol}@{square.name} checks {side.name}")
            return LegalityVerdict.reject(
                ReasonCode.CHECK_VIOLATION,
                f"Dropping a {piece.role.name.lower()} on {square.name} would give check",
            )
        return LegalityVerdict.accept()


__all__ = ["CheckAvoidanceGate", "CheckOracle", "PythonChessOracle"]
