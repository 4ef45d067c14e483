"""
Verdicts returned by the placement rules, and the exceptions raised for
programming or protocol errors.

A rejected drop is a normal outcome and is reported as a LegalityVerdict,
never raised. Exceptions are reserved for callers using the engine wrongly.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .squares import Role, Square


class ReasonCode(Enum):
    INVALID_SQUARE_FORMAT = "InvalidSquareFormat"
    SQUARE_OCCUPIED = "SquareOccupied"
    WRONG_MOVE_TYPE = "WrongMoveType"
    PIECE_COUNT_EXCEEDED = "PieceCountExceeded"
    KING_SAFE_ZONE_VIOLATION = "KingSafeZoneViolation"
    PAWN_RANK_OUT_OF_BAND = "PawnRankOutOfBand"
    PAWN_FILE_STACKING_DISALLOWED = "PawnFileStackingDisallowed"
    BISHOP_COLOR_DUPLICATE = "BishopColorDuplicate"
    CHECK_VIOLATION = "CheckViolation"


@dataclass(frozen=True)
class LegalityVerdict:
    accepted: bool
    reason_code: Optional[ReasonCode] = None
    message: str = ""
    legal_squares: Optional[Tuple["Square", ...]] = None
    role: Optional["Role"] = None

    @classmethod
    def accept(cls, message: str = "OK") -> "LegalityVerdict":
        return cls(True, None, message)

    @classmethod
    def reject(cls, code: ReasonCode, message: str, *, legal_squares=None, role=None) -> "LegalityVerdict":
        squares = tuple(legal_squares) if legal_squares is not None else None
        return cls(False, code, message, squares, role)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"accepted": self.accepted, "message": self.message}
        if self.reason_code is not None:
            out["reason"] = self.reason_code.value
        if self.role is not None:
            out["role"] = self.role.name.lower()
        if self.legal_squares is not None:
            out["legal_squares"] = [sq.name for sq in self.legal_squares]
        return out


class PlacementError(Exception):
    pass


class InvalidSquareError(PlacementError, ValueError):
    def __init__(self, text: Any):
        self.text = text
        super().__init__(f"Invalid square '{text}'")


class PlacementClosedError(PlacementError):
    def __init__(self, phase: str = "STANDARD"):
        self.phase = phase
        super().__init__(f"Placement is closed (phase: {phase})")


class PositionError(PlacementError, ValueError):
    pass


__all__ = [
    "InvalidSquareError",
    "LegalityVerdict",
    "PlacementClosedError",
    "PlacementError",
    "PositionError",
    "ReasonCode",
]
