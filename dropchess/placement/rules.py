"""
Independent placement rule checkers.

Each checker reads a position (any Square -> Piece mapping; callers hand in
read-only views) and answers with a LegalityVerdict. None of them mutate
anything, which is what lets the orchestrator stay transactional.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, List, Mapping, Optional, Set

from .squares import Color, Piece, Role, Square, SquareColor, neighborhood3x3, square_color
from .verdicts import LegalityVerdict, ReasonCode

Position = Mapping[Square, Piece]

PIECE_LIMITS: Dict[Role, int] = {
    Role.PAWN: 8,
    Role.ROOK: 2,
    Role.BISHOP: 2,
    Role.KNIGHT: 2,
    Role.QUEEN: 1,
    Role.KING: 1,
}

# Pawns stay at least three ranks away from their queening rank
PAWN_BANDS: Dict[Color, range] = {
    Color.WHITE: range(2, 6),
    Color.BLACK: range(4, 8),
}


def count_pieces(position: Position, color: Color, role: Role) -> int:
    target = Piece(role, color)
    return sum(1 for p in position.values() if p == target)


def king_square(position: Position, color: Color) -> Optional[Square]:
    king = Piece(Role.KING, color)
    for sq, p in position.items():
        if p == king:
            return sq
    return None


def _squares_text(squares) -> str:
    return ", ".join(sq.name for sq in squares) or "none"


# ---- piece counts ----

class PieceCountLimiter:
    limits = PIECE_LIMITS

    def remaining(self, position: Position, color: Color, role: Role) -> int:
        return max(0, self.limits[role] - count_pieces(position, color, role))

    def check(self, position: Position, color: Color, role: Role) -> LegalityVerdict:
        have = count_pieces(position, color, role)
        limit = self.limits[role]
        if have >= limit:
            return LegalityVerdict.reject(
                ReasonCode.PIECE_COUNT_EXCEEDED,
                f"{color.name.title()} already has {have} {role.name.lower()}(s) (max {limit})",
                role=role,
            )
        return LegalityVerdict.accept()


# ---- king safe zones ----

class KingSafeZoneGuard:
    """Holds the 3x3 zone around each king; zones never change until reset."""

    def __init__(self, zones: Mapping[Color, FrozenSet[Square]]) -> None:
        self.zones: Dict[Color, FrozenSet[Square]] = dict(zones)

    @classmethod
    def from_position(cls, position: Position) -> "KingSafeZoneGuard":
        zones: Dict[Color, FrozenSet[Square]] = {}
        for color in Color:
            sq = king_square(position, color)
            zones[color] = neighborhood3x3(sq) if sq is not None else frozenset()
        return cls(zones)

    def is_protected(self, square: Square, placing_color: Color) -> bool:
        return square in self.zones.get(placing_color.opponent, frozenset())

    def check(self, square: Square, placing_color: Color) -> LegalityVerdict:
        if self.is_protected(square, placing_color):
            return LegalityVerdict.reject(
                ReasonCode.KING_SAFE_ZONE_VIOLATION,
                f"{square.name} is next to the {placing_color.opponent.name.lower()} king",
            )
        return LegalityVerdict.accept()


# ---- pawns ----

class PawnPlacementValidator:
    bands = PAWN_BANDS

    def in_band(self, square: Square, color: Color) -> bool:
        return square.rank in self.bands[color]

    def pawn_files(self, position: Position, color: Color) -> Set[int]:
        pawn = Piece(Role.PAWN, color)
        return {sq.file for sq, p in position.items() if p == pawn}

    def file_has_pawn(self, position: Position, color: Color, file: int) -> bool:
        return file in self.pawn_files(position, color)

    def _empty_band_squares(self, position: Position, color: Color, file: int) -> List[Square]:
        return [Square(file, r) for r in self.bands[color] if Square(file, r) not in position]

    def pawnless_file_has_room(self, position: Position, color: Color) -> bool:
        """True while some file without a pawn of *color* still has an empty band square."""
        taken = self.pawn_files(position, color)
        return any(
            self._empty_band_squares(position, color, f)
            for f in range(8) if f not in taken
        )

    def stacking_allowed(self, position: Position, color: Color, file: int) -> bool:
        """A pawn may go on *file* if the file is pawn-less or no pawn-less file has room."""
        return not self.file_has_pawn(position, color, file) or not self.pawnless_file_has_room(position, color)

    def is_legal_square(self, position: Position, color: Color, square: Square) -> bool:
        if square in position or not self.in_band(square, color):
            return False
        return self.stacking_allowed(position, color, square.file)

    def legal_squares(self, position: Position, color: Color) -> List[Square]:
        return [
            sq
            for f in range(8)
            for sq in self._empty_band_squares(position, color, f)
            if self.is_legal_square(position, color, sq)
        ]

    def check(self, position: Position, color: Color, square: Square) -> LegalityVerdict:
        band = self.bands[color]
        if not self.in_band(square, color):
            legal = self.legal_squares(position, color)
            return LegalityVerdict.reject(
                ReasonCode.PAWN_RANK_OUT_OF_BAND,
                f"{color.name.title()} pawns must be dropped on ranks {band[0]}-{band[-1]}. "
                f"Legal squares: {_squares_text(legal)}",
                legal_squares=legal,
            )
        limiter = PieceCountLimiter()
        counted = limiter.check(position, color, Role.PAWN)
        if not counted.accepted:
            return counted
        if not self.stacking_allowed(position, color, square.file):
            legal = self.legal_squares(position, color)
            return LegalityVerdict.reject(
                ReasonCode.PAWN_FILE_STACKING_DISALLOWED,
                f"File {square.file_letter} already has a {color.name.lower()} pawn while other files have room. "
                f"Legal squares: {_squares_text(legal)}",
                legal_squares=legal,
            )
        return LegalityVerdict.accept()


# ---- bishops ----

class BishopColorValidator:
    def bishop_square_colors(self, position: Position, color: Color) -> List[SquareColor]:
        bishop = Piece(Role.BISHOP, color)
        return [square_color(sq) for sq, p in position.items() if p == bishop]

    def check(self, position: Position, color: Color, target_square_color: SquareColor) -> LegalityVerdict:
        if target_square_color in self.bishop_square_colors(position, color):
            return LegalityVerdict.reject(
                ReasonCode.BISHOP_COLOR_DUPLICATE,
                f"{color.name.title()} already has a bishop on a {target_square_color.value} square",
            )
        return LegalityVerdict.accept()


__all__ = [
    "BishopColorValidator",
    "KingSafeZoneGuard",
    "PAWN_BANDS",
    "PIECE_LIMITS",
    "PawnPlacementValidator",
    "PieceCountLimiter",
    "Position",
    "count_pieces",
    "king_square",
]
