"""
Board geometry for the drop phase: squares, colors, roles and pieces.

Squares are immutable values keyed by a 0-based file index (a=0 .. h=7) and a
1-based rank (1..8). Textual squares are validated strictly at the boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional

from .verdicts import InvalidSquareError


FILES = "abcdefgh"
RANKS = range(1, 9)


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @classmethod
    def parse(cls, value) -> "Color":
        if isinstance(value, Color):
            return value
        text = str(value).strip().lower()
        if text in ("w", "white"):
            return cls.WHITE
        if text in ("b", "black"):
            return cls.BLACK
        raise ValueError(f"Unknown color '{value}'")


class Role(Enum):
    KING = "k"
    QUEEN = "q"
    ROOK = "r"
    BISHOP = "b"
    KNIGHT = "n"
    PAWN = "p"

    @property
    def letter(self) -> str:
        return self.value

    @property
    def is_pawn(self) -> bool:
        return self is Role.PAWN

    @classmethod
    def parse(cls, value) -> "Role":
        """Accept a Role, a role name ('knight') or a piece letter ('N' / 'n')."""
        if isinstance(value, Role):
            return value
        text = str(value).strip().lower()
        for role in cls:
            if text == role.value or text == role.name.lower():
                return role
        raise ValueError(f"Unknown piece kind '{value}'")


class SquareColor(Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Piece:
    role: Role
    color: Color

    @property
    def symbol(self) -> str:
        return self.role.letter.upper() if self.color is Color.WHITE else self.role.letter

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(Role.parse(symbol), color)


@dataclass(frozen=True, order=True)
class Square:
    file: int  # 0..7 -> a..h
    rank: int  # 1..8

    def __post_init__(self) -> None:
        if not (0 <= self.file < 8 and 1 <= self.rank <= 8):
            raise InvalidSquareError(f"({self.file},{self.rank})")

    @property
    def name(self) -> str:
        return f"{FILES[self.file]}{self.rank}"

    @property
    def file_letter(self) -> str:
        return FILES[self.file]

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, text) -> "Square":
        sq = parse_square(text)
        if sq is None:
            raise InvalidSquareError(text)
        return sq


def parse_square(text) -> Optional[Square]:
    """Return the Square for e.g. 'e4', or None for anything else.

    Exactly one lowercase file letter a-h followed by one digit 1-8; no
    surrounding whitespace, no uppercase.
    """
    if not isinstance(text, str) or len(text) != 2:
        return None
    f, r = text[0], text[1]
    if f not in FILES or r not in "12345678":
        return None
    return Square(FILES.index(f), int(r))


def square_color(sq: Square) -> SquareColor:
    # a1 (0 + 0) is dark
    return SquareColor.DARK if (sq.file + sq.rank - 1) % 2 == 0 else SquareColor.LIGHT


def neighborhood3x3(sq: Square) -> FrozenSet[Square]:
    out = set()
    for df in (-1, 0, 1):
        for dr in (-1, 0, 1):
            f, r = sq.file + df, sq.rank + dr
            if 0 <= f < 8 and 1 <= r <= 8:
                out.add(Square(f, r))
    return frozenset(out)


def all_squares() -> List[Square]:
    """All 64 squares in board order: rank 8 down to rank 1, file a to h."""
    return [Square(f, r) for r in reversed(RANKS) for f in range(8)]


__all__ = [
    "Color",
    "FILES",
    "Piece",
    "RANKS",
    "Role",
    "Square",
    "SquareColor",
    "all_squares",
    "neighborhood3x3",
    "parse_square",
    "square_color",
]
