"""
Turn sequencing for the drop phase.

Everything here is a pure function of the move counter. The cycle repeats
every four drops: white pawn, black pawn, white piece, black piece.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .squares import Color, Role


class Phase(Enum):
    PLACEMENT = "PLACEMENT"
    STANDARD = "STANDARD"


class Category(Enum):
    PAWN = "pawn"
    PIECE = "piece"

    @classmethod
    def of(cls, role: Role) -> "Category":
        return cls.PAWN if role.is_pawn else cls.PIECE


@dataclass(frozen=True)
class PlacementSequenceState:
    move_count: int = 1
    phase: Phase = Phase.PLACEMENT

    def __post_init__(self) -> None:
        if self.move_count < 1:
            raise ValueError(f"move_count must be >= 1, got {self.move_count}")


def color_to_move(move_count: int) -> Color:
    return Color.WHITE if move_count % 2 == 1 else Color.BLACK


def required_category(move_count: int) -> Category:
    b = (move_count - 1) % 4
    return Category.PAWN if b in (0, 1) else Category.PIECE


def advance(state: PlacementSequenceState) -> PlacementSequenceState:
    if state.phase is Phase.STANDARD:
        return state
    return replace(state, move_count=state.move_count + 1)


__all__ = [
    "Category",
    "Phase",
    "PlacementSequenceState",
    "advance",
    "color_to_move",
    "required_category",
]
