"""
PlacementOrchestrator: the owner of the drop-phase state.

Contract:
- State: one PositionStore and one PlacementSequenceState, both private.
- Validation: every drop runs the ordered LegalityEngine pipeline.
- Commit: an accepted drop writes the piece, advances the move counter and
  re-encodes the FEN, all at once. A rejected drop changes nothing.
- Views: callers only ever get read-only snapshots of the position.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..config import log
from .check_gate import CheckOracle
from .engine import DropContext, LegalityEngine
from .fen import encode
from .kings import BLACK_KING_RANKS, WHITE_KING_RANKS, RandomKingInitializer
from .rules import PIECE_LIMITS, KingSafeZoneGuard, PawnPlacementValidator, count_pieces, king_square
from .sequencer import (
    Category,
    Phase,
    PlacementSequenceState,
    advance,
    color_to_move,
    required_category,
)
from .squares import Color, Piece, Role, Square, all_squares, parse_square
from .suggest import suggest
from .verdicts import LegalityVerdict, PlacementClosedError, PositionError

DROPPABLE_ROLES = (Role.PAWN, Role.KNIGHT, Role.BISHOP, Role.ROOK, Role.QUEEN)
KING_RANKS = {Color.WHITE: WHITE_KING_RANKS, Color.BLACK: BLACK_KING_RANKS}


class PositionStore:
    """Authoritative square -> piece mapping."""

    def __init__(self) -> None:
        self._pieces: Dict[Square, Piece] = {}
        self.frozen = False

    def view(self) -> Mapping[Square, Piece]:
        """Live read-only view, for rule checking inside one call."""
        return MappingProxyType(self._pieces)

    def snapshot(self) -> Mapping[Square, Piece]:
        return MappingProxyType(dict(self._pieces))

    def place(self, square: Square, piece: Piece) -> None:
        if self.frozen:
            raise PlacementClosedError()
        if square in self._pieces:
            raise PositionError(f"{square.name} is already occupied")
        self._pieces[square] = piece

    def replace_all(self, position: Mapping[Square, Piece]) -> None:
        self._pieces = dict(position)
        self.frozen = False

    def freeze(self) -> None:
        self.frozen = True


@dataclass(frozen=True)
class Requirement:
    color: Color
    category: Category

    def to_dict(self) -> Dict[str, str]:
        return {"color": self.color.name, "category": self.category.value}


@dataclass(frozen=True)
class DropRecord:
    move: int
    color: Color
    role: Role
    square: Square

    def to_dict(self) -> Dict[str, Any]:
        return {
            "move": self.move,
            "by": self.color.name,
            "kind": self.role.letter.upper(),
            "square": self.square.name,
        }


def check_king_invariant(position: Mapping[Square, Piece]) -> None:
    for color in Color:
        kings = count_pieces(position, color, Role.KING)
        if kings != 1:
            raise PositionError(f"expected exactly one {color.name} king, found {kings}")
        sq = king_square(position, color)
        if sq.rank not in KING_RANKS[color]:
            raise PositionError(f"{color.name} king on {sq.name} is outside ranks {KING_RANKS[color]}")


class PlacementOrchestrator:
    def __init__(
        self,
        rules_mode: str = "full",
        oracle: Optional[CheckOracle] = None,
        *,
        rng=None,
        seed: Optional[int] = None,
        on_standard: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.kings = RandomKingInitializer(rng, seed)
        self.engine = LegalityEngine(rules_mode, oracle)
        self.pawns = PawnPlacementValidator()
        self.on_standard = on_standard
        self._store = PositionStore()
        self._state = PlacementSequenceState()
        self._zones = KingSafeZoneGuard({})
        self._fen = ""
        self.history: List[DropRecord] = []
        self.reset()

    # ---- Read-only accessors ----
    @property
    def rules_mode(self) -> str:
        return self.engine.mode

    @property
    def state(self) -> PlacementSequenceState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def move_count(self) -> int:
        return self._state.move_count

    @property
    def zones(self) -> KingSafeZoneGuard:
        return self._zones

    def snapshot(self) -> Mapping[Square, Piece]:
        return self._store.snapshot()

    def current_requirement(self) -> Requirement:
        m = self._state.move_count
        return Requirement(color_to_move(m), required_category(m))

    def get_fen(self) -> str:
        return self._fen

    # ---- Lifecycle ----
    def reset(self) -> None:
        position, state = self.kings.reset()
        self._install(position, state)
        log(f"[Orchestrator] reset: {self._fen}")

    def load(self, position: Mapping[Square, Piece], move_count: int = 1) -> None:
        """Seed the orchestrator with an existing position (tools and fixtures)."""
        check_king_invariant(position)
        self._install(position, PlacementSequenceState(move_count=move_count, phase=Phase.PLACEMENT))
        log(f"[Orchestrator] loaded move {move_count}: {self._fen}")

    def _install(self, position: Mapping[Square, Piece], state: PlacementSequenceState) -> None:
        self._store.replace_all(position)
        self._zones = KingSafeZoneGuard.from_position(self._store.view())
        self._state = state
        self.history = []
        self._fen = encode(self._store.view())

    def transition_to_standard(self) -> bool:
        if self._state.phase is Phase.STANDARD:
            return False
        self._store.freeze()
        self._state = replace(self._state, phase=Phase.STANDARD)
        log(f"[Orchestrator] placement closed after {len(self.history)} drops: {self._fen}")
        if self.on_standard is not None:
            self.on_standard(self._fen)
        return True

    # ---- Drops ----
    def _context(self, square, role: Role) -> DropContext:
        parsed = square if isinstance(square, Square) else parse_square(square)
        return DropContext(
            raw_square=square,
            square=parsed,
            role=role,
            color=color_to_move(self._state.move_count),
            move_count=self._state.move_count,
            position=self._store.view(),
            zones=self._zones,
        )

    def evaluate(self, square, role) -> LegalityVerdict:
        """Run the pipeline without committing anything."""
        if self._state.phase is Phase.STANDARD:
            raise PlacementClosedError(self._state.phase.value)
        return self.engine.evaluate(self._context(square, Role.parse(role)))

    def place_attempt(self, square, role, requested_color=None) -> LegalityVerdict:
        if self._state.phase is Phase.STANDARD:
            raise PlacementClosedError(self._state.phase.value)
        role = Role.parse(role)
        ctx = self._context(square, role)
        if requested_color is not None and Color.parse(requested_color) is not ctx.color:
            log(f"[Orchestrator] ignoring requested color {requested_color}; {ctx.color.name} to move")
        verdict = self.engine.evaluate(ctx)
        if not verdict.accepted:
            log(f"[Orchestrator] move {ctx.move_count} rejected: {verdict.reason_code.value} ({verdict.message})")
            return verdict
        piece = ctx.piece
        self._store.place(ctx.square, piece)
        self.history.append(DropRecord(ctx.move_count, ctx.color, role, ctx.square))
        self._state = advance(self._state)
        self._fen = encode(self._store.view())
        log(f"[Orchestrator] move {ctx.move_count}: {piece.symbol}@{ctx.square.name}")
        return LegalityVerdict.accept(f"{piece.symbol}@{ctx.square.name}")

    # ---- Diagnostics ----
    def legal_squares(self, role) -> List[Square]:
        if self._state.phase is Phase.STANDARD:
            return []
        role = Role.parse(role)
        return sorted(sq for sq in all_squares() if self.engine.evaluate(self._context(sq, role)).accepted)

    def legal_roles(self) -> List[Role]:
        return [role for role in DROPPABLE_ROLES if self.legal_squares(role)]

    def pawn_legal_squares(self, color: Optional[Color] = None) -> List[Square]:
        color = color or self.current_requirement().color
        return self.pawns.legal_squares(self._store.view(), color)

    def suggest(self) -> Role:
        req = self.current_requirement()
        return suggest(req.category, req.color, self._store.view())

    def remaining(self, color: Color) -> Dict[Role, int]:
        view = self._store.view()
        return {role: PIECE_LIMITS[role] - count_pieces(view, color, role) for role in DROPPABLE_ROLES}

    def is_complete(self) -> bool:
        return all(n <= 0 for color in Color for n in self.remaining(color).values())


__all__ = [
    "DROPPABLE_ROLES",
    "DropRecord",
    "PlacementOrchestrator",
    "PositionStore",
    "Requirement",
    "check_king_invariant",
]
