"""
The ordered drop-legality pipeline.

Every rule is a small named object; the engine applies them in a fixed order
and stops at the first rejection. The rule tuple itself is the precedence
table, so it can be listed, exported and tested directly.

Two modes share one pipeline:

* ``full``: every rule.
* ``permissive``: only the structural rules (square syntax, occupancy, move
  type, piece counts, check avoidance).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from .check_gate import CheckAvoidanceGate, CheckOracle
from .rules import BishopColorValidator, KingSafeZoneGuard, PawnPlacementValidator, PieceCountLimiter
from .sequencer import Category, required_category
from .squares import Color, Piece, Role, Square, square_color
from .verdicts import LegalityVerdict, ReasonCode


@dataclass(frozen=True)
class DropContext:
    raw_square: object
    square: Optional[Square]
    role: Role
    color: Color
    move_count: int
    position: Mapping[Square, Piece]
    zones: KingSafeZoneGuard

    @property
    def piece(self) -> Piece:
        return Piece(self.role, self.color)


class Rule:
    name = "rule"
    code: Optional[ReasonCode] = None
    structural = False

    def applies(self, ctx: DropContext) -> bool:
        return True

    def evaluate(self, ctx: DropContext) -> LegalityVerdict:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class SquareSyntaxRule(Rule):
    name = "square-syntax"
    code = ReasonCode.INVALID_SQUARE_FORMAT
    structural = True

    def evaluate(self, ctx):
        if ctx.square is None:
            return LegalityVerdict.reject(self.code, f"'{ctx.raw_square}' is not a square (expected e.g. 'e4')")
        return LegalityVerdict.accept()


class OccupancyRule(Rule):
    name = "occupancy"
    code = ReasonCode.SQUARE_OCCUPIED
    structural = True

    def evaluate(self, ctx):
        occupant = ctx.position.get(ctx.square)
        if occupant is not None:
            return LegalityVerdict.reject(self.code, f"{ctx.square.name} is occupied by {occupant.symbol}")
        return LegalityVerdict.accept()


class MoveTypeRule(Rule):
    name = "move-type"
    code = ReasonCode.WRONG_MOVE_TYPE
    structural = True

    def evaluate(self, ctx):
        if ctx.role is Role.KING:
            return LegalityVerdict.reject(self.code, "Kings are placed at setup and cannot be dropped")
        need = required_category(ctx.move_count)
        if Category.of(ctx.role) is not need:
            return LegalityVerdict.reject(
                self.code,
                f"Move {ctx.move_count}: {ctx.color.name.title()} must drop a {need.value}",
            )
        return LegalityVerdict.accept()


class PieceCountRule(Rule):
    name = "piece-count"
    code = ReasonCode.PIECE_COUNT_EXCEEDED
    structural = True

    def __init__(self, limiter: Optional[PieceCountLimiter] = None) -> None:
        self.limiter = limiter or PieceCountLimiter()

    def applies(self, ctx):
        return ctx.role is not Role.KING

    def evaluate(self, ctx):
        return self.limiter.check(ctx.position, ctx.color, ctx.role)


class KingSafeZoneRule(Rule):
    name = "king-safe-zone"
    code = ReasonCode.KING_SAFE_ZONE_VIOLATION

    def evaluate(self, ctx):
        return ctx.zones.check(ctx.square, ctx.color)


class PawnPlacementRule(Rule):
    name = "pawn-placement"
    code = ReasonCode.PAWN_FILE_STACKING_DISALLOWED

    def __init__(self, validator: Optional[PawnPlacementValidator] = None) -> None:
        self.validator = validator or PawnPlacementValidator()

    def applies(self, ctx):
        return ctx.role is Role.PAWN

    def evaluate(self, ctx):
        return self.validator.check(ctx.position, ctx.color, ctx.square)


class BishopColorRule(Rule):
    name = "bishop-color"
    code = ReasonCode.BISHOP_COLOR_DUPLICATE

    def __init__(self, validator: Optional[BishopColorValidator] = None) -> None:
        self.validator = validator or BishopColorValidator()

    def applies(self, ctx):
        return ctx.role is Role.BISHOP

    def evaluate(self, ctx):
        return self.validator.check(ctx.position, ctx.color, square_color(ctx.square))


class CheckAvoidanceRule(Rule):
    name = "check-avoidance"
    code = ReasonCode.CHECK_VIOLATION
    structural = True

    def __init__(self, gate: Optional[CheckAvoidanceGate] = None) -> None:
        self.gate = gate or CheckAvoidanceGate()

    def evaluate(self, ctx):
        return self.gate.check(ctx.position, ctx.square, ctx.piece)


RULES_MODES = ("full", "permissive")


def build_rules(mode: str = "full", oracle: Optional[CheckOracle] = None) -> Tuple[Rule, ...]:
    if mode not in RULES_MODES:
        raise ValueError(f"Unknown rules mode '{mode}'. Valid: {list(RULES_MODES)}")
    rules: Tuple[Rule, ...] = (
        SquareSyntaxRule(),
        OccupancyRule(),
        MoveTypeRule(),
        PieceCountRule(),
        KingSafeZoneRule(),
        PawnPlacementRule(),
        BishopColorRule(),
        CheckAvoidanceRule(CheckAvoidanceGate(oracle)),
    )
    if mode == "permissive":
        rules = tuple(r for r in rules if r.structural)
    return rules


class LegalityEngine:
    def __init__(self, mode: str = "full", oracle: Optional[CheckOracle] = None) -> None:
        self.mode = mode
        self.rules = build_rules(mode, oracle)

    def precedence(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def evaluate(self, ctx: DropContext) -> LegalityVerdict:
        for rule in self.rules:
            if not rule.applies(ctx):
                continue
            verdict = rule.evaluate(ctx)
            if not verdict.accepted:
                return verdict
        return LegalityVerdict.accept()


__all__ = [
    "BishopColorRule",
    "CheckAvoidanceRule",
    "DropContext",
    "KingSafeZoneRule",
    "LegalityEngine",
    "MoveTypeRule",
    "OccupancyRule",
    "PawnPlacementRule",
    "PieceCountRule",
    "RULES_MODES",
    "Rule",
    "SquareSyntaxRule",
    "build_rules",
]
