"""Drop-phase legality engine: rules, sequencing and the owning orchestrator."""

from .check_gate import CheckAvoidanceGate, CheckOracle, PythonChessOracle
from .engine import LegalityEngine, build_rules
from .fen import encode, encode_placement, position_from_fen
from .kings import RandomKingInitializer
from .orchestrator import PlacementOrchestrator, PositionStore, Requirement
from .sequencer import Category, Phase, PlacementSequenceState, advance, color_to_move, required_category
from .squares import Color, Piece, Role, Square, SquareColor, neighborhood3x3, parse_square, square_color
from .suggest import suggest
from .verdicts import (
    InvalidSquareError,
    LegalityVerdict,
    PlacementClosedError,
    PlacementError,
    PositionError,
    ReasonCode,
)

__all__ = [
    "Category",
    "CheckAvoidanceGate",
    "CheckOracle",
    "Color",
    "InvalidSquareError",
    "LegalityEngine",
    "LegalityVerdict",
    "Phase",
    "Piece",
    "PlacementClosedError",
    "PlacementError",
    "PlacementOrchestrator",
    "PlacementSequenceState",
    "PositionError",
    "PositionStore",
    "PythonChessOracle",
    "RandomKingInitializer",
    "ReasonCode",
    "Requirement",
    "Role",
    "Square",
    "SquareColor",
    "advance",
    "build_rules",
    "color_to_move",
    "encode",
    "encode_placement",
    "neighborhood3x3",
    "parse_square",
    "position_from_fen",
    "required_category",
    "square_color",
    "suggest",
]
