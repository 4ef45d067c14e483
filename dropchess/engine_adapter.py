from typing import Any, Dict, List, Optional

import chess

from . import __FILE_VERSION__
from .config import Settings, load_settings, log
from .placement import (
    Color,
    Phase,
    PlacementClosedError,
    PlacementOrchestrator,
    Role,
    Square,
)
from .placement.check_gate import CheckOracle

ENGINE_VERSION = __FILE_VERSION__


def _color_name(color: Color) -> str:
    return color.name


class HeadlessPlacementEngine:
    """Headless wrapper around the drop-phase orchestrator for server use.

    Contract:
    - State: one PlacementOrchestrator; after placement closes, one python-chess
      Board seeded from the final FEN (the standard-chess collaborator)
    - Validation: drops go through the orchestrator pipeline; moves after the
      hand-off go through python-chess legality
    - Serialization: JSON-friendly dict with board, phase, requirement and fen
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        oracle: Optional[CheckOracle] = None,
        rng=None,
    ) -> None:
        self.settings = settings or load_settings()
        self.orchestrator = PlacementOrchestrator(
            self.settings.rules_mode,
            oracle,
            rng=rng,
            seed=self.settings.seed,
            on_standard=self._hand_off,
        )
        self.chess_board: Optional[chess.Board] = None
        self.moves_list: List[Dict[str, Any]] = []

    # ---- Helpers ----
    @property
    def chess_mode(self) -> bool:
        return self.chess_board is not None

    def _hand_off(self, fen: str) -> None:
        self.chess_board = chess.Board(fen)
        self.moves_list = []
        print(f"[EngineAdapter] Standard play begins: {fen}")

    def active_color(self) -> Color:
        if self.chess_mode:
            return Color.WHITE if self.chess_board.turn else Color.BLACK
        return self.orchestrator.current_requirement().color

    def serialize_board(self) -> List[List[Optional[Dict[str, str]]]]:
        """8x8 grid, row 0 = rank 8, column 0 = file a."""
        if self.chess_mode:
            grid: List[List[Optional[Dict[str, str]]]] = [[None for _ in range(8)] for _ in range(8)]
            for square in chess.SQUARES:
                piece = self.chess_board.piece_at(square)
                if piece is None:
                    continue
                r = 7 - chess.square_rank(square)
                c = chess.square_file(square)
                grid[r][c] = {"kind": piece.symbol().upper(), "color": "WHITE" if piece.color else "BLACK"}
            return grid
        position = self.orchestrator.snapshot()
        grid = []
        for rank in range(8, 0, -1):
            row: List[Optional[Dict[str, str]]] = []
            for file in range(8):
                p = position.get(Square(file, rank))
                if p is None:
                    row.append(None)
                else:
                    row.append({"kind": p.role.letter.upper(), "color": _color_name(p.color)})
            grid.append(row)
        return grid

    def serialize_state(self) -> Dict[str, Any]:
        orch = self.orchestrator
        out: Dict[str, Any] = {
            "phase": orch.phase.value,
            "rules_mode": orch.rules_mode,
            "move_count": orch.move_count,
            "turn": _color_name(self.active_color()),
            "board": self.serialize_board(),
            "fen": self.current_fen(),
            "drops": [rec.to_dict() for rec in orch.history],
        }
        if orch.phase is Phase.PLACEMENT:
            req = orch.current_requirement()
            out["requirement"] = req.to_dict()
            out["suggestion"] = orch.suggest().name.lower()
            out["complete"] = orch.is_complete()
            out["remaining"] = {
                _color_name(color): {role.name.lower(): n for role, n in orch.remaining(color).items()}
                for color in Color
            }
        else:
            out["moves"] = list(self.moves_list)
            out["in_check"] = bool(self.chess_board.is_check()) if self.chess_mode else False
        return out

    def current_fen(self) -> str:
        if self.chess_mode:
            return self.chess_board.fen()
        return self.orchestrator.get_fen()

    # ---- Drop phase ----
    def legal_drops(self, kind: str) -> List[str]:
        return [sq.name for sq in self.orchestrator.legal_squares(kind)]

    def apply_drop(self, seat: Optional[str], square: str, kind: str) -> Dict[str, Any]:
        try:
            role = Role.parse(kind)
        except ValueError as exc:
            return {"ok": False, "error": str(exc)}
        if seat:
            try:
                Color.parse(seat)
            except ValueError:
                return {"ok": False, "error": f"Unknown seat '{seat}'"}
        try:
            verdict = self.orchestrator.place_attempt(square, role, seat or None)
        except PlacementClosedError as exc:
            return {"ok": False, "error": str(exc)}
        if not verdict.accepted:
            out: Dict[str, Any] = {"ok": False, "error": verdict.message}
            out.update(verdict.to_dict())
            return out
        res: Dict[str, Any] = {"ok": True, "fen": self.orchestrator.get_fen()}
        if self.settings.auto_start and self.orchestrator.is_complete():
            self.start_standard()
            res["started"] = True
        return res

    def start_standard(self) -> Dict[str, Any]:
        if not self.orchestrator.transition_to_standard():
            return {"ok": False, "error": "Standard play has already begun"}
        return {"ok": True, "fen": self.current_fen()}

    def reset(self) -> None:
        self.orchestrator.reset()
        self.chess_board = None
        self.moves_list = []
        log(f"[EngineAdapter] New drop phase: {self.orchestrator.get_fen()}")

    # ---- Standard phase (python-chess owns legality) ----
    def legal_moves_for_active(self) -> List[str]:
        if not self.chess_mode:
            return []
        return sorted(m.uci() for m in self.chess_board.legal_moves)

    def apply_move(self, seat: str, uci: str) -> Dict[str, Any]:
        if not self.chess_mode:
            return {"ok": False, "error": "Placement phase is still running"}
        try:
            seat_color = Color.parse(seat)
        except ValueError:
            return {"ok": False, "error": f"Unknown seat '{seat}'"}
        active = self.active_color()
        if seat_color is not active:
            return {"ok": False, "error": f"Not {seat_color.name}'s turn"}
        try:
            move = chess.Move.from_uci(uci.strip().lower())
        except ValueError:
            return {"ok": False, "error": "Invalid move format"}
        # Auto-queen promotion
        piece = self.chess_board.piece_at(move.from_square)
        if (piece and piece.piece_type == chess.PAWN and move.promotion is None
                and chess.square_rank(move.to_square) in (0, 7)):
            move = chess.Move(move.from_square, move.to_square, promotion=chess.QUEEN)
        if move not in self.chess_board.legal_moves:
            return {"ok": False, "error": "Illegal move"}
        captured = self.chess_board.piece_at(move.to_square)
        self.chess_board.push(move)
        self.moves_list.append({
            "by": seat_color.name,
            "uci": move.uci(),
            "cap": captured.symbol().upper() if captured else None,
            "promoted": move.promotion is not None,
        })
        return {"ok": True, "fen": self.chess_board.fen()}


def create_engine(settings: Optional[Settings] = None, **kwargs) -> HeadlessPlacementEngine:
    return HeadlessPlacementEngine(settings, **kwargs)
