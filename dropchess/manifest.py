"""Machine-readable description of the drop rules (served and exported)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from . import __FILE_VERSION__
from .placement.engine import RULES_MODES, build_rules
from .placement.kings import BLACK_KING_RANKS, WHITE_KING_RANKS
from .placement.rules import PAWN_BANDS, PIECE_LIMITS
from .placement.squares import Color
from .placement.suggest import SUGGESTION_ORDER


def build_manifest() -> Dict[str, Any]:
    return {
        "version": __FILE_VERSION__,
        "generatedAt": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
        "kings": {
            "WHITE": list(WHITE_KING_RANKS),
            "BLACK": list(BLACK_KING_RANKS),
        },
        "turnCycle": ["WHITE:pawn", "BLACK:pawn", "WHITE:piece", "BLACK:piece"],
        "limits": {role.name.lower(): n for role, n in PIECE_LIMITS.items()},
        "pawnBands": {color.name: [band[0], band[-1]] for color, band in PAWN_BANDS.items()},
        "precedence": {
            mode: [{"rule": r.name, "code": r.code.value if r.code else None} for r in build_rules(mode)]
            for mode in RULES_MODES
        },
        "suggestionOrder": [role.name.lower() for role in SUGGESTION_ORDER],
        "colors": [c.name for c in Color],
        "fenPlaceholder": "w - - 0 1",
    }


__all__ = ["build_manifest"]
