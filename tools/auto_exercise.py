import argparse
import random
import sys
import os
from typing import Dict, List, Tuple

# Ensure the local package is importable when running directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from dropchess.config import Settings
from dropchess.engine_adapter import HeadlessPlacementEngine, create_engine
from dropchess.placement import Color, Role, Square, square_color
from dropchess.placement.orchestrator import DROPPABLE_ROLES
from dropchess.placement.rules import PIECE_LIMITS, count_pieces, king_square
from dropchess.placement.kings import BLACK_KING_RANKS, WHITE_KING_RANKS


def assert_invariants(headless: HeadlessPlacementEngine) -> None:
    """Raise AssertionError if the drop-phase position breaks a standing invariant."""
    orch = headless.orchestrator
    position = orch.snapshot()
    for color, ranks in ((Color.WHITE, WHITE_KING_RANKS), (Color.BLACK, BLACK_KING_RANKS)):
        kings = count_pieces(position, color, Role.KING)
        if kings != 1:
            raise AssertionError(f"{color.name} has {kings} kings")
        sq = king_square(position, color)
        if sq.rank not in ranks:
            raise AssertionError(f"{color.name} king left its ranks: {sq.name}")
        for role, limit in PIECE_LIMITS.items():
            if count_pieces(position, color, role) > limit:
                raise AssertionError(f"{color.name} exceeds {role.name} limit")
        shades = [square_color(s) for s, p in position.items() if p.color is color and p.role is Role.BISHOP]
        if len(shades) != len(set(shades)) and orch.rules_mode == "full":
            raise AssertionError(f"{color.name} has two bishops on {shades[0].value} squares")
    if len(orch.history) != orch.move_count - 1:
        raise AssertionError(f"history {len(orch.history)} vs move_count {orch.move_count}")


def exercise_rejections(headless: HeadlessPlacementEngine) -> Dict[str, int]:
    """Spot-check that obviously bad drops are refused and leave no trace."""
    orch = headless.orchestrator
    counts = {"checked": 0}
    req = orch.current_requirement()
    wrong_kind = "knight" if req.category.value == "pawn" else "pawn"
    occupied = next(iter(orch.snapshot()))
    attempts: List[Tuple[str, str]] = [
        ("z9", "pawn"),
        ("E4", "pawn"),
        (occupied.name, "pawn"),
        ("d4", wrong_kind),
        ("d4", "king"),
    ]
    for square, kind in attempts:
        before = (dict(orch.snapshot()), orch.state, orch.get_fen())
        res = headless.apply_drop(None, square, kind)
        if res.get("ok"):
            raise AssertionError(f"Bad drop accepted: {kind}@{square}")
        after = (dict(orch.snapshot()), orch.state, orch.get_fen())
        if before != after:
            raise AssertionError(f"Rejected drop mutated state: {kind}@{square}")
        counts["checked"] += 1
    return counts


def autoplay_random(headless: HeadlessPlacementEngine, seed: int = 7, max_drops: int = 40) -> Dict[str, int]:
    rnd = random.Random(seed)
    orch = headless.orchestrator
    stats = {"drops": 0, "stuck": 0, "complete": 0}
    for _ in range(max_drops):
        if orch.is_complete():
            stats["complete"] = 1
            break
        req = orch.current_requirement()
        roles = [r for r in DROPPABLE_ROLES if (r is Role.PAWN) == (req.category.value == "pawn")]
        options: List[Tuple[Square, Role]] = [(sq, r) for r in roles for sq in orch.legal_squares(r)]
        if not options:
            stats["stuck"] = 1
            break
        sq, role = rnd.choice(options)
        res = headless.apply_drop(req.color.name, sq.name, role.name)
        if not res.get("ok", False):
            raise AssertionError(f"Engine rejected its own legal drop: {role.name}@{sq.name} -> {res}")
        assert_invariants(headless)
        stats["drops"] += 1
    return stats


def main():
    parser = argparse.ArgumentParser(description="Random drop-phase playouts with invariant checks")
    parser.add_argument("--games", type=int, default=5)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--rules", default="full", choices=["full", "permissive"])
    args = parser.parse_args()
    totals = {"drops": 0, "stuck": 0, "complete": 0, "checked": 0}
    for game in range(args.games):
        headless = create_engine(Settings(rules_mode=args.rules, seed=args.seed + game))
        totals["checked"] += exercise_rejections(headless)["checked"]
        stats = autoplay_random(headless, seed=args.seed + game)
        for key in ("drops", "stuck", "complete"):
            totals[key] += stats[key]
        print(f"[EXERCISE] game {game}: {stats} fen={headless.current_fen()}")
    print(f"[SUMMARY] {totals}")


if __name__ == "__main__":
    main()
