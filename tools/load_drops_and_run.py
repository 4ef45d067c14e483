import os
import sys
from typing import List, Optional, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from dropchess.placement import PlacementOrchestrator, position_from_fen


def parse_drop(text: str) -> Optional[Tuple[str, str]]:
    """'e2=P' -> ('e2', 'P'). Returns None for malformed input."""
    text = text.strip()
    if '=' not in text:
        return None
    square, kind = text.split('=', 1)
    square, kind = square.strip(), kind.strip()
    if not square or not kind:
        return None
    return square, kind


def replay(orch: PlacementOrchestrator, seq: str) -> List[str]:
    """Apply every drop in *seq*; returns one report line per drop."""
    report: List[str] = []
    for part in seq.split(','):
        if not part.strip():
            continue
        drop = parse_drop(part)
        if drop is None:
            report.append(f"skip {part.strip()!r}: malformed")
            continue
        square, kind = drop
        move = orch.move_count
        try:
            verdict = orch.place_attempt(square, kind)
        except ValueError as exc:
            report.append(f"{move}. {kind}@{square}: {exc}")
            continue
        if verdict.accepted:
            report.append(f"{move}. {verdict.message}")
        else:
            report.append(f"{move}. {kind}@{square} rejected {verdict.reason_code.value}: {verdict.message}")
    return report


def main():
    if len(sys.argv) < 2:
        print('Usage: python tools/load_drops_and_run.py "e2=P, e7=p, b1=N, ..." [start-fen] [move-count]')
        return
    orch = PlacementOrchestrator(seed=0)
    if len(sys.argv) >= 3:
        move_count = int(sys.argv[3]) if len(sys.argv) >= 4 else 1
        orch.load(position_from_fen(sys.argv[2]), move_count)
    print('[LOADER] Start', orch.get_fen())
    for line in replay(orch, sys.argv[1]):
        print('[LOADER]', line)
    print('[LOADER] Done. fen=', orch.get_fen(), 'next=', orch.current_requirement().to_dict())


if __name__ == '__main__':
    main()
