#!/usr/bin/env python3
"""
Run the dropchess test suite with a friendly summary.

Usage:
  python tools/run_self_tests.py              # runs 'all'
  python tools/run_self_tests.py all          # runs full suite
  python tools/run_self_tests.py pawn         # only tests matching -k pawn
  python tools/run_self_tests.py server

Exit codes:
  0 = PASS, 1 = FAIL, 2-4 = pytest usage/internal error, 5 = no tests selected
"""
import os
import sys
import subprocess
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
TESTS = os.path.join(ROOT, 'tests')


def _python_exe() -> str:
    return sys.executable or 'python'


def run(selector: str = 'all') -> int:
    if not os.path.isdir(TESTS):
        print(f"[ERROR] Test folder not found: {TESTS}")
        return 3
    cmd: List[str] = [_python_exe(), '-m', 'pytest', TESTS, '-q']
    if selector and selector != 'all':
        cmd += ['-k', selector]
    print(f"[RUN] {' '.join(cmd)}\n")
    try:
        proc = subprocess.run(cmd, cwd=ROOT, capture_output=True, text=True)
    except KeyboardInterrupt:
        print("[INTERRUPTED]")
        return 3
    if proc.stdout:
        print(proc.stdout.rstrip())
    if proc.stderr:
        print(proc.stderr.rstrip(), file=sys.stderr)
    code = proc.returncode
    status = {0: 'PASS', 1: 'FAIL', 5: 'NO TESTS'}.get(code, f'ERROR RC={code}')
    print(f"\n[SUMMARY] selector={selector} -> {status} (exit {code})")
    return code


def main():
    sel = 'all'
    if len(sys.argv) >= 2:
        sel = sys.argv[1].strip()
    sys.exit(run(sel))


if __name__ == '__main__':
    main()
