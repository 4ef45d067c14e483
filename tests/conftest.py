"""
Shared pytest fixtures for dropchess tests.

State fixtures are function-scoped so every test starts from a fresh board.
Kings are pinned through a scripted random source rather than a magic seed.
"""

from typing import Iterable, List

import pytest

from dropchess.config import Settings
from dropchess.engine_adapter import HeadlessPlacementEngine
from dropchess.placement import Color, PlacementOrchestrator, position_from_fen


class ScriptedRng:
    """Stands in for random.Random: ``choice`` returns scripted values in order."""

    def __init__(self, values: Iterable):
        self.values: List = list(values)
        self.calls = 0

    def choice(self, seq):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        assert value in seq, f"scripted {value!r} not in {seq!r}"
        return value


class StubOracle:
    """Check oracle that answers from a fixed flag and records every call."""

    def __init__(self, answer: bool = False):
        self.answer = answer
        self.calls = []

    def in_check(self, position, side_to_move: Color) -> bool:
        self.calls.append((dict(position), side_to_move))
        return self.answer


def kings_at(white: str = "e1", black: str = "e8") -> ScriptedRng:
    return ScriptedRng([white[0], int(white[1]), black[0], int(black[1])])


@pytest.fixture
def orch():
    """Full rules, python-chess oracle, kings on e1 and e8."""
    return PlacementOrchestrator("full", rng=kings_at())


@pytest.fixture
def stub_oracle():
    return StubOracle()


@pytest.fixture
def load():
    """load(orch, fen, move_count) seeds an orchestrator from a FEN placement."""
    def _load(orchestrator, fen, move_count=1):
        orchestrator.load(position_from_fen(fen), move_count)
        return orchestrator
    return _load


@pytest.fixture
def headless():
    return HeadlessPlacementEngine(Settings(rules_mode="full"), rng=kings_at())
