import json

from dropchess.config import Settings
from dropchess.engine_adapter import HeadlessPlacementEngine
from dropchess.placement import PlacementOrchestrator
from tools import auto_exercise, export_manifest, load_drops_and_run

from conftest import kings_at


def test_rejection_spot_checks(headless):
    assert auto_exercise.exercise_rejections(headless) == {"checked": 5}
    assert headless.orchestrator.move_count == 1


def test_random_playout_keeps_invariants():
    headless = HeadlessPlacementEngine(Settings(rules_mode="full", seed=3))
    stats = auto_exercise.autoplay_random(headless, seed=3, max_drops=40)
    assert stats["drops"] > 0
    assert stats["complete"] + stats["stuck"] <= 1
    if stats["complete"]:
        assert stats["drops"] == 30
    auto_exercise.assert_invariants(headless)


def test_parse_drop():
    assert load_drops_and_run.parse_drop(" e2 = P ") == ("e2", "P")
    assert load_drops_and_run.parse_drop("e2P") is None
    assert load_drops_and_run.parse_drop("=P") is None


def test_replay_reports_each_drop():
    orch = PlacementOrchestrator(rng=kings_at())
    report = load_drops_and_run.replay(orch, "e2=P, e7=p, f6=N, junk, a4=dragon")
    assert report[0] == "1. P@e2"
    assert report[1] == "2. p@e7"
    assert report[2].startswith("3. N@f6 rejected CheckViolation")
    assert report[3] == "skip 'junk': malformed"
    assert report[4].startswith("3. dragon@a4:")
    assert orch.move_count == 3


def test_write_manifest(tmp_path):
    path = tmp_path / "manifest.json"
    manifest = export_manifest.write_manifest(str(path))
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == manifest
    assert on_disk["turnCycle"][0] == "WHITE:pawn"
    assert on_disk["suggestionOrder"] == ["knight", "bishop", "rook", "queen"]
