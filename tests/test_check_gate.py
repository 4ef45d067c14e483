from dropchess.placement import (
    CheckAvoidanceGate,
    Color,
    Piece,
    PythonChessOracle,
    ReasonCode,
    Role,
    Square,
    position_from_fen,
)

from conftest import StubOracle


def sq(name):
    return Square.parse(name)


def test_python_chess_oracle_detects_check():
    oracle = PythonChessOracle()
    position = position_from_fen("4k3/8/8/8/4R3/8/8/4K3")
    assert oracle.in_check(position, Color.BLACK)
    assert not oracle.in_check(position, Color.WHITE)


def test_gate_rejects_drop_that_gives_check():
    gate = CheckAvoidanceGate()
    position = position_from_fen("4k3/8/8/8/8/8/8/4K3")
    verdict = gate.check(position, sq("f6"), Piece(Role.KNIGHT, Color.WHITE))
    assert verdict.reason_code is ReasonCode.CHECK_VIOLATION
    assert gate.check(position, sq("f5"), Piece(Role.KNIGHT, Color.WHITE)).accepted


def test_gate_asks_about_the_opponent():
    oracle = StubOracle(answer=True)
    gate = CheckAvoidanceGate(oracle)
    position = position_from_fen("4k3/8/8/8/8/8/8/4K3")
    verdict = gate.check(position, sq("a7"), Piece(Role.PAWN, Color.BLACK))
    assert not verdict.accepted
    board, side = oracle.calls[0]
    assert side is Color.WHITE
    assert board[sq("a7")] == Piece(Role.PAWN, Color.BLACK)
    assert sq("a7") not in position


def test_missing_king_uses_fallback_in_copy_only(capsys):
    oracle = StubOracle()
    gate = CheckAvoidanceGate(oracle)
    position = {sq("d4"): Piece(Role.ROOK, Color.WHITE)}
    assert gate.check(position, sq("a3"), Piece(Role.PAWN, Color.WHITE)).accepted
    board, _ = oracle.calls[0]
    assert board[sq("e1")] == Piece(Role.KING, Color.WHITE)
    assert board[sq("e8")] == Piece(Role.KING, Color.BLACK)
    assert position == {sq("d4"): Piece(Role.ROOK, Color.WHITE)}
    assert "[CheckGate] invariant violated" in capsys.readouterr().err
