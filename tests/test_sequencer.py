import pytest

from dropchess.placement import (
    Category,
    Color,
    Phase,
    PlacementSequenceState,
    advance,
    color_to_move,
    required_category,
)


def test_cycle_of_four():
    expected = [
        (Color.WHITE, Category.PAWN),
        (Color.BLACK, Category.PAWN),
        (Color.WHITE, Category.PIECE),
        (Color.BLACK, Category.PIECE),
    ]
    for m in range(1, 41):
        assert (color_to_move(m), required_category(m)) == expected[(m - 1) % 4]


def test_advance_alternates_color():
    state = PlacementSequenceState()
    seen = []
    for _ in range(10):
        seen.append(color_to_move(state.move_count))
        state = advance(state)
    assert state.move_count == 11
    assert all(a is not b for a, b in zip(seen, seen[1:]))


def test_advance_is_noop_once_standard():
    state = PlacementSequenceState(move_count=5, phase=Phase.STANDARD)
    assert advance(state) is state


def test_move_count_must_be_positive():
    with pytest.raises(ValueError):
        PlacementSequenceState(move_count=0)
