from dropchess.placement import Category, Color, Role, position_from_fen, suggest


def test_pawn_turns_always_suggest_pawn():
    position = position_from_fen("4k3/8/8/8/8/8/8/4K3")
    assert suggest(Category.PAWN, Color.WHITE, position) is Role.PAWN


def test_priority_order():
    assert suggest(Category.PIECE, Color.WHITE, position_from_fen("4k3/8/8/8/8/8/8/4K3")) is Role.KNIGHT
    assert suggest(Category.PIECE, Color.WHITE, position_from_fen("4k3/8/8/8/8/8/8/1N2K1N1")) is Role.BISHOP
    assert suggest(Category.PIECE, Color.WHITE, position_from_fen("4k3/8/8/8/8/8/8/1NB1KBN1")) is Role.ROOK
    assert suggest(Category.PIECE, Color.WHITE, position_from_fen("4k3/8/8/8/8/8/8/RNB1KBNR")) is Role.QUEEN
    # Black is counted separately
    assert suggest(Category.PIECE, Color.BLACK, position_from_fen("4k3/8/8/8/8/8/8/RNB1KBNR")) is Role.KNIGHT


def test_saturated_falls_back_to_pawn():
    position = position_from_fen("4k3/8/8/8/8/8/8/RNBQKBNR")
    assert suggest(Category.PIECE, Color.WHITE, position) is Role.PAWN
