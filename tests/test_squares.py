import pytest

from dropchess.placement import (
    Color,
    InvalidSquareError,
    Piece,
    Role,
    Square,
    SquareColor,
    neighborhood3x3,
    parse_square,
    square_color,
)
from dropchess.placement.squares import all_squares


@pytest.mark.parametrize("text,file,rank", [("a1", 0, 1), ("e4", 4, 4), ("h8", 7, 8)])
def test_parse_valid(text, file, rank):
    assert parse_square(text) == Square(file, rank)
    assert parse_square(text).name == text


@pytest.mark.parametrize("text", ["", "e", "E4", "i1", "a0", "a9", "e44", " e4", "4e", None, 42])
def test_parse_invalid(text):
    assert parse_square(text) is None


def test_strict_parse_raises():
    with pytest.raises(InvalidSquareError):
        Square.parse("x1")
    with pytest.raises(ValueError):
        Square(8, 1)


def test_square_colors():
    assert square_color(Square.parse("a1")) is SquareColor.DARK
    assert square_color(Square.parse("h1")) is SquareColor.LIGHT
    assert square_color(Square.parse("c1")) is SquareColor.DARK
    assert square_color(Square.parse("f1")) is SquareColor.LIGHT
    assert square_color(Square.parse("g2")) is SquareColor.LIGHT
    assert square_color(Square.parse("h8")) is SquareColor.DARK


def test_neighborhood_sizes():
    assert len(neighborhood3x3(Square.parse("e4"))) == 9
    assert len(neighborhood3x3(Square.parse("e1"))) == 6
    assert len(neighborhood3x3(Square.parse("a1"))) == 4
    zone = {sq.name for sq in neighborhood3x3(Square.parse("e1"))}
    assert zone == {"d1", "e1", "f1", "d2", "e2", "f2"}


def test_all_squares_board_order():
    squares = all_squares()
    assert len(squares) == 64
    assert squares[0].name == "a8"
    assert squares[-1].name == "h1"


def test_role_and_piece_parsing():
    assert Role.parse("knight") is Role.KNIGHT
    assert Role.parse("N") is Role.KNIGHT
    assert Role.parse("p") is Role.PAWN
    with pytest.raises(ValueError):
        Role.parse("archbishop")
    assert Piece(Role.QUEEN, Color.WHITE).symbol == "Q"
    assert Piece(Role.QUEEN, Color.BLACK).symbol == "q"
    assert Piece.from_symbol("r") == Piece(Role.ROOK, Color.BLACK)
    assert Color.parse("w") is Color.WHITE
    assert Color.WHITE.opponent is Color.BLACK
