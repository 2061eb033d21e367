import pytest

from chesscore.bitboard import (
    Color,
    Direction,
    PieceType,
    attacks_bb,
    between_bb,
    distance,
    edge_distance,
    file_bb,
    file_distance,
    file_of,
    init,
    iter_squares,
    least_significant_square_bb,
    line_bb,
    lsb,
    make_square,
    more_than_one,
    msb,
    pawn_attacks,
    pawn_attacks_bb,
    popcount,
    pretty,
    pseudo_attacks,
    rank_bb,
    rank_distance,
    rank_of,
    shift,
    sliding_attack,
    square_bb,
)
from chesscore.utils import PRNG


def sq(name):
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


def bb(*names):
    result = 0
    for name in names:
        result |= square_bb(sq(name))
    return result


def test_file_and_rank_constants():
    assert file_bb(0) == 0x0101010101010101
    assert rank_bb(0) == 0xFF
    assert file_bb(7) == 0x0101010101010101 << 7


def test_make_square_round_trip():
    for s in range(64):
        assert make_square(file_of(s), rank_of(s)) == s


def test_square_bb_lsb_msb_round_trip():
    for s in range(64):
        b = square_bb(s)
        assert lsb(b) == s
        assert msb(b) == s
        assert least_significant_square_bb(b | square_bb(63)) == b


def test_empty_bitboard_errors():
    with pytest.raises(ValueError):
        lsb(0)
    with pytest.raises(ValueError):
        msb(0)
    with pytest.raises(ValueError):
        least_significant_square_bb(0)


def test_square_out_of_range():
    with pytest.raises(ValueError):
        square_bb(64)
    with pytest.raises(ValueError):
        square_bb(-1)


def test_iter_squares_and_popcount():
    b = bb("a1", "d4", "h8", "c7")
    squares = list(iter_squares(b))
    assert squares == sorted(squares)
    assert len(squares) == popcount(b)
    rebuilt = 0
    for s in squares:
        rebuilt |= square_bb(s)
    assert rebuilt == b


def test_more_than_one():
    assert not more_than_one(0)
    assert not more_than_one(bb("e4"))
    assert more_than_one(bb("e4", "e5"))


def test_shift_round_trip_and_edges():
    b = bb("a1", "d4", "g6")
    assert shift(shift(b, Direction.NORTH), Direction.SOUTH) == b
    assert shift(file_bb(7), Direction.EAST) == 0
    assert shift(file_bb(0), Direction.WEST) == 0
    assert shift(rank_bb(7), Direction.NORTH) == 0
    assert shift(b, 2 * Direction.NORTH) == shift(shift(b, Direction.NORTH), Direction.NORTH)


def test_pawn_attacks_match_shift():
    for s in range(64):
        for c in Color:
            assert pawn_attacks(c, s) == pawn_attacks_bb(c, square_bb(s))
    assert pawn_attacks(Color.WHITE, sq("e4")) == bb("d5", "f5")
    assert pawn_attacks(Color.BLACK, sq("a5")) == bb("b4")


def test_distances():
    for a in range(64):
        for b in range(64):
            assert distance(a, b) == distance(b, a)
            assert distance(a, b) == max(file_distance(a, b), rank_distance(a, b))
    assert [edge_distance(f) for f in range(8)] == [0, 1, 2, 3, 3, 2, 1, 0]


def test_magic_lookup_matches_ray_walk():
    init()
    rng = PRNG(1070372)
    for s in range(64):
        for _ in range(8):
            occupied = rng.sparse_rand()
            for pt in (PieceType.BISHOP, PieceType.ROOK):
                assert attacks_bb(pt, s, occupied) == sliding_attack(pt, s, occupied)


def test_queen_is_rook_plus_bishop():
    rng = PRNG(99)
    for s in range(64):
        occupied = rng.sparse_rand()
        assert attacks_bb(PieceType.QUEEN, s, occupied) == (
            attacks_bb(PieceType.ROOK, s, occupied) | attacks_bb(PieceType.BISHOP, s, occupied)
        )


def test_rook_on_empty_board_covers_file_and_rank():
    for s in range(64):
        expected = (file_bb(file_of(s)) | rank_bb(rank_of(s))) & ~square_bb(s)
        assert pseudo_attacks(PieceType.ROOK, s) == expected


def test_knight_and_king_attacks_are_symmetric():
    for pt in (PieceType.KNIGHT, PieceType.KING):
        for a in range(64):
            for b in iter_squares(pseudo_attacks(pt, a)):
                assert pseudo_attacks(pt, b) & square_bb(a)
    for a in range(64):
        for b in iter_squares(pseudo_attacks(PieceType.KING, a)):
            assert distance(a, b) == 1


def test_between_and_line_examples():
    assert between_bb(sq("c4"), sq("f7")) == bb("d5", "e6", "f7")
    assert between_bb(sq("e6"), sq("f8")) == bb("f8")
    assert line_bb(sq("c4"), sq("f7")) == bb("a2", "b3", "c4", "d5", "e6", "f7", "g8")
    assert line_bb(sq("e6"), sq("f8")) == 0


def test_between_is_subset_of_line():
    for a in range(64):
        for b in range(64):
            line = line_bb(a, b)
            if line:
                assert between_bb(a, b) & ~line == 0
                assert line_bb(b, a) == line


def test_pawn_and_bad_piece_types_rejected():
    with pytest.raises(ValueError):
        attacks_bb(PieceType.PAWN, 0, 0)
    with pytest.raises(ValueError):
        pseudo_attacks(PieceType.PAWN, 0)
    with pytest.raises(ValueError):
        sliding_attack(PieceType.KNIGHT, 0, 0)


def test_pretty_layout():
    text = pretty(bb("a1", "h8"))
    lines = text.splitlines()
    assert lines[0] == "+---+---+---+---+---+---+---+---+"
    assert lines[-1] == "  a   b   c   d   e   f   g   h"
    assert text.count("X") == 2
    assert lines[1].startswith("|   ") and lines[1].endswith("| X | 8")
    assert lines[15].startswith("| X |") and lines[15].endswith("| 1")
    assert "X" not in pretty(0)