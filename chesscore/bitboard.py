"""Bitboards: 64-bit square sets, attack tables and magic-bitboard lookups.

Squares are integers 0..63 (a1 = 0, b1 = 1, ..., h8 = 63). A bitboard is a
non-negative integer below 2**64 whose bit ``n`` stands for square ``n``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Tuple

from chesscore.utils import PRNG

MASK64 = (1 << 64) - 1

SQUARE_NB = 64
FILE_NB = 8
RANK_NB = 8

FILE_A_BB = 0x0101010101010101
FILE_H_BB = FILE_A_BB << 7
RANK_1_BB = 0xFF
RANK_8_BB = RANK_1_BB << (8 * 7)


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(IntEnum):
    NORTH = 8
    EAST = 1
    SOUTH = -8
    WEST = -1
    NORTH_EAST = 9
    SOUTH_EAST = -7
    SOUTH_WEST = -9
    NORTH_WEST = 7


_ROOK_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_BISHOP_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)
_KING_STEPS = (-9, -8, -7, -1, 1, 7, 8, 9)
_KNIGHT_STEPS = (-17, -15, -10, -6, 6, 10, 15, 17)

# PRNG seeds, one per rank, that find the rook and bishop magics quickly.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


def _check_square(square: int) -> int:
    if not 0 <= square < SQUARE_NB:
        raise ValueError(f"square {square} out of range 0..63")
    return square


def make_square(file: int, rank: int) -> int:
    """Return the square on the given file (0 = a) and rank (0 = 1)."""
    if not (0 <= file < FILE_NB and 0 <= rank < RANK_NB):
        raise ValueError(f"file {file} or rank {rank} out of range 0..7")
    return (rank << 3) + file


def file_of(square: int) -> int:
    """Return the file (0..7) of a square."""
    return square & 7


def rank_of(square: int) -> int:
    """Return the rank (0..7) of a square."""
    return square >> 3


def square_bb(square: int) -> int:
    """Return the bitboard holding only ``square``."""
    return 1 << _check_square(square)


def more_than_one(b: int) -> bool:
    """Return True if the bitboard has at least two squares set."""
    return bool(b & (b - 1))


def rank_bb(rank: int) -> int:
    """Return the bitboard of every square on a rank."""
    return RANK_1_BB << (8 * rank)


def file_bb(file: int) -> int:
    """Return the bitboard of every square on a file."""
    return FILE_A_BB << file


def shift(b: int, direction: int) -> int:
    """Move every square of ``b`` one step (or two pushes) in ``direction``.

    Squares that would leave the board are dropped. Unknown directions give 0.
    """
    d = int(direction)
    if d == Direction.NORTH:
        return (b << 8) & MASK64
    if d == Direction.SOUTH:
        return b >> 8
    if d == 2 * Direction.NORTH:
        return (b << 16) & MASK64
    if d == 2 * Direction.SOUTH:
        return b >> 16
    if d == Direction.EAST:
        return ((b & ~FILE_H_BB) << 1) & MASK64
    if d == Direction.WEST:
        return (b & ~FILE_A_BB) >> 1
    if d == Direction.NORTH_EAST:
        return ((b & ~FILE_H_BB) << 9) & MASK64
    if d == Direction.NORTH_WEST:
        return ((b & ~FILE_A_BB) << 7) & MASK64
    if d == Direction.SOUTH_EAST:
        return (b & ~FILE_H_BB) >> 7
    if d == Direction.SOUTH_WEST:
        return (b & ~FILE_A_BB) >> 9
    return 0


def pawn_attacks_bb(color: Color, b: int) -> int:
    """Return the squares attacked by pawns of ``color`` standing on ``b``."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


def popcount(b: int) -> int:
    """Return the number of squares set in the bitboard."""
    return (b & MASK64).bit_count()


def lsb(b: int) -> int:
    """Return the least significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("lsb of an empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Return the most significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("msb of an empty bitboard")
    return b.bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    """Return the bitboard of the least significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("least significant square of an empty bitboard")
    return b & -b


def iter_squares(b: int) -> Iterator[int]:
    """Yield the squares of the bitboard from least to most significant."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def file_distance(a: int, b: int) -> int:
    """Return the number of files between two squares."""
    return abs(file_of(a) - file_of(b))


def rank_distance(a: int, b: int) -> int:
    """Return the number of ranks between two squares."""
    return abs(rank_of(a) - rank_of(b))


def distance(a: int, b: int) -> int:
    """Return the number of king steps from one square to the other."""
    return max(file_distance(a, b), rank_distance(a, b))


def edge_distance(file: int) -> int:
    """Return how many files separate ``file`` from the nearer board edge."""
    return min(file, FILE_NB - 1 - file)


def _safe_destination(square: int, step: int) -> int:
    to = square + step
    if 0 <= to < SQUARE_NB and distance(square, to) <= 2:
        return 1 << to
    return 0


def sliding_attack(piece_type: PieceType, square: int, occupied: int) -> int:
    """Compute bishop or rook attacks by walking each ray until a blocker."""
    if piece_type == PieceType.ROOK:
        directions = _ROOK_DIRECTIONS
    elif piece_type == PieceType.BISHOP:
        directions = _BISHOP_DIRECTIONS
    else:
        raise ValueError(f"not a sliding piece type: {piece_type!r}")
    _check_square(square)

    attacks = 0
    for d in directions:
        s = square
        while True:
            to = s + d
            if not (0 <= to < SQUARE_NB) or max(abs((to & 7) - (s & 7)), abs((to >> 3) - (s >> 3))) > 2:
                break
            s = to
            attacks |= 1 << s
            if (occupied >> s) & 1:
                break
    return attacks


@dataclass
class Magic:
    """Magic-bitboard data of one square for one sliding piece type."""

    mask: int
    magic: int
    shift: int
    attacks: List[int] = field(default_factory=list, repr=False)

    def index(self, occupied: int) -> int:
        """Return the attack-table index for the given occupancy."""
        return (((occupied & self.mask) * self.magic) & MASK64) >> self.shift

    def attacks_bb(self, occupied: int) -> int:
        """Return the attacks for the given occupancy."""
        return self.attacks[self.index(occupied)]


def _find_magic(piece_type: PieceType, square: int) -> Magic:
    edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(square))) | (
        (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(square))
    )
    mask = sliding_attack(piece_type, square, 0) & ~edges
    shift_bits = 64 - popcount(mask)

    # Carry-Rippler enumeration of every subset of the mask.
    occupancy: List[int] = []
    reference: List[int] = []
    b = 0
    while True:
        occupancy.append(b)
        reference.append(sliding_attack(piece_type, square, b))
        b = (b - mask) & mask
        if not b:
            break

    size = len(occupancy)
    attacks = [0] * size
    epoch = [0] * size
    attempt = 0
    rng = PRNG(_MAGIC_SEEDS[rank_of(square)])

    while True:
        magic = 0
        while popcount(((magic * mask) & MASK64) >> 56) < 6:
            magic = rng.sparse_rand()

        # A good magic maps every occupancy to an index that holds the right
        # attacks; the table is filled as a side effect of the check.
        attempt += 1
        for occ, ref in zip(occupancy, reference):
            idx = (((occ & mask) * magic) & MASK64) >> shift_bits
            if epoch[idx] < attempt:
                epoch[idx] = attempt
                attacks[idx] = ref
            elif attacks[idx] != ref:
                break
        else:
            return Magic(mask=mask, magic=magic, shift=shift_bits, attacks=attacks)


@dataclass(frozen=True)
class _Tables:
    magics: Tuple[Tuple[Magic, ...], Tuple[Magic, ...]]  # bishop, rook
    pseudo: Tuple[Tuple[int, ...], ...]  # indexed by piece type; 0 and 1 hold pawn attacks by colour
    line: Tuple[int, ...]
    between: Tuple[int, ...]


@functools.lru_cache(maxsize=None)
def _tables() -> _Tables:
    bishop_magics = tuple(_find_magic(PieceType.BISHOP, s) for s in range(SQUARE_NB))
    rook_magics = tuple(_find_magic(PieceType.ROOK, s) for s in range(SQUARE_NB))

    pseudo = [[0] * SQUARE_NB for _ in range(len(PieceType))]
    line = [0] * (SQUARE_NB * SQUARE_NB)
    between = [0] * (SQUARE_NB * SQUARE_NB)

    def slider(pt: PieceType, s: int, occupied: int) -> int:
        table = bishop_magics if pt == PieceType.BISHOP else rook_magics
        return table[s].attacks_bb(occupied)

    for s1 in range(SQUARE_NB):
        pseudo[Color.WHITE][s1] = pawn_attacks_bb(Color.WHITE, 1 << s1)
        pseudo[Color.BLACK][s1] = pawn_attacks_bb(Color.BLACK, 1 << s1)
        for step in _KING_STEPS:
            pseudo[PieceType.KING][s1] |= _safe_destination(s1, step)
        for step in _KNIGHT_STEPS:
            pseudo[PieceType.KNIGHT][s1] |= _safe_destination(s1, step)
        pseudo[PieceType.BISHOP][s1] = slider(PieceType.BISHOP, s1, 0)
        pseudo[PieceType.ROOK][s1] = slider(PieceType.ROOK, s1, 0)
        pseudo[PieceType.QUEEN][s1] = pseudo[PieceType.BISHOP][s1] | pseudo[PieceType.ROOK][s1]

        for pt in (PieceType.BISHOP, PieceType.ROOK):
            for s2 in range(SQUARE_NB):
                key = s1 * SQUARE_NB + s2
                if pseudo[pt][s1] & (1 << s2):
                    line[key] = (slider(pt, s1, 0) & slider(pt, s2, 0)) | (1 << s1) | (1 << s2)
                    between[key] = slider(pt, s1, 1 << s2) & slider(pt, s2, 1 << s1)
                between[key] |= 1 << s2

    return _Tables(
        magics=(bishop_magics, rook_magics),
        pseudo=tuple(tuple(row) for row in pseudo),
        line=tuple(line),
        between=tuple(between),
    )


def init() -> None:
    """Build the attack tables. Later calls reuse the tables already built."""
    _tables()


def line_bb(s1: int, s2: int) -> int:
    """Return the whole edge-to-edge line through both squares, or 0 if not aligned."""
    _check_square(s1)
    _check_square(s2)
    return _tables().line[s1 * SQUARE_NB + s2]


def between_bb(s1: int, s2: int) -> int:
    """Return the squares after ``s1`` up to and including ``s2``.

    If the squares are not on a common line the result is ``s2`` alone.
    """
    _check_square(s1)
    _check_square(s2)
    return _tables().between[s1 * SQUARE_NB + s2]


def pseudo_attacks(piece_type: PieceType, square: int) -> int:
    """Return the attacks of a non-pawn piece on an empty board."""
    if not PieceType.KNIGHT <= piece_type <= PieceType.KING:
        raise ValueError(f"no pseudo attacks for piece type {piece_type!r}")
    return _tables().pseudo[piece_type][_check_square(square)]


def pawn_attacks(color: Color, square: int) -> int:
    """Return the squares a pawn of ``color`` on ``square`` attacks."""
    return _tables().pseudo[Color(color)][_check_square(square)]


def attacks_bb(piece_type: PieceType, square: int, occupied: int) -> int:
    """Return the attacks of a non-pawn piece given the board occupancy.

    Sliding attacks stop at, and include, the first occupied square.
    """
    _check_square(square)
    if piece_type == PieceType.BISHOP:
        return _tables().magics[0][square].attacks_bb(occupied)
    if piece_type == PieceType.ROOK:
        return _tables().magics[1][square].attacks_bb(occupied)
    if piece_type == PieceType.QUEEN:
        magics = _tables().magics
        return magics[0][square].attacks_bb(occupied) | magics[1][square].attacks_bb(occupied)
    return pseudo_attacks(piece_type, square)


def pretty(b: int) -> str:
    """Return an ASCII drawing of the bitboard, rank 8 at the top."""
    border = "+---+---+---+---+---+---+---+---+\n"
    parts = [border]
    for rank in range(RANK_NB - 1, -1, -1):
        for file in range(FILE_NB):
            parts.append("| X " if b & (1 << make_square(file, rank)) else "|   ")
        parts.append(f"| {rank + 1}\n{border}")
    parts.append("  a   b   c   d   e   f   g   h\n")
    return "".join(parts)