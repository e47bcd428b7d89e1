"""Core chess types: colours, pieces, squares, moves and search values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

MASK64 = (1 << 64) - 1

MAX_MOVES = 256
MAX_PLY = 246


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def __invert__(self) -> "Color":
        return Color(self ^ Color.BLACK)


COLOR_NB = 2


class CastlingRights(IntFlag):
    NO_CASTLING = 0
    WHITE_OO = 1
    WHITE_OOO = 2
    BLACK_OO = 4
    BLACK_OOO = 8

    KING_SIDE = WHITE_OO | BLACK_OO
    QUEEN_SIDE = WHITE_OOO | BLACK_OOO
    WHITE_CASTLING = WHITE_OO | WHITE_OOO
    BLACK_CASTLING = BLACK_OO | BLACK_OOO
    ANY_CASTLING = WHITE_CASTLING | BLACK_CASTLING


CASTLING_RIGHT_NB = 16


class Bound(IntEnum):
    NONE = 0
    UPPER = 1
    LOWER = 2
    EXACT = 3


VALUE_ZERO = 0
VALUE_DRAW = 0
VALUE_NONE = 32002
VALUE_INFINITE = 32001

VALUE_MATE = 32000
VALUE_MATE_IN_MAX_PLY = VALUE_MATE - MAX_PLY
VALUE_MATED_IN_MAX_PLY = -VALUE_MATE_IN_MAX_PLY

VALUE_TB = VALUE_MATE_IN_MAX_PLY - 1
VALUE_TB_WIN_IN_MAX_PLY = VALUE_TB - MAX_PLY
VALUE_TB_LOSS_IN_MAX_PLY = -VALUE_TB_WIN_IN_MAX_PLY

PAWN_VALUE = 208
KNIGHT_VALUE = 781
BISHOP_VALUE = 825
ROOK_VALUE = 1276
QUEEN_VALUE = 2538


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6
    ALL_PIECES = 0


PIECE_TYPE_NB = 8


class Piece(IntEnum):
    NO_PIECE = 0
    W_PAWN = 1
    W_KNIGHT = 2
    W_BISHOP = 3
    W_ROOK = 4
    W_QUEEN = 5
    W_KING = 6
    B_PAWN = 9
    B_KNIGHT = 10
    B_BISHOP = 11
    B_ROOK = 12
    B_QUEEN = 13
    B_KING = 14


PIECE_NB = 16

_SIDE_VALUES = (
    VALUE_ZERO, PAWN_VALUE, KNIGHT_VALUE, BISHOP_VALUE,
    ROOK_VALUE, QUEEN_VALUE, VALUE_ZERO, VALUE_ZERO,
)
PIECE_VALUE = _SIDE_VALUES + _SIDE_VALUES

DEPTH_QS = 0
DEPTH_UNSEARCHED = -2
DEPTH_ENTRY_OFFSET = -3

SQ_A1 = 0
SQ_H1 = 7
SQ_A8 = 56
SQ_H8 = 63
SQ_NONE = 64
SQUARE_NB = 64

NORTH = 8
EAST = 1
SOUTH = -NORTH
WEST = -EAST
NORTH_EAST = NORTH + EAST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST
NORTH_WEST = NORTH + WEST


class File(IntEnum):
    FILE_A = 0
    FILE_B = 1
    FILE_C = 2
    FILE_D = 3
    FILE_E = 4
    FILE_F = 5
    FILE_G = 6
    FILE_H = 7


FILE_NB = 8


class Rank(IntEnum):
    RANK_1 = 0
    RANK_2 = 1
    RANK_3 = 2
    RANK_4 = 3
    RANK_5 = 4
    RANK_6 = 5
    RANK_7 = 6
    RANK_8 = 7


RANK_NB = 8


class MoveType(IntEnum):
    NORMAL = 0
    PROMOTION = 1 << 14
    EN_PASSANT = 2 << 14
    CASTLING = 3 << 14


@dataclass(frozen=True)
class Move:
    """A move packed into 16 bits.

    Bits 0-5 hold the destination, 6-11 the origin, 12-13 the promotion piece
    type minus KNIGHT and 14-15 the special move flag.
    """

    data: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.data <= 0xFFFF:
            raise ValueError(f"move data out of range: {self.data}")

    @staticmethod
    def none() -> "Move":
        return Move(0)

    @staticmethod
    def null() -> "Move":
        return Move(65)

    def _require_ok(self) -> None:
        if not self.is_ok():
            raise ValueError("move has no squares")

    def from_sq(self) -> int:
        self._require_ok()
        return (self.data >> 6) & 0x3F

    def to_sq(self) -> int:
        self._require_ok()
        return self.data & 0x3F

    def from_to(self) -> int:
        return self.data & 0xFFF

    def type_of(self) -> MoveType:
        return MoveType(self.data & (3 << 14))

    def promotion_type(self) -> PieceType:
        return PieceType(((self.data >> 12) & 3) + PieceType.KNIGHT)

    def is_ok(self) -> bool:
        return self.data not in (0, 65)

    def raw(self) -> int:
        return self.data

    def __bool__(self) -> bool:
        return self.data != 0


def make_move(from_sq: int, to_sq: int) -> Move:
    """Build a normal move between two squares."""
    return Move((from_sq << 6) + to_sq)


def make_special_move(
    move_type: MoveType,
    from_sq: int,
    to_sq: int,
    promotion: PieceType = PieceType.KNIGHT,
) -> Move:
    """Build a move carrying a special move flag and a promotion piece type."""
    return Move(int(move_type) + ((promotion - PieceType.KNIGHT) << 12) + (from_sq << 6) + to_sq)


def is_valid(value: int) -> bool:
    return value != VALUE_NONE


def _require_valid(value: int) -> None:
    if not is_valid(value):
        raise ValueError("VALUE_NONE is not a search value")


def is_win(value: int) -> bool:
    _require_valid(value)
    return value >= VALUE_TB_WIN_IN_MAX_PLY


def is_loss(value: int) -> bool:
    _require_valid(value)
    return value <= VALUE_TB_LOSS_IN_MAX_PLY


def is_decisive(value: int) -> bool:
    return is_win(value) or is_loss(value)


def mate_in(ply: int) -> int:
    return VALUE_MATE - ply


def mated_in(ply: int) -> int:
    return -VALUE_MATE + ply


def make_square(file: int, rank: int) -> int:
    return (rank << 3) + file


def make_piece(color: Color, piece_type: PieceType) -> Piece:
    return Piece((color << 3) + piece_type)


def type_of(piece: Piece) -> PieceType:
    return PieceType(piece & 7)


def color_of(piece: Piece) -> Color:
    if piece == Piece.NO_PIECE:
        raise ValueError("NO_PIECE has no colour")
    return Color(piece >> 3)


def swap_piece_color(piece: Piece) -> Piece:
    """Swap the colour of a piece, e.g. B_KNIGHT <-> W_KNIGHT."""
    return Piece(piece ^ 8)


def is_ok(square: int) -> bool:
    return SQ_A1 <= square <= SQ_H8


def file_of(square: int) -> File:
    return File(square & 7)


def rank_of(square: int) -> Rank:
    return Rank(square >> 3)


def relative_square(color: Color, square: int) -> int:
    return square ^ (color * 56)


def relative_rank(color: Color, rank: int) -> Rank:
    return Rank(rank ^ (color * 7))


def pawn_push(color: Color) -> int:
    return NORTH if color == Color.WHITE else SOUTH


def flip_rank(square: int) -> int:
    """Swap A1 <-> A8."""
    return square ^ SQ_A8


def flip_file(square: int) -> int:
    """Swap A1 <-> H1."""
    return square ^ SQ_H1


def castling_rights_of(color: Color, rights: CastlingRights) -> CastlingRights:
    mask = (
        CastlingRights.WHITE_CASTLING if color == Color.WHITE else CastlingRights.BLACK_CASTLING
    )
    return CastlingRights(mask & rights)


def make_key(seed: int) -> int:
    """Linear congruential step, wrapped to 64 bits."""
    return (seed * 6364136223846793005 + 1442695040888963407) & MASK64