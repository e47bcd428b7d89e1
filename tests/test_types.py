import pytest

from fishcore.types import (
    SQ_A1,
    SQ_A8,
    SQ_H1,
    SQ_H8,
    VALUE_MATE,
    VALUE_MATE_IN_MAX_PLY,
    VALUE_NONE,
    VALUE_TB_LOSS_IN_MAX_PLY,
    VALUE_TB_WIN_IN_MAX_PLY,
    CastlingRights,
    Color,
    File,
    Move,
    MoveType,
    NORTH,
    Piece,
    PieceType,
    Rank,
    SOUTH,
    castling_rights_of,
    color_of,
    file_of,
    flip_file,
    flip_rank,
    is_decisive,
    is_loss,
    is_ok,
    is_valid,
    is_win,
    make_key,
    make_move,
    make_piece,
    make_special_move,
    make_square,
    mate_in,
    mated_in,
    pawn_push,
    rank_of,
    relative_rank,
    relative_square,
    swap_piece_color,
    type_of,
)

ALL_SQUARES = range(64)


def test_normal_move_round_trip():
    move = make_move(12, 28)
    assert move.from_sq() == 12
    assert move.to_sq() == 28
    assert move.type_of() == MoveType.NORMAL
    assert move.from_to() == (12 << 6) + 28
    assert bool(move)
    assert move.is_ok()


@pytest.mark.parametrize("promo", [PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN])
def test_promotion_round_trip(promo):
    move = make_special_move(MoveType.PROMOTION, 52, 60, promo)
    assert move.type_of() == MoveType.PROMOTION
    assert move.promotion_type() == promo
    assert move.from_sq() == 52
    assert move.to_sq() == 60


@pytest.mark.parametrize("kind", [MoveType.EN_PASSANT, MoveType.CASTLING])
def test_special_move_type(kind):
    move = make_special_move(kind, 4, 6)
    assert move.type_of() == kind
    assert move.promotion_type() == PieceType.KNIGHT


def test_none_and_null_moves():
    assert not Move.none()
    assert Move.none().raw() == 0
    assert Move.null().raw() == 65
    assert bool(Move.null())
    assert not Move.null().is_ok()
    assert not Move.none().is_ok()
    with pytest.raises(ValueError):
        Move.none().from_sq()
    with pytest.raises(ValueError):
        Move.null().to_sq()


def test_move_equality_and_hash():
    assert make_move(1, 2) == Move((1 << 6) + 2)
    assert len({make_move(1, 2), make_move(1, 2), make_move(2, 1)}) == 2


def test_move_data_range():
    with pytest.raises(ValueError):
        Move(1 << 16)
    with pytest.raises(ValueError):
        Move(-1)


def test_square_round_trip():
    for sq in ALL_SQUARES:
        assert make_square(file_of(sq), rank_of(sq)) == sq
        assert is_ok(sq)
    assert not is_ok(64)
    assert not is_ok(-1)


def test_square_constants():
    assert file_of(SQ_H1) == File.FILE_H
    assert rank_of(SQ_A8) == Rank.RANK_8
    assert make_square(File.FILE_H, Rank.RANK_8) == SQ_H8


def test_flips_are_involutions():
    for sq in ALL_SQUARES:
        assert flip_rank(flip_rank(sq)) == sq
        assert flip_file(flip_file(sq)) == sq
        assert file_of(flip_rank(sq)) == file_of(sq)
        assert rank_of(flip_file(sq)) == rank_of(sq)
    assert flip_rank(SQ_A1) == SQ_A8
    assert flip_file(SQ_A1) == SQ_H1


def test_relative_square_and_rank():
    assert relative_square(Color.WHITE, SQ_A1) == SQ_A1
    assert relative_square(Color.BLACK, SQ_A1) == SQ_A8
    assert relative_rank(Color.BLACK, Rank.RANK_1) == Rank.RANK_8
    assert relative_rank(Color.WHITE, Rank.RANK_3) == Rank.RANK_3


def test_piece_round_trip():
    for color in Color:
        for pt in (PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP,
                   PieceType.ROOK, PieceType.QUEEN, PieceType.KING):
            piece = make_piece(color, pt)
            assert type_of(piece) == pt
            assert color_of(piece) == color
            swapped = swap_piece_color(piece)
            assert color_of(swapped) == ~color
            assert type_of(swapped) == pt


def test_piece_constants():
    assert make_piece(Color.BLACK, PieceType.KNIGHT) == Piece.B_KNIGHT
    assert swap_piece_color(Piece.W_QUEEN) == Piece.B_QUEEN


def test_color_of_no_piece_raises():
    with pytest.raises(ValueError):
        color_of(Piece.NO_PIECE)


def test_color_toggle_and_pawn_push():
    assert ~Color.WHITE == Color.BLACK
    assert ~Color.BLACK == Color.WHITE
    assert pawn_push(Color.WHITE) == NORTH
    assert pawn_push(Color.BLACK) == SOUTH


def test_castling_rights_of():
    assert castling_rights_of(Color.WHITE, CastlingRights.ANY_CASTLING) == CastlingRights.WHITE_CASTLING
    assert castling_rights_of(Color.BLACK, CastlingRights.KING_SIDE) == CastlingRights.BLACK_OO
    assert castling_rights_of(Color.BLACK, CastlingRights.WHITE_OOO) == CastlingRights.NO_CASTLING


def test_value_predicates():
    assert mate_in(0) == VALUE_MATE
    assert mated_in(0) == -VALUE_MATE
    assert mate_in(5) == -mated_in(5)
    assert is_win(mate_in(3))
    assert is_loss(mated_in(3))
    assert is_win(VALUE_TB_WIN_IN_MAX_PLY)
    assert not is_win(VALUE_TB_WIN_IN_MAX_PLY - 1)
    assert is_loss(VALUE_TB_LOSS_IN_MAX_PLY)
    assert not is_decisive(0)
    assert is_decisive(VALUE_MATE_IN_MAX_PLY)


def test_value_none_rejected():
    assert not is_valid(VALUE_NONE)
    assert is_valid(0)
    with pytest.raises(ValueError):
        is_win(VALUE_NONE)
    with pytest.raises(ValueError):
        is_loss(VALUE_NONE)


def test_make_key():
    assert make_key(0) == 1442695040888963407
    for seed in (1, 12345, (1 << 64) - 1):
        assert 0 <= make_key(seed) < (1 << 64)