"""Formatting of scores, moves and search reports for the UCI protocol."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple, Union

from fishcore.types import File, Move, MoveType, file_of, make_square, rank_of

TB_CP = 20000

# Polynomial coefficients of the win rate model, in material / 58.
_AS = (-13.50030198, 40.92780883, -36.82753545, 386.83004070)
_BS = (96.53354896, -165.79058388, 90.89679019, 49.29561889)

_PROMOTION_CHARS = " pnbrqk"


@dataclass(frozen=True)
class Mate:
    """A forced mate; positive plies when the side to move mates."""

    plies: int


@dataclass(frozen=True)
class Tablebase:
    """A tablebase result reached after the given plies."""

    plies: int
    win: bool


@dataclass(frozen=True)
class InternalUnits:
    """A plain evaluation in centipawns."""

    value: int


Score = Union[Mate, Tablebase, InternalUnits]


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def format_score(score: Score) -> str:
    """The score part of an info line: 'mate N' or 'cp N'."""
    if isinstance(score, Mate):
        plies = score.plies + 1 if score.plies > 0 else score.plies
        return f"mate {_trunc_div(plies, 2)}"
    if isinstance(score, Tablebase):
        cp = TB_CP - score.plies if score.win else -TB_CP - score.plies
        return f"cp {cp}"
    if isinstance(score, InternalUnits):
        return f"cp {score.value}"
    raise TypeError(f"not a score: {score!r}")


def win_rate_params(material: int) -> Tuple[float, float]:
    """Parameters (a, b) of the win rate model for a material count.

    The material count weighs pawns 1, minor pieces 3, rooks 5 and queens 9.
    """
    m = min(max(material, 17), 78) / 58.0
    a = ((_AS[0] * m + _AS[1]) * m + _AS[2]) * m + _AS[3]
    b = ((_BS[0] * m + _BS[1]) * m + _BS[2]) * m + _BS[3]
    return a, b


def win_rate_model(value: int, material: int) -> int:
    """Win rate in per mille: 1 / (1 + exp((a - value) / b)), rounded."""
    a, b = win_rate_params(material)
    try:
        denominator = 1 + math.exp((a - float(value)) / b)
    except OverflowError:
        return 0
    return int(0.5 + 1000 / denominator)


def to_cp(value: int, material: int) -> int:
    """A value in centipawns, without treatment of mate scores."""
    a, _ = win_rate_params(material)
    return _round_half_away(100 * int(value) / a)


def wdl(value: int, material: int) -> str:
    """Win, draw and loss chances in per mille, separated by spaces."""
    win = win_rate_model(value, material)
    loss = win_rate_model(-value, material)
    draw = 1000 - win - loss
    return f"{win} {draw} {loss}"


def square_name(square: int) -> str:
    """Algebraic name of a square, e.g. 'e4'."""
    return chr(ord("a") + file_of(square)) + chr(ord("1") + rank_of(square))


def move_to_uci(move: Move, chess960: bool) -> str:
    """A move in coordinate notation.

    Castling is written as the king's two-square step unless chess960 is set,
    where it is written as king takes rook.
    """
    if move == Move.none():
        return "(none)"
    if move == Move.null():
        return "0000"

    from_sq = move.from_sq()
    to_sq = move.to_sq()

    if move.type_of() == MoveType.CASTLING and not chess960:
        to_sq = make_square(File.FILE_G if to_sq > from_sq else File.FILE_C, rank_of(from_sq))

    text = square_name(from_sq) + square_name(to_sq)
    if move.type_of() == MoveType.PROMOTION:
        text += _PROMOTION_CHARS[move.promotion_type()]
    return text


def format_info_full(
    depth: int,
    sel_depth: int,
    multipv: int,
    score: Score,
    bound: str,
    wdl_text: str,
    nodes: int,
    nps: int,
    hashfull: int,
    tb_hits: int,
    time_ms: int,
    pv: str,
    show_wdl: bool,
) -> str:
    """The full 'info' line sent after each completed iteration."""
    parts = [
        "info",
        f"depth {depth}",
        f"seldepth {sel_depth}",
        f"multipv {multipv}",
        f"score {format_score(score)}",
    ]
    if bound:
        parts.append(bound)
    if show_wdl:
        parts.append(f"wdl {wdl_text}")
    parts += [
        f"nodes {nodes}",
        f"nps {nps}",
        f"hashfull {hashfull}",
        f"tbhits {tb_hits}",
        f"time {time_ms}",
        f"pv {pv}",
    ]
    return " ".join(parts)


def format_iter(depth: int, currmove: str, currmovenumber: int) -> str:
    """The 'info' line reporting the root move being searched."""
    return f"info depth {depth} currmove {currmove} currmovenumber {currmovenumber}"


def format_no_moves(depth: int, score: Score) -> str:
    """The 'info' line sent when the root position has no legal moves."""
    return f"info depth {depth} score {format_score(score)}"


def format_bestmove(bestmove: str, ponder: str) -> str:
    """The 'bestmove' line, with a ponder move when there is one."""
    line = f"bestmove {bestmove}"
    if ponder:
        line += f" ponder {ponder}"
    return line