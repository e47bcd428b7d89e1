import pytest

from fishcore.timeman import now
from fishcore.types import Color
from fishcore.ucicommand import (
    START_FEN,
    PositionCommand,
    command_token,
    info_string_lines,
    parse_limits,
    parse_position,
    to_lower,
)


def test_parse_limits_times_and_increments():
    limits = parse_limits("wtime 60000 btime 50000 winc 1000 binc 500 movestogo 20")
    assert limits.time[Color.WHITE] == 60000
    assert limits.time[Color.BLACK] == 50000
    assert limits.inc[Color.WHITE] == 1000
    assert limits.inc[Color.BLACK] == 500
    assert limits.movestogo == 20


def test_parse_limits_accepts_leading_go():
    limits = parse_limits("go depth 12 nodes 5000")
    assert limits.depth == 12
    assert limits.nodes == 5000


@pytest.mark.parametrize(
    "command, attribute, expected",
    [
        ("movetime 250", "movetime", 250),
        ("mate 3", "mate", 3),
        ("perft 4", "perft", 4),
        ("infinite", "infinite", 1),
        ("ponder", "ponder_mode", True),
    ],
)
def test_parse_limits_single_fields(command, attribute, expected):
    assert getattr(parse_limits(command), attribute) == expected


def test_parse_limits_searchmoves_take_rest_lowercased():
    limits = parse_limits("depth 5 searchmoves E2E4 d2d4 depth 9")
    assert limits.searchmoves == ["e2e4", "d2d4", "depth", "9"]
    assert limits.depth == 5


def test_parse_limits_unreadable_number_stops_parsing():
    limits = parse_limits("depth abc movetime 100")
    assert limits.depth == 0
    assert limits.movetime == 0


def test_parse_limits_ignores_unknown_words():
    limits = parse_limits("foo depth 7 bar")
    assert limits.depth == 7
    assert limits.searchmoves == []


def test_parse_limits_sets_start_time():
    before = now()
    limits = parse_limits("")
    assert before <= limits.start_time <= now()


def test_parse_position_startpos_with_moves():
    result = parse_position("position startpos moves e2e4 e7e5")
    assert result == PositionCommand(START_FEN, ["e2e4", "e7e5"])


def test_parse_position_startpos_without_moves():
    result = parse_position("startpos")
    assert result.fen == START_FEN
    assert result.moves == []


def test_parse_position_fen_with_moves():
    fen = "8/8/8/8/8/8/8/K6k w - - 0 1"
    result = parse_position(f"fen {fen} moves a1a2")
    assert result.fen == fen
    assert result.moves == ["a1a2"]


def test_parse_position_fen_without_moves():
    fen = "8/8/8/8/8/8/8/K6k b - - 3 40"
    result = parse_position(f"position fen {fen}")
    assert result.fen == fen
    assert result.moves == []


@pytest.mark.parametrize("command", ["", "position", "position banana e2e4"])
def test_parse_position_rejects_other_forms(command):
    assert parse_position(command) is None


def test_to_lower_only_ascii():
    assert to_lower("E2E4Q") == "e2e4q"
    assert to_lower("ÄB") == "Äb"


def test_info_string_lines_skip_blank_lines():
    lines = info_string_lines("first\n   \n\nsecond line")
    assert lines == ["info string first", "info string second line"]


def test_info_string_lines_empty():
    assert info_string_lines("") == []


def test_command_token():
    assert command_token("  setoption name Hash value 16") == "setoption"
    assert command_token("   ") == ""
    assert command_token("isready") == "isready"