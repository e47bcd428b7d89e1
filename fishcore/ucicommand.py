"""Parsing of UCI command lines: 'go' limits, 'position' and info strings."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from fishcore.timeman import Limits, now
from fishcore.types import Color

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_INT_PREFIX = re.compile(r"[+-]?\d+")
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

# Keywords of 'go' followed by an integer, with the Limits field they set.
_INT_FIELDS = {
    "movestogo": "movestogo",
    "depth": "depth",
    "nodes": "nodes",
    "movetime": "movetime",
    "mate": "mate",
    "perft": "perft",
}
_PER_COLOR_FIELDS = {
    "wtime": ("time", Color.WHITE),
    "btime": ("time", Color.BLACK),
    "winc": ("inc", Color.WHITE),
    "binc": ("inc", Color.BLACK),
}


@dataclass
class PositionCommand:
    """The position a 'position' command sets up: a FEN and moves to play from it."""

    fen: str
    moves: List[str] = field(default_factory=list)


def to_lower(text: str) -> str:
    """Lower-case the ASCII letters of a string, leaving other characters alone."""
    return text.translate(_ASCII_LOWER)


def command_token(line: str) -> str:
    """The first word of a command line, or an empty string for a blank line."""
    words = line.split(maxsplit=1)
    return words[0] if words else ""


def info_string_lines(text: str) -> List[str]:
    """Wrap each non-blank line of a message as an 'info string' line."""
    return [f"info string {line}" for line in text.split("\n") if line.strip()]


def _read_int(tokens: Deque[str]) -> Optional[int]:
    """Read an integer from the front of the token stream.

    Returns None when no integer can be read; trailing characters after the
    digits stay in the stream as the next token.
    """
    if not tokens:
        return None
    token = tokens.popleft()
    match = _INT_PREFIX.match(token)
    if match is None:
        return None
    rest = token[match.end():]
    if rest:
        tokens.appendleft(rest)
    return int(match.group())


def _strip_keyword(tokens: Deque[str], keyword: str) -> None:
    if tokens and tokens[0] == keyword:
        tokens.popleft()


def parse_limits(command: str) -> Limits:
    """Parse the arguments of a 'go' command into search limits.

    A leading 'go' is allowed. Unknown words are skipped; 'searchmoves' takes
    every remaining word. Parsing stops at a number that cannot be read, which
    counts as zero.
    """
    limits = Limits()
    limits.start_time = now()  # The search starts as early as possible

    tokens: Deque[str] = deque(command.split())
    _strip_keyword(tokens, "go")

    while tokens:
        token = tokens.popleft()

        if token == "searchmoves":  # Needs to be last on the line
            limits.searchmoves.extend(to_lower(t) for t in tokens)
            tokens.clear()
        elif token in _PER_COLOR_FIELDS:
            name, color = _PER_COLOR_FIELDS[token]
            value = _read_int(tokens)
            getattr(limits, name)[color] = 0 if value is None else value
            if value is None:
                break
        elif token in _INT_FIELDS:
            value = _read_int(tokens)
            setattr(limits, _INT_FIELDS[token], 0 if value is None else value)
            if value is None:
                break
        elif token == "infinite":
            limits.infinite = 1
        elif token == "ponder":
            limits.ponder_mode = True

    return limits


def parse_position(command: str) -> Optional[PositionCommand]:
    """Parse the arguments of a 'position' command.

    A leading 'position' is allowed. 'startpos' is followed by one word that
    is taken to be 'moves'; 'fen' collects words up to 'moves'. Returns None
    when neither form is given.
    """
    tokens: Deque[str] = deque(command.split())
    _strip_keyword(tokens, "position")

    if not tokens:
        return None
    token = tokens.popleft()

    if token == "startpos":
        fen = START_FEN
        if tokens:
            tokens.popleft()  # Consume the 'moves' token, if any
    elif token == "fen":
        fen_words = []
        while tokens:
            word = tokens.popleft()
            if word == "moves":
                break
            fen_words.append(word)
        fen = " ".join(fen_words)
    else:
        return None

    return PositionCommand(fen=fen, moves=list(tokens))