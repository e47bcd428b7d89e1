# fishcore

Building blocks of a UCI chess engine, as a plain Python library. It needs
nothing beyond the standard library.

## What is inside

- `fishcore.types` has the basic chess types and helpers.
  - Enums for `Color`, `Piece`, `PieceType`, `File`, `Rank`, `Bound`, `CastlingRights` and `MoveType`.
  - Square helpers such as `make_square`, `file_of`, `rank_of`, `flip_rank` and `flip_file`.
  - Search value helpers: `is_win`, `is_loss`, `mate_in` and `mated_in`.
  - `Move`, the 16-bit move encoding. It has the accessors `from_sq`, `to_sq`, `type_of` and `promotion_type`.
  - `make_move` and `make_special_move` build moves.
- `fishcore.timeman` has `Limits`, which holds the limits of a `go` command, and `TimeManagement`.
  - `TimeManagement.init` computes the optimum and maximum thinking time for a move. It works from the clock, the increment and the moves to go.
  - It also supports a "nodes as time" mode.
  - It reads the keys `nodestime`, `Move Overhead` and `Ponder` from any mapping of options.
- `fishcore.tt` has `TranspositionTable`, a table of three-entry clusters with generation aging.
  - `probe(key)` returns a hit flag, a `TTData` copy of the entry and a `TTWriter` for the entry.
  - `hashfull(max_age)` reports how full the table is, in per mille.
- `fishcore.thread` has these parts:
  - `WorkerThread` and `ThreadPool` run jobs on parked threads. A job's exception is raised again by the next wait.
  - `select_best_result` picks one `ThreadResult` among parallel searches by score and depth voting.
  - `bound_thread_count_by_numa_node` counts how many threads are bound to each NUMA node.
- `fishcore.uciformat` formats values for the UCI protocol.
  - Scores (`Mate`, `Tablebase`, `InternalUnits`) and moves.
  - The `info` and `bestmove` lines.
  - Win/draw/loss figures from a material-based win rate model.
- `fishcore.ucicommand` parses command lines.
  - `parse_limits` parses a `go` line into `Limits`.
  - `parse_position` parses a `position` line into a `PositionCommand`.
  - Small helpers: `to_lower`, `command_token` and `info_string_lines`.

## Example

```python
from fishcore.types import Bound, File, Rank, make_move, make_square
from fishcore.uciformat import Mate, format_score, move_to_uci
from fishcore.ucicommand import parse_limits, parse_position
from fishcore.tt import TranspositionTable

e2 = make_square(File.FILE_E, Rank.RANK_2)
e4 = make_square(File.FILE_E, Rank.RANK_4)
move = make_move(e2, e4)
print(move_to_uci(move, False))        # e2e4
print(format_score(Mate(3)))           # mate 2

limits = parse_limits("go wtime 1000 btime 2000 movestogo 10")
print(limits.time, limits.movestogo)   # [1000, 2000] 10

position = parse_position("position startpos moves e2e4 e7e5")
print(position.moves)                  # ['e2e4', 'e7e5']

tt = TranspositionTable(1)             # 1 MB
tt.new_search()
key = 0x1234_5678_9ABC_DEF0
hit, data, writer = tt.probe(key)      # hit is False on an empty table
writer.write(key, 35, False, Bound.EXACT, 10, move, 20, tt.generation())
hit, data, writer = tt.probe(key)
print(hit, data.depth, data.move == move)   # True 10 True
```

## What it does not do

The package has no board, no move generation and no search. It cannot play
a game or answer a UCI GUI by itself, and it has no command to run. There is
no store of engine options: `TimeManagement.init` takes whatever mapping the
caller supplies. Moves are formatted and parsed as text, but nothing checks
them against a position.

## Running the tests

```
pip install -e .[test]
pytest
```