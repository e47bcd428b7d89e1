"""Building blocks of a UCI chess engine: types, time management, transposition table, threads and UCI text."""

__version__ = "0.1.0"