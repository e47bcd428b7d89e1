"""The transposition table: a shared hash of search results keyed by position."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from fishcore.types import (
    DEPTH_ENTRY_OFFSET,
    MASK64,
    VALUE_NONE,
    Bound,
    Move,
)

# The low bits of the generation byte hold the bound and the pv flag.
GENERATION_BITS = 3
GENERATION_DELTA = 1 << GENERATION_BITS
GENERATION_CYCLE = 255 + GENERATION_DELTA
GENERATION_MASK = (0xFF << GENERATION_BITS) & 0xFF

CLUSTER_SIZE = 3
CLUSTER_BYTES = 32  # Three 10-byte entries plus padding

_HASHFULL_CLUSTERS = 1000


def mul_hi64(a: int, b: int) -> int:
    """High 64 bits of the 128-bit product of two unsigned 64-bit numbers."""
    return ((a & MASK64) * (b & MASK64)) >> 64


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


@dataclass(frozen=True)
class TTData:
    """A copy of what an entry held when it was probed."""

    move: Move
    value: int
    eval: int
    depth: int
    bound: Bound
    is_pv: bool


class TTEntry:
    """One packed table entry: key, depth, generation/bound, move, value, eval."""

    __slots__ = ("key16", "depth8", "gen_bound8", "move16", "value16", "eval16")

    def __init__(self) -> None:
        self.key16 = 0
        self.depth8 = 0
        self.gen_bound8 = 0
        self.move16 = Move.none()
        self.value16 = 0
        self.eval16 = 0

    def read(self) -> TTData:
        return TTData(
            move=self.move16,
            value=self.value16,
            eval=self.eval16,
            depth=self.depth8 + DEPTH_ENTRY_OFFSET,
            bound=Bound(self.gen_bound8 & 0x3),
            is_pv=bool(self.gen_bound8 & 0x4),
        )

    def is_occupied(self) -> bool:
        return self.depth8 != 0

    def relative_age(self, generation8: int) -> int:
        """Age of the entry relative to a generation; a multiple of GENERATION_DELTA."""
        return (GENERATION_CYCLE + generation8 - self.gen_bound8) & GENERATION_MASK

    def save(
        self,
        key: int,
        value: int,
        pv: bool,
        bound: Bound,
        depth: int,
        move: Move,
        evaluation: int,
        generation8: int,
    ) -> None:
        """Store new data, unless the entry already holds something more valuable."""
        key16 = key & 0xFFFF

        # Keep the old move when there is no new one for the same position
        if move or key16 != self.key16:
            self.move16 = move

        if (
            bound == Bound.EXACT
            or key16 != self.key16
            or depth - DEPTH_ENTRY_OFFSET + 2 * int(pv) > self.depth8 - 4
            or self.relative_age(generation8)
        ):
            if not DEPTH_ENTRY_OFFSET < depth < 256 + DEPTH_ENTRY_OFFSET:
                raise ValueError(f"depth {depth} cannot be stored")
            self.key16 = key16
            self.depth8 = depth - DEPTH_ENTRY_OFFSET
            self.gen_bound8 = (generation8 | (int(pv) << 2) | int(bound)) & 0xFF
            self.value16 = _int16(value)
            self.eval16 = _int16(evaluation)
        elif (
            self.depth8 + DEPTH_ENTRY_OFFSET >= 5
            and Bound(self.gen_bound8 & 0x3) != Bound.EXACT
        ):
            self.depth8 -= 1


class TTWriter:
    """Writes into the entry that a probe selected."""

    __slots__ = ("_entry",)

    def __init__(self, entry: TTEntry) -> None:
        self._entry = entry

    def write(
        self,
        key: int,
        value: int,
        pv: bool,
        bound: Bound,
        depth: int,
        move: Move,
        evaluation: int,
        generation8: int,
    ) -> None:
        self._entry.save(key, value, pv, bound, depth, move, evaluation, generation8)


class TranspositionTable:
    """Clusters of entries addressed by the high bits of a key times the size."""

    def __init__(self, mb_size: Optional[int] = None) -> None:
        self._table: List[Tuple[TTEntry, ...]] = []
        self._generation8 = 0
        if mb_size is not None:
            self.resize(mb_size)

    @property
    def cluster_count(self) -> int:
        return len(self._table)

    def resize(self, mb_size: int) -> None:
        """Set the table size in megabytes and clear it."""
        count = mb_size * 1024 * 1024 // CLUSTER_BYTES
        if count <= 0:
            raise ValueError(f"cannot allocate {mb_size}MB for transposition table")
        self._table = [() for _ in range(count)]
        self.clear()

    def clear(self) -> None:
        """Empty every entry and restart the generation count."""
        self._generation8 = 0
        self._table = [
            tuple(TTEntry() for _ in range(CLUSTER_SIZE)) for _ in range(len(self._table))
        ]

    def hashfull(self, max_age: int = 0) -> int:
        """Per mille of sampled entries written no more than max_age searches ago."""
        max_age_internal = max_age << GENERATION_BITS
        count = sum(
            1
            for cluster in self._table[:_HASHFULL_CLUSTERS]
            for entry in cluster
            if entry.is_occupied()
            and entry.relative_age(self._generation8) <= max_age_internal
        )
        return count // CLUSTER_SIZE

    def new_search(self) -> None:
        """Advance the generation; called at the start of every root search."""
        self._generation8 = (self._generation8 + GENERATION_DELTA) & 0xFF

    def generation(self) -> int:
        return self._generation8

    def cluster_index(self, key: int) -> int:
        """The cluster a key belongs to."""
        if not self._table:
            raise RuntimeError("transposition table has no size")
        return mul_hi64(key, len(self._table))

    def probe(self, key: int) -> Tuple[bool, TTData, TTWriter]:
        """Look a key up.

        Returns whether the position was found, a copy of the entry's data
        and a writer for the matching entry, or for the least valuable one
        in the cluster when there is no match.
        """
        cluster = self._table[self.cluster_index(key)]
        key16 = key & 0xFFFF

        for entry in cluster:
            if entry.key16 == key16:
                return entry.is_occupied(), entry.read(), TTWriter(entry)

        generation8 = self._generation8
        replace = cluster[0]
        for entry in cluster[1:]:
            if (
                replace.depth8 - replace.relative_age(generation8)
                > entry.depth8 - entry.relative_age(generation8)
            ):
                replace = entry

        empty = TTData(
            Move.none(), VALUE_NONE, VALUE_NONE, DEPTH_ENTRY_OFFSET, Bound.NONE, False
        )
        return False, empty, TTWriter(replace)