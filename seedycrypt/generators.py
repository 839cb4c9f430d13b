"""Seeded pseudo-random generators and the feeders that seed them."""

from __future__ import annotations

import struct
import sys
from array import array
from collections.abc import Callable, Sequence

from .mtwister import MTRand
from .seedy64 import seedy64

Feeder = Callable[[int], bytes]

_MASK64 = (1 << 64) - 1
_TABLE_SIZE = 65536
_QX64_ITER = 12345678912345678943


def _feed(feeder: Feeder, nbytes: int) -> bytes:
    data = bytes(feeder(nbytes))
    if len(data) != nbytes:
        raise ValueError(f"feeder returned {len(data)} bytes, expected {nbytes}")
    return data


def _fill_words(next_word: Callable[[], int], n: int, width: int) -> bytes:
    if n < 0:
        raise ValueError("byte count must not be negative")
    blocks, tail = divmod(n, width)
    out = bytearray()
    for _ in range(blocks):
        out += next_word().to_bytes(width, "little")
    if tail:
        out += next_word().to_bytes(width, "little")[:tail]
    return bytes(out)


class MT32:
    """Mersenne Twister seeded with four bytes from a feeder."""

    def __init__(self, feeder: Feeder) -> None:
        self.feeder = feeder
        self.pool = int.from_bytes(_feed(feeder, 4), "little")
        self._gen = MTRand(self.pool)

    def next(self) -> int:
        """Return the next 32-bit value."""
        return self._gen.next_long()

    def fill(self, n: int) -> bytes:
        """Return ``n`` bytes of output."""
        return _fill_words(self.next, n, 4)


class QX64:
    """Quad-XOR generator over four 65536-entry noise tables."""

    def __init__(self, feeder: Feeder) -> None:
        self.feeder = feeder
        self.iter = _QX64_ITER
        self.step = 0
        self.pool = [array("Q", [0]) * _TABLE_SIZE for _ in range(4)]

    def _load_pool(self) -> None:
        raw = _feed(self.feeder, 4 * _TABLE_SIZE * 8)
        table_bytes = _TABLE_SIZE * 8
        for k in range(4):
            chunk = raw[k * table_bytes:(k + 1) * table_bytes]
            self.pool[k] = array("Q", struct.unpack(f"<{_TABLE_SIZE}Q", chunk))

    def at(self, i: int) -> int:
        """Return the value at position ``i`` of the stream."""
        pos = (i * self.iter) & _MASK64
        result = 0
        for k, table in enumerate(self.pool):
            result ^= table[(pos >> (16 * k)) & 0xFFFF]
        return result

    def next(self) -> int:
        """Return the next 64-bit value, loading the tables first if needed."""
        if self.step == 0:
            self._load_pool()
            self.step += 1
        value = self.at(self.step)
        self.step = (self.step + 1) & _MASK64
        return value

    def fill(self, n: int) -> bytes:
        """Return ``n`` bytes of output."""
        return _fill_words(self.next, n, 8)


def stdin_input(nbytes: int) -> bytes:
    """Read ``nbytes`` from standard input, zero-padding a short read."""
    data = sys.stdin.buffer.read(nbytes)
    return data.ljust(nbytes, b"\0")


def select_feeder(argv: Sequence[str] | None = None) -> Feeder:
    """Choose standard input when the first argument is ``stdin``, else the seeder."""
    args = sys.argv if argv is None else argv
    if len(args) > 1 and args[1] == "stdin":
        return stdin_input
    return seedy64