"""Entropy harvesting from racing threads.

Three worker threads continuously mix neighbouring cells of a shared
three-cell ring.  The unsynchronised reads and writes make the combined
state drift unpredictably; sampling it whenever it changes yields bytes.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence

INIT_DELAY = 0.001
POLL_INTERVAL = 0.00001

PRIMES_16: tuple[int, ...] = (
    61441, 61463, 61469, 61471, 61483, 61487, 61493, 61507,
    61511, 61519, 61543, 61547, 61553, 61559, 61561, 61583,
    61603, 61609, 61613, 61627, 61631, 61637, 61643, 61651,
    61657, 61667, 61673, 61681, 61687, 61703, 61717, 61723,
)

PRIMES_32: tuple[int, ...] = (
    268435459, 268435463, 268435493, 268435523, 268435537, 268435561,
    268435577, 268435579, 268435597, 268435631, 268435639, 268435649,
    268435669, 268435697, 268435711, 268435723, 268435747, 268435751,
    268435757, 268435813, 268435823, 268435873, 268435879, 268435889,
    268435961, 268435987, 268436011, 268436041, 268436053, 268436071,
    268436081, 268436087, 268436089, 268436141, 268436167, 268436177,
    268436191, 268436219, 268436249, 268436261, 268436263, 268436269,
    268436279, 268436281, 268436291, 268436327, 268436407, 268436419,
    268436429, 268436431, 268436453, 268436507, 268436563, 268436629,
    268436653, 268436669, 268436671, 268436677, 268436687, 268436699,
    268436741, 268436743, 268436747, 268436759,
)

# The 16-bit mixer shifts the source right by 13 rather than 9 when
# rotating; the output stream depends on it, so it is kept.
_SOURCE_RIGHT_SHIFT = {16: 13}


def _check_width(bits: int, primes: Sequence[int]) -> None:
    if bits <= 0 or bits % 8:
        raise ValueError(f"word width must be a positive multiple of 8, got {bits}")
    if len(primes) < 2 * bits:
        raise ValueError(
            f"{bits}-bit mixing needs {2 * bits} primes, got {len(primes)}"
        )


def rotate(value: int, n: int, bits: int) -> int:
    """Rotate ``value`` left by ``n`` within a ``bits``-wide word."""
    mask = (1 << bits) - 1
    n %= bits
    value &= mask
    return ((value << n) | (value >> (bits - n))) & mask


def seed_modify(
    source: int, sink: int, bits: int, primes: Sequence[int]
) -> tuple[int, int]:
    """Run one mixing round; return the new ``(source, sink)`` values."""
    _check_width(bits, primes)
    mask = (1 << bits) - 1
    right = _SOURCE_RIGHT_SHIFT.get(bits, bits - 7)
    source &= mask
    sink &= mask
    acc = 1
    for x in range(bits):
        source = ((source << 7) | (source >> right)) & mask
        acc = ((acc << x) | (acc >> (bits - x))) & mask
        acc = (acc * primes[2 * x + (source & 1)]) & mask
        sink = (sink + (acc ^ source)) & mask
    sink ^= acc
    return source, sink


class Seeder:
    """A ring of three cells stirred by three unsynchronised threads."""

    def __init__(self, bits: int, primes: Sequence[int]) -> None:
        _check_width(bits, primes)
        self.bits = bits
        self.primes = tuple(primes)
        self._nodes = [0, 0, 0]
        self._run = False
        self._threads: list[threading.Thread] = []

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def _work(self, src: int, dst: int) -> None:
        while True:
            new_src, new_dst = seed_modify(
                self._nodes[src], self._nodes[dst], self.bits, self.primes
            )
            self._nodes[src] = new_src
            self._nodes[dst] = new_dst
            if not self._run:
                return

    def start(self) -> None:
        """Reset the ring and launch the three mixing threads."""
        if self.running:
            raise RuntimeError("seeder is already running")
        self._nodes[:] = [0, 0, 0]
        self._run = True
        self._threads = [
            threading.Thread(
                target=self._work,
                args=(i, (i + 1) % 3),
                name=f"seedy-accountant-{'ABC'[i]}",
                daemon=True,
            )
            for i in range(3)
        ]
        for thread in self._threads:
            thread.start()

    def stop(self) -> None:
        """Ask the threads to finish and wait for them."""
        self._run = False
        for thread in self._threads:
            thread.join()

    def read(self) -> int:
        """Return the XOR of the three cells."""
        a, b, c = self._nodes
        return a ^ b ^ c

    def __enter__(self) -> Seeder:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def seedy(nbytes: int, bits: int, primes: Sequence[int]) -> bytes:
    """Harvest ``nbytes`` bytes from a ``bits``-wide seeder."""
    if nbytes < 0:
        raise ValueError("byte count must not be negative")
    _check_width(bits, primes)
    word = bits // 8
    whole = nbytes - nbytes % word
    out = bytearray()

    with Seeder(bits, primes) as seeder:
        time.sleep(INIT_DELAY)
        last = seeder.read()

        while len(out) < whole:
            time.sleep(POLL_INTERVAL)
            pick = seeder.read()
            if pick != last:
                out += pick.to_bytes(word, "little")
                last = pick

        index = 0
        while len(out) < nbytes:
            time.sleep(POLL_INTERVAL)
            pick = seeder.read()
            if pick != last:
                out.append(pick.to_bytes(word, "little")[index])
                index += 1
                last = pick

    return bytes(out)


def seedy16(nbytes: int) -> bytes:
    """Harvest ``nbytes`` bytes using 16-bit cells."""
    return seedy(nbytes, 16, PRIMES_16)


def seedy32(nbytes: int) -> bytes:
    """Harvest ``nbytes`` bytes using 32-bit cells."""
    return seedy(nbytes, 32, PRIMES_32)