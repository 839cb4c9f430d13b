"""MT19937 Mersenne Twister with multiplicative seeding."""

from __future__ import annotations

STATE_VECTOR_LENGTH = 624
STATE_VECTOR_M = 397

_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_TEMPERING_MASK_B = 0x9D2C5680
_TEMPERING_MASK_C = 0xEFC60000
_MAG = (0x0, 0x9908B0DF)
_WORD = 0xFFFFFFFF
_DEFAULT_SEED = 4357


class MTRand:
    """A 32-bit Mersenne Twister generator."""

    def __init__(self, seed: int) -> None:
        self.mt: list[int] = [0] * STATE_VECTOR_LENGTH
        self.index = STATE_VECTOR_LENGTH
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the state vector from ``seed``."""
        value = seed & _WORD
        state = [value]
        for _ in range(1, STATE_VECTOR_LENGTH):
            value = (6069 * value) & _WORD
            state.append(value)
        self.mt = state
        self.index = STATE_VECTOR_LENGTH

    def _twist(self) -> None:
        mt = self.mt
        n, m = STATE_VECTOR_LENGTH, STATE_VECTOR_M
        for kk in range(n - 1):
            y = (mt[kk] & _UPPER_MASK) | (mt[kk + 1] & _LOWER_MASK)
            mt[kk] = mt[(kk + m) % n] ^ (y >> 1) ^ _MAG[y & 1]
        y = (mt[n - 1] & _UPPER_MASK) | (mt[0] & _LOWER_MASK)
        mt[n - 1] = mt[m - 1] ^ (y >> 1) ^ _MAG[y & 1]
        self.index = 0

    def next_long(self) -> int:
        """Return the next 32-bit unsigned value."""
        if self.index >= STATE_VECTOR_LENGTH or self.index < 0:
            if self.index >= STATE_VECTOR_LENGTH + 1 or self.index < 0:
                self.seed(_DEFAULT_SEED)
            self._twist()
        y = self.mt[self.index]
        self.index += 1
        y ^= y >> 11
        y ^= (y << 7) & _TEMPERING_MASK_B
        y ^= (y << 15) & _TEMPERING_MASK_C
        y ^= y >> 18
        return y & _WORD

    def next_double(self) -> float:
        """Return the next value scaled into ``[0, 1]``."""
        return self.next_long() / _WORD