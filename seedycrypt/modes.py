"""Block-cipher modes of operation over a single-block engine.

Each mode function takes an engine exposing ``block_size``,
``encrypt_block`` and ``decrypt_block``.  Modes that chain through an
initialisation vector return ``(output, next_iv)``.  Passing ``next_iv``
to a later call carries on the same stream.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from cryptography.hazmat.primitives.ciphers import Cipher as _BlockCipher
from cryptography.hazmat.primitives.ciphers import algorithms
from cryptography.hazmat.primitives.ciphers import modes as _raw_modes

AES_BLOCK_SIZE = 16
AES_KEY_SIZES = (16, 24, 32)
_COUNTER_BYTES = 8
_COUNTER_MASK = (1 << (8 * _COUNTER_BYTES)) - 1


class BlockEngine(Protocol):
    """Anything that enciphers and deciphers single fixed-size blocks."""

    block_size: int

    def encrypt_block(self, block: bytes) -> bytes: ...

    def decrypt_block(self, block: bytes) -> bytes: ...


class AESBlock:
    """The raw AES block transform for a 128, 192 or 256-bit key."""

    block_size = AES_BLOCK_SIZE

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) not in AES_KEY_SIZES:
            raise ValueError(
                f"AES key must be 16, 24 or 32 bytes long, got {len(key)}"
            )
        cipher = _BlockCipher(algorithms.AES(key), _raw_modes.ECB())
        self._encryptor = cipher.encryptor()
        self._decryptor = cipher.decryptor()

    def _check(self, block: bytes) -> bytes:
        block = bytes(block)
        if len(block) != self.block_size:
            raise ValueError(
                f"AES works on {self.block_size}-byte blocks, got {len(block)}"
            )
        return block

    def encrypt_block(self, block: bytes) -> bytes:
        """Encipher exactly one block."""
        return self._encryptor.update(self._check(block))

    def decrypt_block(self, block: bytes) -> bytes:
        """Decipher exactly one block."""
        return self._decryptor.update(self._check(block))


def block_xor(a: bytes, b: bytes) -> bytes:
    """Return the byte-wise XOR of two equally long byte strings."""
    if len(a) != len(b):
        raise ValueError(f"cannot XOR {len(a)} bytes with {len(b)} bytes")
    return bytes(x ^ y for x, y in zip(a, b))


def increment_counter(iv: bytes) -> bytes:
    """Advance the 64-bit counter held in the first eight bytes of ``iv``.

    The counter wraps around; the remaining bytes (the nonce) are kept.
    """
    iv = bytes(iv)
    if len(iv) < _COUNTER_BYTES:
        raise ValueError(f"counter block must be at least {_COUNTER_BYTES} bytes")
    counter = (int.from_bytes(iv[:_COUNTER_BYTES], "little") + 1) & _COUNTER_MASK
    return counter.to_bytes(_COUNTER_BYTES, "little") + iv[_COUNTER_BYTES:]


def _chunks(data: bytes, size: int) -> Iterator[bytes]:
    for start in range(0, len(data), size):
        yield data[start:start + size]


def _check_iv(engine: BlockEngine, iv: bytes) -> bytes:
    iv = bytes(iv)
    if len(iv) != engine.block_size:
        raise ValueError(
            f"IV must be one block ({engine.block_size} bytes), got {len(iv)}"
        )
    return iv


def ecb_encrypt(engine: BlockEngine, data: bytes) -> bytes:
    """Encrypt block by block; a final partial block is zero-padded."""
    size = engine.block_size
    out = bytearray()
    for chunk in _chunks(bytes(data), size):
        out += engine.encrypt_block(chunk.ljust(size, b"\0"))
    return bytes(out)


def ecb_decrypt(engine: BlockEngine, data: bytes) -> bytes:
    """Decrypt block by block; the input must be whole blocks."""
    data = bytes(data)
    size = engine.block_size
    if len(data) % size:
        raise ValueError(f"ECB ciphertext must be a multiple of {size} bytes")
    return b"".join(engine.decrypt_block(chunk) for chunk in _chunks(data, size))


def cbc_encrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Cipher block chaining; a final partial block yields a whole block."""
    state = _check_iv(engine, iv)
    size = engine.block_size
    out = bytearray()
    for chunk in _chunks(bytes(data), size):
        length = len(chunk)
        mixed = block_xor(state[:length], chunk) + bytes(size - length)
        state = engine.encrypt_block(mixed)
        out += state
    return bytes(out), state


def cbc_decrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Undo cipher block chaining; trailing bytes short of a block are dropped."""
    state = _check_iv(engine, iv)
    size = engine.block_size
    out = bytearray()
    for chunk in _chunks(bytes(data), size):
        if len(chunk) < size:
            break
        out += block_xor(engine.decrypt_block(chunk), state)
        state = chunk
    return bytes(out), state


def cfb_encrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Cipher feedback encryption."""
    state = _check_iv(engine, iv)
    out = bytearray()
    for chunk in _chunks(bytes(data), engine.block_size):
        keystream = engine.encrypt_block(state)
        length = len(chunk)
        produced = block_xor(keystream[:length], chunk)
        state = produced + keystream[length:]
        out += produced
    return bytes(out), state


def cfb_decrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Cipher feedback decryption; a final partial block leaves the IV as is."""
    state = _check_iv(engine, iv)
    size = engine.block_size
    out = bytearray()
    for chunk in _chunks(bytes(data), size):
        keystream = engine.encrypt_block(state)
        length = len(chunk)
        out += block_xor(keystream[:length], chunk)
        if length == size:
            state = chunk
    return bytes(out), state


def _ofb(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    state = _check_iv(engine, iv)
    out = bytearray()
    for chunk in _chunks(bytes(data), engine.block_size):
        state = engine.encrypt_block(state)
        out += block_xor(state[:len(chunk)], chunk)
    return bytes(out), state


def ofb_encrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Output feedback encryption."""
    return _ofb(engine, iv, data)


def ofb_decrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Output feedback decryption."""
    return _ofb(engine, iv, data)


def _ctr(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    state = _check_iv(engine, iv)
    out = bytearray()
    for chunk in _chunks(bytes(data), engine.block_size):
        keystream = engine.encrypt_block(state)
        out += block_xor(keystream[:len(chunk)], chunk)
        state = increment_counter(state)
    return bytes(out), state


def ctr_encrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Counter mode encryption."""
    return _ctr(engine, iv, data)


def ctr_decrypt(engine: BlockEngine, iv: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Counter mode decryption."""
    return _ctr(engine, iv, data)