"""A selectable block or stream cipher: AES in a chosen mode, or ChaCha20.

Encryption and decryption keep separate IV (or counter) state, so one
``Cipher`` can encrypt a stream and decrypt another independently, each
call carrying on where the previous one stopped.
"""

from __future__ import annotations

import enum
import secrets
from collections.abc import Callable

from cryptography.hazmat.primitives.ciphers import Cipher as _StreamCipher
from cryptography.hazmat.primitives.ciphers import algorithms

from . import modes
from .modes import AESBlock

CHACHA_KEY_BYTES = 32
CHACHA_IV_BYTES = 16
CHACHA_COUNTER_BYTES = 4
CHACHA_BLOCK_BYTES = 64


class CipherMode(enum.IntEnum):
    """How a block cipher handles messages longer than one block."""

    NONE = 0
    ECB = 1
    CBC = 2
    CFB = 3
    OFB = 4
    CTR = 5


class CipherAlgorithm(enum.IntEnum):
    """The underlying cipher algorithm."""

    NONE = 0
    AES_128 = 1
    AES_192 = 2
    AES_256 = 3
    CHACHA20 = 4


class CipherError(ValueError):
    """Raised when a cipher cannot be prepared or cannot perform an operation."""


_AES_KEY_BYTES = {
    CipherAlgorithm.AES_128: 16,
    CipherAlgorithm.AES_192: 24,
    CipherAlgorithm.AES_256: 32,
}

_IV_MODES = (CipherMode.CBC, CipherMode.CFB, CipherMode.OFB, CipherMode.CTR)

_Chained = Callable[[AESBlock, bytes, bytes], "tuple[bytes, bytes]"]

_ENCRYPTORS: dict[CipherMode, _Chained] = {
    CipherMode.CBC: modes.cbc_encrypt,
    CipherMode.CFB: modes.cfb_encrypt,
    CipherMode.OFB: modes.ofb_encrypt,
    CipherMode.CTR: modes.ctr_encrypt,
}

_DECRYPTORS: dict[CipherMode, _Chained] = {
    CipherMode.CBC: modes.cbc_decrypt,
    CipherMode.CFB: modes.cfb_decrypt,
    CipherMode.OFB: modes.ofb_decrypt,
    CipherMode.CTR: modes.ctr_decrypt,
}


def generate_random_vector(length: int) -> bytes:
    """Return ``length`` random bytes for use as an IV."""
    if length < 0:
        raise ValueError("vector length must not be negative")
    return secrets.token_bytes(length)


def _take(value: bytes | None, length: int, what: str) -> bytes:
    if value is None:
        raise CipherError(f"{what} is required")
    value = bytes(value)
    if len(value) < length:
        raise CipherError(f"{what} must be at least {length} bytes, got {len(value)}")
    return value[:length]


class Cipher:
    """A prepared cipher holding its key schedule and IV state."""

    def __init__(
        self,
        algorithm: CipherAlgorithm | int,
        mode: CipherMode | int,
        key: bytes | None,
        iv: bytes | None = None,
    ) -> None:
        if key is None:
            raise CipherError("a key is required")
        try:
            self.algorithm = CipherAlgorithm(algorithm)
            requested_mode = CipherMode(mode)
        except ValueError as exc:
            raise CipherError(str(exc)) from exc

        self._released = False
        self._engine: AESBlock | None = None
        self._e_iv: bytes | None = None
        self._d_iv: bytes | None = None
        self._chacha_key: bytes | None = None
        self._chacha_enc = None
        self._chacha_dec = None

        if self.algorithm in _AES_KEY_BYTES:
            self._prepare_aes(requested_mode, key, iv)
        elif self.algorithm is CipherAlgorithm.CHACHA20:
            self._prepare_chacha(key, iv)
        else:
            raise CipherError("no cipher algorithm selected")

    def _prepare_aes(self, mode: CipherMode, key: bytes, iv: bytes | None) -> None:
        self.mode = mode
        key_bytes = _take(key, _AES_KEY_BYTES[self.algorithm], "AES key")
        self._engine = AESBlock(key_bytes)
        if mode in _IV_MODES:
            length = self._engine.block_size
            start = generate_random_vector(length) if iv is None else _take(iv, length, "IV")
            self._e_iv = start
            self._d_iv = start

    def _prepare_chacha(self, key: bytes, iv: bytes | None) -> None:
        self.mode = CipherMode.NONE
        self._chacha_key = _take(key, CHACHA_KEY_BYTES, "ChaCha20 key")
        if iv is None:
            nonce = generate_random_vector(CHACHA_IV_BYTES - CHACHA_COUNTER_BYTES)
            iv = (1).to_bytes(CHACHA_COUNTER_BYTES, "little") + nonce
        self._reset_chacha(_take(iv, CHACHA_IV_BYTES, "ChaCha20 IV"))

    def _reset_chacha(self, iv: bytes) -> None:
        cipher = _StreamCipher(algorithms.ChaCha20(self._chacha_key, iv), mode=None)
        self._chacha_enc = cipher.encryptor()
        self._chacha_dec = cipher.decryptor()

    def _ensure_open(self) -> None:
        if self._released:
            raise CipherError("cipher has been released")

    def block_length(self) -> int:
        """Return the block size of the underlying algorithm in bytes."""
        self._ensure_open()
        if self.algorithm is CipherAlgorithm.CHACHA20:
            return CHACHA_BLOCK_BYTES
        return self._engine.block_size

    def update_iv(self, iv: bytes | None) -> None:
        """Replace both the encryption and decryption IV state."""
        self._ensure_open()
        if iv is None:
            raise CipherError("an IV is required")
        if self.algorithm is CipherAlgorithm.CHACHA20:
            self._reset_chacha(_take(iv, CHACHA_IV_BYTES, "ChaCha20 IV"))
            return
        if self._e_iv is None or self._d_iv is None:
            raise CipherError(f"mode {self.mode.name} does not use an IV")
        new_iv = _take(iv, self._engine.block_size, "IV")
        self._e_iv = new_iv
        self._d_iv = new_iv

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt ``data``, continuing the encryption stream."""
        self._ensure_open()
        data = bytes(data)
        if not data:
            return b""
        if self.algorithm is CipherAlgorithm.CHACHA20:
            return self._chacha_enc.update(data)
        if self.mode is CipherMode.ECB:
            return modes.ecb_encrypt(self._engine, data)
        if self.mode is CipherMode.NONE:
            raise CipherError("AES requires a mode of operation")
        try:
            out, self._e_iv = _ENCRYPTORS[self.mode](self._engine, self._e_iv, data)
        except ValueError as exc:
            raise CipherError(str(exc)) from exc
        return out

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt ``data``, continuing the decryption stream."""
        self._ensure_open()
        data = bytes(data)
        if not data:
            return b""
        if self.algorithm is CipherAlgorithm.CHACHA20:
            return self._chacha_dec.update(data)
        try:
            if self.mode is CipherMode.ECB:
                return modes.ecb_decrypt(self._engine, data)
            if self.mode is CipherMode.NONE:
                raise CipherError("AES requires a mode of operation")
            out, self._d_iv = _DECRYPTORS[self.mode](self._engine, self._d_iv, data)
        except CipherError:
            raise
        except ValueError as exc:
            raise CipherError(str(exc)) from exc
        return out

    def release(self) -> None:
        """Drop all key and IV material; the cipher can no longer be used."""
        self._engine = None
        self._e_iv = None
        self._d_iv = None
        self._chacha_key = None
        self._chacha_enc = None
        self._chacha_dec = None
        self._released = True

    def __enter__(self) -> Cipher:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


def prepare(
    algorithm: CipherAlgorithm | int,
    mode: CipherMode | int,
    key: bytes | None,
    iv: bytes | None = None,
) -> Cipher:
    """Prepare a ready-to-use cipher."""
    return Cipher(algorithm, mode, key, iv)