"""Encrypting and decrypting whole streams with a prepared cipher.

Reads are kept aligned to the cipher's block size until the end of the
input, so only the final chunk can be a partial block.
"""

from __future__ import annotations

import io
from typing import BinaryIO

from .cipher import Cipher

STREAM_BUFFER_SIZE = 1 << 12
MIN_READ_SIZE = 1 << 4


def _read_up_to(source: BinaryIO, size: int) -> bytes:
    """Read until ``size`` bytes are gathered or the source is exhausted."""
    data = bytearray()
    while len(data) < size:
        chunk = source.read(size - len(data))
        if chunk is None:
            # Non-blocking source with nothing ready yet.
            continue
        if not chunk:
            break
        data += chunk
    return bytes(data)


def _at_end(source: BinaryIO) -> bool:
    current = source.tell()
    end = source.seek(0, io.SEEK_END)
    source.seek(current, io.SEEK_SET)
    return current >= end


def read_aligned(cipher: Cipher, source: BinaryIO, size: int) -> bytes:
    """Read at most ``size`` bytes, trimmed to whole cipher blocks unless at EOF.

    On a seekable source the trimmed tail is left unread by seeking back.
    A non-seekable source needs ``size`` to be a whole number of blocks.
    """
    if size < 0:
        raise ValueError("read size must not be negative")
    if size == 0:
        return b""

    block = cipher.block_length()
    seekable = source.seekable()
    if not seekable and size % block:
        raise ValueError(
            f"read size {size} is not a multiple of the {block}-byte block "
            "and the source cannot seek back"
        )

    data = _read_up_to(source, size)
    if not data or not seekable or _at_end(source):
        return data

    remainder = len(data) % block
    if remainder:
        source.seek(source.tell() - remainder, io.SEEK_SET)
        data = data[:-remainder]
    return data


def write_all(sink: BinaryIO, data: bytes) -> int:
    """Write all of ``data``, retrying short writes; return the byte count."""
    view = memoryview(bytes(data))
    written = 0
    while written < len(view):
        count = sink.write(view[written:])
        if count is None:
            # Non-blocking sink that could not accept anything yet.
            continue
        if count < 0:
            raise OSError("write reported a negative byte count")
        written += count
    return written


def _transform(cipher: Cipher, source: BinaryIO, sink: BinaryIO, operation) -> int:
    total = 0
    while True:
        chunk = read_aligned(cipher, source, STREAM_BUFFER_SIZE)
        if not chunk:
            return total
        total += write_all(sink, operation(chunk))


def encrypt_stream(cipher: Cipher, source: BinaryIO, sink: BinaryIO) -> int:
    """Encrypt everything read from ``source`` into ``sink``; return bytes written."""
    return _transform(cipher, source, sink, cipher.encrypt)


def decrypt_stream(cipher: Cipher, source: BinaryIO, sink: BinaryIO) -> int:
    """Decrypt everything read from ``source`` into ``sink``; return bytes written."""
    return _transform(cipher, source, sink, cipher.decrypt)