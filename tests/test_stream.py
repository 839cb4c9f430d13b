import io

import pytest

from seedycrypt.cipher import CipherAlgorithm, CipherError, CipherMode, prepare
from seedycrypt.stream import (
    STREAM_BUFFER_SIZE,
    decrypt_stream,
    encrypt_stream,
    read_aligned,
    write_all,
)

AES_KEY_128 = bytes(range(16))
AES_IV = bytes(range(100, 116))
CHACHA_KEY_256 = bytes(range(32))
CHACHA_IV = (1).to_bytes(4, "little") + bytes(range(12))


def _payload(n):
    return bytes((i * 7 + 3) % 256 for i in range(n))


class _TrickleSink:
    """Accepts at most a few bytes per write call."""

    def __init__(self, limit):
        self.limit = limit
        self.buffer = bytearray()
        self.calls = 0

    def write(self, data):
        self.calls += 1
        piece = bytes(data[: self.limit])
        self.buffer += piece
        return len(piece)


class _Pipe:
    """A non-seekable source handing out small pieces."""

    def __init__(self, data, piece):
        self._inner = io.BytesIO(data)
        self._piece = piece

    def seekable(self):
        return False

    def read(self, n):
        return self._inner.read(min(n, self._piece))


def _aes(mode):
    return prepare(CipherAlgorithm.AES_128, mode, AES_KEY_128, AES_IV)


def test_read_aligned_trims_to_block_and_rewinds():
    cipher = _aes(CipherMode.CTR)
    source = io.BytesIO(_payload(40))
    first = read_aligned(cipher, source, 20)
    assert first == _payload(40)[:16]
    assert source.tell() == 16
    second = read_aligned(cipher, source, 20)
    assert second == _payload(40)[16:32]
    assert source.tell() == 32


def test_read_aligned_returns_partial_tail_at_eof():
    cipher = _aes(CipherMode.CTR)
    source = io.BytesIO(_payload(40))
    source.seek(32)
    assert read_aligned(cipher, source, 20) == _payload(40)[32:]
    assert read_aligned(cipher, source, 20) == b""


def test_read_aligned_zero_size_and_empty_source():
    cipher = _aes(CipherMode.CTR)
    assert read_aligned(cipher, io.BytesIO(b"abc"), 0) == b""
    assert read_aligned(cipher, io.BytesIO(b""), 64) == b""


def test_read_aligned_negative_size_rejected():
    cipher = _aes(CipherMode.CTR)
    with pytest.raises(ValueError):
        read_aligned(cipher, io.BytesIO(b"abc"), -1)


def test_read_aligned_unaligned_size_on_pipe_rejected():
    cipher = _aes(CipherMode.CTR)
    with pytest.raises(ValueError):
        read_aligned(cipher, _Pipe(b"abcdef", 2), 20)


def test_read_aligned_gathers_pipe_pieces():
    cipher = _aes(CipherMode.CTR)
    data = _payload(50)
    assert read_aligned(cipher, _Pipe(data, 5), 32) == data[:32]


def test_write_all_handles_short_writes():
    sink = _TrickleSink(3)
    data = _payload(10)
    assert write_all(sink, data) == 10
    assert bytes(sink.buffer) == data
    assert sink.calls == 4


def test_write_all_empty_writes_nothing():
    sink = _TrickleSink(3)
    assert write_all(sink, b"") == 0
    assert sink.calls == 0


@pytest.mark.parametrize(
    "mode", [CipherMode.CTR, CipherMode.CFB, CipherMode.OFB]
)
def test_aes_stream_round_trip_unaligned(mode):
    data = _payload(STREAM_BUFFER_SIZE + 905)
    encrypted = io.BytesIO()
    written = encrypt_stream(_aes(mode), io.BytesIO(data), encrypted)
    assert written == len(data)
    assert encrypted.getvalue() != data

    decrypted = io.BytesIO()
    encrypted.seek(0)
    assert decrypt_stream(_aes(mode), encrypted, decrypted) == len(data)
    assert decrypted.getvalue() == data


def test_cbc_stream_round_trip_aligned():
    data = _payload(STREAM_BUFFER_SIZE + 512)
    encrypted = io.BytesIO()
    encrypt_stream(_aes(CipherMode.CBC), io.BytesIO(data), encrypted)
    assert len(encrypted.getvalue()) == len(data)
    encrypted.seek(0)
    decrypted = io.BytesIO()
    decrypt_stream(_aes(CipherMode.CBC), encrypted, decrypted)
    assert decrypted.getvalue() == data


def test_ecb_stream_pads_final_block():
    data = _payload(100)
    encrypted = io.BytesIO()
    written = encrypt_stream(_aes(CipherMode.ECB), io.BytesIO(data), encrypted)
    assert written == 112
    encrypted.seek(0)
    decrypted = io.BytesIO()
    decrypt_stream(_aes(CipherMode.ECB), encrypted, decrypted)
    result = decrypted.getvalue()
    assert result[:100] == data
    assert result[100:] == bytes(12)


def test_stream_matches_single_call_ctr():
    data = _payload(3 * STREAM_BUFFER_SIZE + 17)
    out = io.BytesIO()
    encrypt_stream(_aes(CipherMode.CTR), io.BytesIO(data), out)
    assert out.getvalue() == _aes(CipherMode.CTR).encrypt(data)


def test_chacha_stream_matches_single_call_and_round_trips():
    data = _payload(10000)

    def chacha():
        return prepare(CipherAlgorithm.CHACHA20, CipherMode.NONE, CHACHA_KEY_256, CHACHA_IV)

    out = io.BytesIO()
    encrypt_stream(chacha(), io.BytesIO(data), out)
    assert out.getvalue() == chacha().encrypt(data)

    out.seek(0)
    back = io.BytesIO()
    decrypt_stream(chacha(), out, back)
    assert back.getvalue() == data


def test_stream_from_pipe_round_trip():
    data = _payload(STREAM_BUFFER_SIZE + 300)
    encrypted = io.BytesIO()
    encrypt_stream(_aes(CipherMode.CTR), _Pipe(data, 700), encrypted)
    decrypted = io.BytesIO()
    decrypt_stream(_aes(CipherMode.CTR), _Pipe(encrypted.getvalue(), 333), decrypted)
    assert decrypted.getvalue() == data


def test_stream_with_files(tmp_path):
    data = _payload(9000)
    plain = tmp_path / "plain.bin"
    sealed = tmp_path / "sealed.bin"
    opened = tmp_path / "opened.bin"
    plain.write_bytes(data)

    with plain.open("rb") as src, sealed.open("wb") as dst:
        encrypt_stream(_aes(CipherMode.OFB), src, dst)
    with sealed.open("rb") as src, opened.open("wb") as dst:
        decrypt_stream(_aes(CipherMode.OFB), src, dst)

    assert sealed.stat().st_size == len(data)
    assert opened.read_bytes() == data


def test_empty_source_writes_nothing():
    sink = io.BytesIO()
    assert encrypt_stream(_aes(CipherMode.CTR), io.BytesIO(b""), sink) == 0
    assert sink.getvalue() == b""


def test_released_cipher_rejected():
    cipher = _aes(CipherMode.CTR)
    cipher.release()
    with pytest.raises(CipherError):
        encrypt_stream(cipher, io.BytesIO(b"data"), io.BytesIO())