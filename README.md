# seedycrypt

A library for gathering entropy from racing threads, stretching it with
seeded pseudo-random generators, and encrypting data with AES or ChaCha20.

## What is inside

- **`seedycrypt.seedy`**: the thread-race seeder. A `Seeder` runs three
  threads that keep mixing three shared words into each other without any
  locking. `read()` returns the XOR of the three words. `Seeder` can be
  used as a context manager, which starts and stops the threads.
  `seedy(nbytes, bits, primes)` samples a seeder at short intervals and
  keeps only samples that differ from the previous one, until it has
  `nbytes` bytes. `seedy16(nbytes)` and `seedy32(nbytes)` use 16-bit and
  32-bit words. `seed_modify(source, sink, bits, primes)` is one mixing
  round. It returns the new `(source, sink)` pair. `rotate(value, n, bits)`
  is a left rotation within a word.
- **`seedycrypt.seedy64`**: `seedy64(nbytes)` and `seed_modify_64(source,
  sink)`, the same with 64-bit words.
- **`seedycrypt.mtwister`**: `MTRand(seed)`, an MT19937 Mersenne Twister.
  Its state vector is seeded by repeated multiplication by 6069, so its
  output differs from other MT19937 implementations. It provides `seed()`,
  `next_long()` (32-bit unsigned integers) and `next_double()` (floats in
  `[0, 1]`).
- **`seedycrypt.generators`**: generators seeded from a *feeder*. A feeder
  is any callable that takes a byte count and returns exactly that many
  bytes. A feeder that returns any other length raises `ValueError`.
  - `MT32(feeder)` takes four bytes from the feeder when it is created and
    uses them to seed an `MTRand`. `next()` returns a 32-bit value.
  - `QX64(feeder)`: on the first `next()` it takes 2 MiB from the feeder
    to fill four tables of 65536 64-bit entries. Each output is the XOR of
    one entry from each table, chosen by the bytes of
    `step * 12345678912345678943`. `at(i)` returns the value for position
    `i`.
  - Both have `fill(n)`, which returns `n` bytes: whole little-endian words,
    then the leading bytes of one more word for any remainder.
  - `stdin_input(nbytes)` reads from standard input and zero-pads a short
    read. `select_feeder(argv)` returns `stdin_input` when `argv[1]` is
    `"stdin"`, and `seedy64` otherwise. When `argv` is omitted, `sys.argv`
    is used.
- **`seedycrypt.modes`**: the modes ECB, CBC, CFB, OFB and CTR, on top of
  any block engine with `block_size`, `encrypt_block` and `decrypt_block`.
  `AESBlock(key)` is such an engine for 16-, 24- or 32-byte keys. The
  chaining modes take an IV and return `(output, next_iv)`. The CTR counter
  is the first eight bytes of the IV, read as little-endian. It is advanced
  by `increment_counter`. `block_xor` XORs two byte strings of equal length.
- **`seedycrypt.cipher`**: `Cipher` and `prepare(algorithm, mode, key,
  iv)` build one object from a `CipherAlgorithm` (`AES_128`, `AES_192`,
  `AES_256`, `CHACHA20`) and a `CipherMode` (`ECB`, `CBC`, `CFB`, `OFB`,
  `CTR`; ChaCha20 ignores the mode).
  - Encryption and decryption keep separate IV state, so that each
    direction carries on from its previous call.
  - If the IV is `None`, one is generated with `generate_random_vector`.
    A generated ChaCha20 IV has its 32-bit block counter set to 1, followed
    by a 12-byte random nonce.
  - `update_iv(iv)` resets both directions.
  - `block_length()` returns 16 for AES and 64 for ChaCha20.
  - `release()` (also called on leaving a `with` block) drops the key and
    IV material.
  - Every failure is raised as `CipherError`: a missing or short key or IV,
    an AES cipher without a mode, ECB ciphertext that is not whole blocks,
    or use after release.
- **`seedycrypt.stream`**: `encrypt_stream(cipher, source, sink)` and
  `decrypt_stream(cipher, source, sink)` run a `Cipher` over binary file
  objects in 4096-byte reads. They return the number of bytes written.
  - `read_aligned` trims every read except the last one to whole cipher
    blocks. On a seekable source it seeks back over the trimmed bytes.
  - `write_all` retries short writes.

## Quick tour

```python
from seedycrypt.seedy64 import seedy64
from seedycrypt.mtwister import MTRand
from seedycrypt.generators import MT32, QX64

entropy = seedy64(32)          # raw bytes from the thread race

twister = MTRand(4357)         # reproducible
first = twister.next_long()

mt = MT32(seedy64)             # seeded from the thread race
block = mt.fill(64)

qx = QX64(seedy64)
word = qx.next()
```

Encrypting with a prepared cipher:

```python
from seedycrypt.cipher import CipherAlgorithm, CipherMode, prepare, generate_random_vector

key = generate_random_vector(16)

with prepare(CipherAlgorithm.AES_128, CipherMode.CTR, key, None) as cipher:
    sealed = cipher.encrypt(b"Hello world! This is a test message to encrypt!")
    opened = cipher.decrypt(sealed)
```

Encrypting a file:

```python
from seedycrypt.cipher import CipherAlgorithm, CipherMode, prepare
from seedycrypt.stream import encrypt_stream

with prepare(CipherAlgorithm.CHACHA20, CipherMode.NONE, key, None) as cipher:
    with open("plain.bin", "rb") as source, open("sealed.bin", "wb") as sink:
        written = encrypt_stream(cipher, source, sink)
```

## Notes

- The seeders depend on thread scheduling. Their output is not
  reproducible, and collecting it can take a while, especially with
  64-bit words.
- The cipher toolkit aims at algorithmic correctness. It has no
  protection against side-channel or timing attacks.
- ECB and CBC encryption zero-pad a trailing partial block to a whole
  block. Decryption returns the padding as well.
- CBC decryption ignores trailing bytes that do not make up a whole block.
- CFB, OFB, CTR and ChaCha20 return exactly as many bytes as they are
  given.

## What it does not do

This is a library only. It installs no command-line program.

It has no generator that writes random bytes to standard output, and it
does not keep a noise map or any other state on disk. A command that does
either has to be written on top of the feeders and generators above.