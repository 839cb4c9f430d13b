"""Thread-race entropy seeders, seeded generators and AES/ChaCha20 ciphers."""

__version__ = "0.1.0"

__all__ = [
    "cipher",
    "generators",
    "modes",
    "mtwister",
    "seedy",
    "seedy64",
    "stream",
]