"""Cryptographically strong random hex strings."""

import secrets

DEFAULT_BYTE_LENGTH = 16


def random_hex(byte_length: int = DEFAULT_BYTE_LENGTH) -> str:
    """
    Generate a random hex string from the OS CSPRNG.

    Args:
        byte_length: Number of random bytes. The result has twice as
            many characters.
    """
    if isinstance(byte_length, bool) or not isinstance(byte_length, int):
        raise ValueError(f"byte_length must be an integer, got {byte_length!r}")
    if byte_length < 0:
        raise ValueError(f"byte_length must be >= 0, got {byte_length}")
    return secrets.token_hex(byte_length)
