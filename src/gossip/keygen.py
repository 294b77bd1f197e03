from __future__ import annotations

import secrets
from typing import Callable

RandomSource = Callable[[int], bytes]


class RandomnessFailure(SystemExit):
    """The secure randomness source could not supply entropy. Fatal."""


def gen_key_hex(byte_len: int, *, source: RandomSource = secrets.token_bytes) -> str:
    """
    Generate a crypto-random key of byte_len bytes, hex-encoded (lower-case).

    `source` must be a cryptographically secure byte source. It is only replaced in tests.
    """
    if isinstance(byte_len, bool) or not isinstance(byte_len, int) or byte_len <= 0:
        raise ValueError(f"byte_len must be a positive integer, got: {byte_len!r}")

    try:
        raw = source(byte_len)
    except (OSError, NotImplementedError) as e:
        raise RandomnessFailure(f"Secure random source failed: {e}") from e

    if len(raw) != byte_len:
        raise RandomnessFailure(
            f"Secure random source returned {len(raw)} bytes, expected {byte_len}."
        )
    return raw.hex()
