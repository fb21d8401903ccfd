"""Identifier helpers: compact time/counter IDs and random URL-safe IDs."""

from __future__ import annotations

import base64
import secrets
import time

ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

_UINT64_MASK = (1 << 64) - 1


def format_id(timestamp: int, counter: int) -> str:
    """Mix ``timestamp`` and ``counter`` and render the result in base 36.

    The mix is truncated to an unsigned 64-bit integer; a zero mix renders as
    the empty string.
    """
    x = ((timestamp << 13) ^ (timestamp >> 7) ^ counter) & _UINT64_MASK
    digits = []
    while x > 0:
        x, rem = divmod(x, 36)
        digits.append(ID_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id(counter: int) -> str:
    """Return a readable unique ID from the current nanosecond clock and ``counter``."""
    return format_id(time.time_ns(), counter)


def generate_random_id(length: int) -> str:
    """Return a cryptographically random URL-safe ID of exactly ``length`` characters."""
    if length <= 0:
        raise ValueError("length must be positive")
    raw = secrets.token_bytes(length)
    return base64.urlsafe_b64encode(raw).decode("ascii")[:length]
