"""String validation and normalisation helpers."""

from __future__ import annotations

import re

MAX_NAME_LENGTH = 200
MIN_EMAIL_LENGTH = 3
MAX_EMAIL_LENGTH = 320  # RFC 5321

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def is_valid_email(email: str) -> bool:
    email = normalize_email(email)
    if not MIN_EMAIL_LENGTH <= len(email) <= MAX_EMAIL_LENGTH:
        return False
    return _EMAIL_RE.match(email) is not None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_name(name: str) -> str:
    """Trim ``name`` and title-case each whitespace-separated word.

    Only the first character of a word is upper-cased; the rest is lower-cased,
    so ``"o'NEIL"`` becomes ``"O'neil"``.
    """
    words = name.split()
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def is_empty_or_whitespace(s: str) -> bool:
    return not s.strip()
