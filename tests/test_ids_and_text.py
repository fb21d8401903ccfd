"""Tests for ID generation and string helpers."""
from __future__ import annotations

import re

import pytest

from simple_mcp.domain.ids import ID_ALPHABET, format_id, generate_id, generate_random_id
from simple_mcp.domain.text import (
    is_empty_or_whitespace,
    is_valid_email,
    normalize_email,
    normalize_name,
)


# ---------------------------------------------------------------------------
# IDs
# ---------------------------------------------------------------------------

def test_format_id_is_base36():
    # (1 << 13) ^ (1 >> 7) ^ 0 == 8192 == 6 * 36**2 + 11 * 36 + 20
    assert format_id(1, 0) == "6bk"


def test_format_id_zero_mix_is_empty():
    assert format_id(0, 0) == ""


def test_format_id_counter_changes_id():
    assert format_id(1_700_000_000_000_000_000, 1) != format_id(1_700_000_000_000_000_000, 2)


def test_format_id_fits_in_64_bits():
    out = format_id(1_700_000_000_000_000_000, 7)
    assert set(out) <= set(ID_ALPHABET)
    assert int(out, 36) < 2 ** 64


def test_generate_id_uses_alphabet():
    out = generate_id(42)
    assert out
    assert set(out) <= set(ID_ALPHABET)


@pytest.mark.parametrize("length", [1, 5, 12, 33])
def test_generate_random_id_length(length):
    out = generate_random_id(length)
    assert len(out) == length
    assert re.fullmatch(r"[A-Za-z0-9_\-=]+", out)


def test_generate_random_id_is_random():
    assert generate_random_id(16) != generate_random_id(16)


@pytest.mark.parametrize("length", [0, -3])
def test_generate_random_id_rejects_non_positive(length):
    with pytest.raises(ValueError, match="length must be positive"):
        generate_random_id(length)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "email, ok",
    [
        ("ada@example.com", True),
        ("  Ada.Lovelace+tag@Example.ORG ", True),
        ("no-at-sign.example.com", False),
        ("a@b", False),
        ("x@y.z", False),
        ("", False),
    ],
)
def test_is_valid_email(email, ok):
    assert is_valid_email(email) is ok


def test_is_valid_email_length_limit():
    local = "a" * 320
    assert is_valid_email(f"{local}@example.com") is False


def test_normalize_email():
    assert normalize_email("  Ada@Example.COM ") == "ada@example.com"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("  ada   LOVELACE ", "Ada Lovelace"),
        ("", ""),
        ("   ", ""),
        ("élodie durand", "Élodie Durand"),
    ],
)
def test_normalize_name(name, expected):
    assert normalize_name(name) == expected


def test_is_empty_or_whitespace():
    assert is_empty_or_whitespace("")
    assert is_empty_or_whitespace(" \t\n")
    assert not is_empty_or_whitespace(" x ")
