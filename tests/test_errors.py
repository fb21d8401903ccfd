"""Tests for error codes and error wrapping."""
from __future__ import annotations

from simple_mcp.domain import (
    DecodeError,
    ErrorCode,
    ExtractionError,
    NoCandidateFound,
    SimpleMCPError,
    UnbalancedBraces,
    get_code,
    has_code,
    wrap,
)


def test_error_code_values():
    assert ErrorCode.UNKNOWN_ERROR.value == "0000"
    assert ErrorCode.INVALID_PARAMETER.value == "0400"
    assert ErrorCode.NOT_FOUND.value == "0404"
    assert ErrorCode.CONSTRAINT_ERROR.value == "0409"
    assert ErrorCode.INTERNAL_ERROR.value == "0500"
    assert ErrorCode.DATABASE_ERROR.value == "0500"


def test_new_error_without_cause():
    err = SimpleMCPError(ErrorCode.NOT_FOUND, "user missing")
    assert str(err) == "user missing"
    assert err.code == ErrorCode.NOT_FOUND


def test_new_error_with_cause_combines_messages():
    cause = ValueError("bad id")
    err = SimpleMCPError(ErrorCode.INVALID_PARAMETER, "lookup failed", cause)
    assert str(err) == "lookup failed: bad id"
    assert err.__cause__ is cause


def test_wrap_none_returns_none():
    assert wrap(None, "anything") is None


def test_wrap_foreign_error_is_internal():
    original = RuntimeError("boom")
    err = wrap(original, "failed to compile chain")
    assert isinstance(err, SimpleMCPError)
    assert err.code == ErrorCode.INTERNAL_ERROR
    assert str(err) == "failed to compile chain: boom"
    assert err.__cause__ is original


def test_wrap_preserves_existing_code():
    inner = SimpleMCPError(ErrorCode.CONSTRAINT_ERROR, "duplicate")
    err = wrap(wrap(inner, "failed to save"), "failed to ask")
    assert err.code == ErrorCode.CONSTRAINT_ERROR
    assert str(err) == "failed to ask: failed to save: duplicate"


def test_wrap_explicit_code_wins():
    inner = SimpleMCPError(ErrorCode.CONSTRAINT_ERROR, "duplicate")
    err = wrap(inner, "lookup", ErrorCode.NOT_FOUND)
    assert err.code == ErrorCode.NOT_FOUND


def test_get_code_and_has_code():
    assert get_code(KeyError("x")) == ErrorCode.UNKNOWN_ERROR
    assert get_code(None) == ErrorCode.UNKNOWN_ERROR
    err = SimpleMCPError(ErrorCode.NOT_FOUND, "nope")
    assert has_code(err, ErrorCode.NOT_FOUND)
    assert not has_code(err, ErrorCode.INTERNAL_ERROR)


def test_extraction_errors_are_simple_mcp_errors():
    for err in (NoCandidateFound("x"), UnbalancedBraces("x"), DecodeError("x")):
        assert isinstance(err, ExtractionError)
        assert has_code(err, ErrorCode.INVALID_PARAMETER)
    assert {NoCandidateFound.kind, UnbalancedBraces.kind, DecodeError.kind} == {
        "no_candidate_found", "unbalanced_braces", "decode_error",
    }
