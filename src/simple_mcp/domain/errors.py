"""Domain and application errors.

Every error raised by simple_mcp carries a 4-digit ``ErrorCode`` aligned with
HTTP status codes (``04xx`` client errors, ``05xx`` server errors).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """4-digit error codes. ``DATABASE_ERROR`` shares the value of ``INTERNAL_ERROR``."""

    UNKNOWN_ERROR = "0000"
    # Client errors (04xx)
    INVALID_PARAMETER = "0400"
    NOT_FOUND = "0404"
    CONSTRAINT_ERROR = "0409"
    # Server errors (05xx)
    INTERNAL_ERROR = "0500"
    DATABASE_ERROR = "0500"


class SimpleMCPError(Exception):
    """Base for simple_mcp errors: a message plus an ``ErrorCode``."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message


def wrap(
    err: Optional[BaseException],
    message: str,
    code: Optional[ErrorCode] = None,
) -> Optional[SimpleMCPError]:
    """Wrap ``err`` with context.

    The explicit ``code`` wins; otherwise the code of a wrapped
    ``SimpleMCPError`` is preserved; anything else becomes ``INTERNAL_ERROR``.
    Returns ``None`` when ``err`` is ``None`` so callers can wrap unconditionally.
    """
    if err is None:
        return None
    if code is None:
        code = err.code if isinstance(err, SimpleMCPError) else ErrorCode.INTERNAL_ERROR
    wrapped = SimpleMCPError(code, f"{message}: {err}")
    wrapped.__cause__ = err
    return wrapped


def get_code(err: Optional[BaseException]) -> ErrorCode:
    """Return the error code of ``err``, or ``UNKNOWN_ERROR`` for foreign exceptions."""
    if isinstance(err, SimpleMCPError):
        return err.code
    return ErrorCode.UNKNOWN_ERROR


def has_code(err: Optional[BaseException], code: ErrorCode) -> bool:
    return get_code(err) == code


# ---------------------------------------------------------------------------
# Structured-output extraction
# ---------------------------------------------------------------------------


class ExtractionError(SimpleMCPError):
    """Model output could not be turned into the requested structure."""

    kind = "extraction_error"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(ErrorCode.INVALID_PARAMETER, message, cause)


class NoCandidateFound(ExtractionError):
    """No fenced block and no ``{`` anywhere in the text."""

    kind = "no_candidate_found"


class EmptyInput(NoCandidateFound):
    """The text was empty or whitespace only."""

    kind = "empty_input"


class UnbalancedBraces(ExtractionError):
    """A ``{`` was found but never closed before the end of the text."""

    kind = "unbalanced_braces"

    def __init__(self, message: str, start: int = -1) -> None:
        super().__init__(message)
        self.start = start


class DecodeError(ExtractionError):
    """A candidate was extracted but is not valid JSON for the target shape."""

    kind = "decode_error"

    def __init__(self, message: str, candidate: str = "", cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.candidate = candidate
