"""Extract a JSON payload from model output and decode it into a target shape.

Models asked for "JSON only" still wrap their answer in markdown fences or
surround it with prose. The extractor tries, in order:

1. the first fenced block (```` ```json ... ``` ```` or a bare ```` ``` ... ``` ````);
2. the first balanced ``{...}`` span;
3. the trimmed text itself (only when ``require_object`` is off).

Brace scanning skips braces inside JSON string literals by default. The
reference behaviour (every brace counts, even quoted ones) is available with
``ExtractionPolicy(string_aware=False)``.

Decoding goes through a pydantic ``TypeAdapter`` so any type pydantic can
validate works as a target shape: a ``BaseModel`` subclass, ``dict``,
``list[int]``, a ``TypedDict`` ...

Usage::

    result = extract_and_decode(text, AnswerPayload)
    if result.ok:
        print(result.value.answer)
    else:
        print(result.error.kind, result.error)
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, FrozenSet, Generic, Optional, Tuple, TypeVar

from pydantic import TypeAdapter, ValidationError

from simple_mcp.domain import (
    DecodeError,
    EmptyInput,
    ExtractionError,
    LLMResponse,
    NoCandidateFound,
    UnbalancedBraces,
)

if TYPE_CHECKING:
    from simple_mcp.config.schema import ExtractionConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_FENCE = "fence"
SOURCE_BRACES = "braces"
SOURCE_RAW = "raw"


@dataclass(frozen=True)
class ExtractionPolicy:
    """Knobs for candidate extraction.

    ``fence_languages`` lists the tags stripped right after an opening fence
    (case-insensitive). Fences with any other tag, or none, are still accepted;
    the unknown tag just stays part of the content.
    """
    fence_languages: FrozenSet[str] = frozenset({"json"})
    require_object: bool = True
    string_aware: bool = True

    @classmethod
    def from_config(cls, cfg: "ExtractionConfig") -> "ExtractionPolicy":
        return cls(
            fence_languages=frozenset(cfg.fence_languages),
            require_object=cfg.require_object,
            string_aware=cfg.string_aware,
        )


DEFAULT_POLICY = ExtractionPolicy()


@dataclass(frozen=True)
class ExtractionResult(Generic[T]):
    """Outcome of ``extract_and_decode``: a decoded value or an ``ExtractionError``."""
    value: Optional[T] = None
    error: Optional[ExtractionError] = None
    candidate: Optional[str] = None
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the decoded value or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


@functools.lru_cache(maxsize=32)
def _fence_regex(languages: FrozenSet[str]) -> "re.Pattern[str]":
    tag = ""
    if languages:
        alternatives = "|".join(re.escape(lang) for lang in sorted(languages, key=len, reverse=True))
        tag = rf"(?:(?i:{alternatives})(?!\w))?"
    return re.compile(rf"```{tag}\s*(.*?)\s*```", re.DOTALL)


def _matching_brace(text: str, start: int, string_aware: bool) -> Optional[int]:
    """Return the index of the ``}`` closing the ``{`` at ``start``, or None."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and string_aware:
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_candidate(raw_text: str, policy: Optional[ExtractionPolicy] = None) -> Tuple[str, str]:
    """Return ``(candidate, source)`` for ``raw_text``.

    ``source`` is one of ``"fence"``, ``"braces"`` or ``"raw"``.

    Raises:
        EmptyInput: ``raw_text`` is empty or whitespace only.
        NoCandidateFound: no fence and no ``{`` (``require_object`` only).
        UnbalancedBraces: the first ``{`` is never closed (``require_object`` only).
    """
    policy = policy or DEFAULT_POLICY
    if not raw_text or not raw_text.strip():
        raise EmptyInput("empty input: nothing to extract")

    match = _fence_regex(policy.fence_languages).search(raw_text)
    if match:
        return match.group(1).strip(), SOURCE_FENCE

    start = raw_text.find("{")
    if start != -1:
        end = _matching_brace(raw_text, start, policy.string_aware)
        if end is not None:
            return raw_text[start : end + 1].strip(), SOURCE_BRACES
        if policy.require_object:
            raise UnbalancedBraces(f"unbalanced braces: '{{' at offset {start} is never closed", start=start)
    elif policy.require_object:
        raise NoCandidateFound("no JSON object found: no fenced block and no '{'")

    return raw_text.strip(), SOURCE_RAW


def clean_markdown(raw_text: str, policy: Optional[ExtractionPolicy] = None) -> str:
    """Best-effort cleaner that never fails.

    Returns the first fenced block, else the first balanced ``{...}`` span,
    else the trimmed text.
    """
    lenient = dataclasses.replace(policy or DEFAULT_POLICY, require_object=False)
    try:
        candidate, _ = extract_candidate(raw_text, lenient)
    except EmptyInput:
        return (raw_text or "").strip()
    return candidate


@functools.lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _shape_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


def decode(candidate: str, target: Any = None) -> Any:
    """Validate the JSON text ``candidate`` against ``target`` (``None`` = any JSON).

    Raises:
        DecodeError: invalid JSON, or JSON that does not fit ``target``.
    """
    shape = Any if target is None else target
    try:
        return _adapter(shape).validate_json(candidate)
    except ValidationError as e:
        raise DecodeError(
            f"candidate does not decode as {_shape_name(shape)}: {e}",
            candidate=candidate,
        ) from e


def extract_and_decode(
    raw_text: str,
    target: Any = None,
    policy: Optional[ExtractionPolicy] = None,
) -> ExtractionResult[Any]:
    """Extract the JSON candidate from ``raw_text`` and decode it into ``target``.

    Never raises for bad model output: every failure is returned in
    ``ExtractionResult.error`` so callers can tell "nothing to extract"
    (``NoCandidateFound`` / ``UnbalancedBraces``) from "extracted but invalid"
    (``DecodeError``).
    """
    try:
        candidate, source = extract_candidate(raw_text, policy)
    except ExtractionError as e:
        logger.debug("extraction failed: %s", e)
        return ExtractionResult(error=e)

    logger.debug("extracted %d-char candidate from %s", len(candidate), source)
    try:
        value = decode(candidate, target)
    except DecodeError as e:
        logger.debug("decode failed (source=%s): %s", source, e)
        return ExtractionResult(error=e, candidate=candidate, source=source)
    return ExtractionResult(value=value, candidate=candidate, source=source)


def parse_json_response(raw_text: str, target: Any = None, policy: Optional[ExtractionPolicy] = None) -> Any:
    """Raising variant of ``extract_and_decode``."""
    return extract_and_decode(raw_text, target, policy).unwrap()


@dataclass
class JSONResponseParser(Generic[T]):
    """Parser bound to a target shape, applied to raw text or LLM messages."""
    target: Any
    policy: ExtractionPolicy = field(default_factory=ExtractionPolicy)

    def parse(self, raw_text: str) -> ExtractionResult[T]:
        return extract_and_decode(raw_text, self.target, self.policy)

    def parse_message(self, message: Optional[LLMResponse]) -> Optional[T]:
        """Decode a message's content; a missing message decodes to ``None``.

        Raises:
            ExtractionError: the content holds no decodable payload.
        """
        if message is None:
            return None
        return self.parse(message.content or "").unwrap()
