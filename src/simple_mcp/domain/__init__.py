"""Domain layer: entities, value objects and errors. No I/O."""

from .models import AnswerPayload, ChatMessage, LLMResponse, ToolCallRequest
from .errors import (
    DecodeError,
    EmptyInput,
    ErrorCode,
    ExtractionError,
    NoCandidateFound,
    SimpleMCPError,
    UnbalancedBraces,
    get_code,
    has_code,
    wrap,
)

__all__ = [
    "AnswerPayload",
    "ChatMessage",
    "LLMResponse",
    "ToolCallRequest",
    "DecodeError",
    "EmptyInput",
    "ErrorCode",
    "ExtractionError",
    "NoCandidateFound",
    "SimpleMCPError",
    "UnbalancedBraces",
    "get_code",
    "has_code",
    "wrap",
]
