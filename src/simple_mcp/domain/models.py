"""Domain models: ChatMessage, ToolCallRequest, LLMResponse, AnswerPayload. Pure data, no I/O."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"
TOOL = "tool"


@dataclass(frozen=True)
class ChatMessage:
    """One chat turn sent to the LLM."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


def system_message(content: str) -> ChatMessage:
    return ChatMessage(SYSTEM, content)


def user_message(content: str) -> ChatMessage:
    return ChatMessage(USER, content)


@dataclass(frozen=True)
class ToolCallRequest:
    """A single tool call requested by the LLM in a response."""
    call_id: str        # Correlates the tool result with this call in the message history
    tool_name: str
    arguments: Dict[str, Any]


@dataclass
class LLMResponse:
    """Response from the LLM after a chat turn.

    Either the LLM returns tool calls (``tool_calls`` non-empty, ``content``
    typically empty) or plain text.  ``content`` is ``None`` when the backend
    returned no text; callers treat that the same as an empty string.
    """
    content: Optional[str]
    role: str = ASSISTANT
    tool_calls: List[ToolCallRequest] = field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


class AnswerPayload(BaseModel):
    """Structured reply requested by the JSON-only prompt template."""
    answer: str
