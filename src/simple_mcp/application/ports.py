"""Ports (abstract interfaces) used by the application layer.

Each port is a ``Protocol`` so the application depends only on the *shape* of the
collaborator, not on a concrete implementation.  Infrastructure adapters must satisfy
these shapes; the application never imports from infrastructure.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from simple_mcp.domain import LLMResponse


class ChatClient(Protocol):
    """LLM chat interface (OpenAI chat-completions API).

    ``OllamaChatClient`` is the default implementation; any backend exposing
    ``POST /v1/chat/completions`` with the same response shape works.  When
    ``tools`` is given the response may carry ``tool_calls`` instead of text.
    """

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        model: str,
        *,
        tools: Optional[List[Dict[str, Any]]] = None,
        temperature: float = 0.1,
        top_p: float = 0.9,
        max_tokens: int = 2048,
    ) -> LLMResponse: ...


class BasicChatRepository(Protocol):
    """Example chat flows against the LLM. Each returns the final answer text."""

    async def ask_basic_chat(self, msg: str) -> str: ...

    async def ask_prompt_template_chat(self, msg: str) -> str: ...

    async def ask_parallel_chat(self, msg: str) -> str: ...

    async def ask_branch_chat(self, msg: str) -> str: ...

    async def ask_with_tool(self, msg: str) -> str: ...

    async def ask_with_tool_and_summary(self, msg: str) -> str: ...

    async def ask_with_graph(self, msg: str) -> str: ...

    async def ask_emotion_branch(self, msg: str) -> str: ...
