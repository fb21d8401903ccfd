"""OpenAI-compatible HTTP chat client.

Default config points at Ollama (``http://localhost:11434/v1``) but any backend
exposing the same ``POST /v1/chat/completions`` endpoint works.

Supports native function calling: when ``tools`` is provided the response is
parsed for ``tool_calls`` and returned as ``LLMResponse`` with structured
``ToolCallRequest`` objects, rather than raw text.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from simple_mcp.config.constants import LLM_CHAT_DEFAULT_TIMEOUT_S
from simple_mcp.config.schema import ModelConfig
from simple_mcp.domain import ErrorCode, LLMResponse, SimpleMCPError, ToolCallRequest

logger = logging.getLogger(__name__)


class OllamaChatClient:
    """OpenAI-compatible HTTP client with native tool-calling support.

    Sends ``POST {base_url}/chat/completions`` using the standard OpenAI
    request shape.  Falls back to a minimal payload (model + messages + stream,
    plus tools when given) when the server returns 400, which some older Ollama
    versions do for unknown top-level parameters.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout_s: float = LLM_CHAT_DEFAULT_TIMEOUT_S,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout_s

    @classmethod
    def from_config(cls, model_config: ModelConfig) -> "OllamaChatClient":
        return cls(
            base_url=model_config.base_url,
            api_key=model_config.api_key,
            timeout_s=model_config.timeout_s,
        )

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        model: str,
        *,
        tools: Optional[List[Dict[str, Any]]] = None,
        temperature: float = 0.1,
        top_p: float = 0.9,
        max_tokens: int = 2048,
    ) -> LLMResponse:
        url = f"{self._base_url}/chat/completions"
        headers: Dict[str, str] = {}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "stream": False,
            "temperature": temperature,
            "top_p": top_p,
            "max_tokens": max_tokens,
        }
        if tools:
            payload["tools"] = tools

        logger.debug("POST %s model=%s messages=%d tools=%d", url, model, len(messages), len(tools or []))
        timeout = httpx.Timeout(self._timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.post(url, headers=headers, json=payload)
            if r.status_code == 400:
                err_msg = _extract_error_message(r)
                _check_tool_support(err_msg, model)
                logger.warning("Chat request rejected (400: %s); retrying with minimal payload", err_msg)
                payload_minimal: Dict[str, Any] = {
                    "model": model,
                    "messages": messages,
                    "stream": False,
                }
                if tools:
                    payload_minimal["tools"] = tools
                r = await client.post(url, headers=headers, json=payload_minimal)
                if r.status_code == 400:
                    _check_tool_support(_extract_error_message(r), model)
            r.raise_for_status()
            try:
                data = r.json()
            except ValueError as e:
                raise SimpleMCPError(ErrorCode.INTERNAL_ERROR, "malformed chat response", e) from e
        return parse_chat_response(data)


def _check_tool_support(err_msg: str, model: str) -> None:
    if "does not support tools" in err_msg.lower():
        raise SimpleMCPError(
            ErrorCode.INVALID_PARAMETER,
            f"model {model!r} does not support tool calling; "
            "use a tool-capable model such as llama3.1:8b or qwen2.5:7b",
        )


def _extract_error_message(response: "httpx.Response") -> str:
    """Extract a human-readable error string from a (likely 4xx) HTTP response."""
    try:
        body = response.json()
        if isinstance(body, dict):
            err = body.get("error") or {}
            if isinstance(err, dict):
                return err.get("message") or ""
            if isinstance(err, str):
                return err
    except ValueError:
        pass
    return response.text or ""


def parse_chat_response(data: Any) -> LLMResponse:
    """Parse an OpenAI-format chat completions response dict into ``LLMResponse``.

    Raises:
        SimpleMCPError: ``INTERNAL_ERROR`` when ``data`` has no first choice
            with a ``message`` object.
    """
    try:
        message = data["choices"][0]["message"]
        if not isinstance(message, dict):
            raise TypeError(f"message is {type(message).__name__}, not an object")
    except (KeyError, IndexError, TypeError) as e:
        raise SimpleMCPError(ErrorCode.INTERNAL_ERROR, "malformed chat response", e) from e
    content: Optional[str] = message.get("content")

    tool_calls: List[ToolCallRequest] = []
    for i, tc in enumerate(message.get("tool_calls") or []):
        call_id: str = tc.get("id") or f"call_{i}"
        fn = tc.get("function") or {}
        name: str = fn.get("name") or ""
        raw_args = fn.get("arguments") or "{}"
        if isinstance(raw_args, dict):
            # Ollama's native endpoint sends arguments as an object
            arguments: Dict[str, Any] = raw_args
        else:
            try:
                arguments = json.loads(raw_args)
            except json.JSONDecodeError:
                arguments = {"_raw": raw_args}
        tool_calls.append(ToolCallRequest(call_id=call_id, tool_name=name, arguments=arguments))

    return LLMResponse(content=content, role=message.get("role") or "assistant", tool_calls=tool_calls)
