"""Chat wiring: build the example-flow repository for a config."""

from __future__ import annotations

from simple_mcp.application.json_parsing import ExtractionPolicy
from simple_mcp.config.schema import SimpleMCPConfig
from simple_mcp.infrastructure.chat.basic_chat_repo import OllamaBasicChatRepo
from simple_mcp.infrastructure.ollama.client import OllamaChatClient


def build_chat_repo(config: SimpleMCPConfig, model_key: str = "default") -> OllamaBasicChatRepo:
    """Return an ``OllamaBasicChatRepo`` for the ``model_key`` profile of *config*.

    Raises:
        KeyError: the profile (and ``default``) is missing from ``config.models``.
    """
    model_config = config.model(model_key)
    return OllamaBasicChatRepo(
        OllamaChatClient.from_config(model_config),
        model_config,
        policy=ExtractionPolicy.from_config(config.extraction),
    )


__all__ = ["OllamaBasicChatRepo", "build_chat_repo"]
