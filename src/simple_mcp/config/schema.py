"""Configuration schema. Defaults point at a local Ollama serving gemma3:1b."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from .constants import LLM_CHAT_DEFAULT_TIMEOUT_S


class ServerConfig(BaseModel):
    """Identity the MCP server advertises to clients."""
    name: str = Field("Demo 🚀", description="Server name shown to MCP clients.")
    version: str = "1.0.0"


class ModelConfig(BaseModel):
    """LLM endpoint and model name (OpenAI chat-completions API). Defaults: Ollama."""
    base_url: str = Field(..., description="e.g. http://localhost:11434/v1")
    model: str = Field(..., description="Model name (e.g. gemma3:1b for Ollama)")
    api_key: str = Field("", description="Bearer token; empty for local backends (no header sent).")
    temperature: float = 0.1
    top_p: float = 0.9
    max_tokens: int = 2048
    timeout_s: float = Field(default=LLM_CHAT_DEFAULT_TIMEOUT_S, description="HTTP timeout for one chat request.")


class ExtractionConfig(BaseModel):
    """How structured output is pulled out of model text."""
    fence_languages: List[str] = Field(
        default_factory=lambda: ["json"],
        description="Language tags stripped after an opening ``` fence. Empty list strips none.",
    )
    require_object: bool = Field(
        True,
        description="Unfenced text must contain a balanced {...} span; otherwise fail instead of decoding the raw text.",
    )
    string_aware: bool = Field(
        True,
        description="Ignore braces inside JSON string literals while matching. False restores plain brace counting.",
    )

    @field_validator("fence_languages")
    @classmethod
    def _strip_languages(cls, v: List[str]) -> List[str]:
        return [lang.strip() for lang in v if lang and lang.strip()]


class SimpleMCPConfig(BaseModel):
    """Top-level configuration."""
    env: str = Field("local", description="Deployment environment: local, dev, stage, prod ...")
    server: ServerConfig = Field(default_factory=ServerConfig)
    models: Dict[str, ModelConfig] = Field(default_factory=dict)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)

    @property
    def debug(self) -> bool:
        return self.env in ("local", "dev")

    def model(self, key: str = "default") -> ModelConfig:
        """Return the model profile ``key``, falling back to ``default``.

        Raises:
            KeyError: neither ``key`` nor ``default`` is configured.
        """
        cfg = self.models.get(key) or self.models.get("default")
        if cfg is None:
            raise KeyError(f"No model profile {key!r} (and no 'default') in config")
        return cfg


DEFAULT_CONFIG = SimpleMCPConfig(
    models={
        "default": ModelConfig(
            base_url="http://localhost:11434/v1",
            model="gemma3:1b",
        ),
    },
)
