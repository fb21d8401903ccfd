"""Configuration: schema, loading from env/file, and shared constants."""

from .schema import DEFAULT_CONFIG, ExtractionConfig, ModelConfig, ServerConfig, SimpleMCPConfig
from .loader import load_config
from .constants import LLM_CHAT_DEFAULT_TIMEOUT_S

get_config = load_config  # alias

__all__ = [
    "DEFAULT_CONFIG", "ExtractionConfig", "ModelConfig", "ServerConfig", "SimpleMCPConfig",
    "load_config", "get_config",
    "LLM_CHAT_DEFAULT_TIMEOUT_S",
]
