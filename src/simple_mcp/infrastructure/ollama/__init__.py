from .client import OllamaChatClient

__all__ = ["OllamaChatClient"]
