"""Named constants for values that appear in more than one place."""

from __future__ import annotations

# Default HTTP timeout for a single chat-completions call against the local
# Ollama server. ModelConfig.timeout_s overrides it per profile.
LLM_CHAT_DEFAULT_TIMEOUT_S: float = 30.0

# Dotenv file read (if present) before environment variables. Real
# environment variables take priority over values in the file.
ENV_FILE: str = ".env.local"

# Environments that log at DEBUG level by default.
DEBUG_ENVS = ("local", "dev")

# Log line layout: 2025/01/01 01:01:01.333 INFO chat_service.py:42 trid=abc message
LOG_FORMAT: str = "%(asctime)s.%(msecs)03d %(levelname)s %(filename)s:%(lineno)d trid=%(trid)s %(message)s"
LOG_DATE_FORMAT: str = "%Y/%m/%d %H:%M:%S"

# Length of the random trace ID attached to log records.
TRACE_ID_LENGTH: int = 12
