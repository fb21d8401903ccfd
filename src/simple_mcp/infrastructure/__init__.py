"""Infrastructure layer: adapters for the LLM backend and logging."""
