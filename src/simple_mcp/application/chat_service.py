"""Basic chat use case: thin layer over a ``BasicChatRepository``."""

from __future__ import annotations

from simple_mcp.application.ports import BasicChatRepository
from simple_mcp.domain import wrap


class BasicChatService:
    """Business-facing entry point for the example chat flows.

    ``ask_basic_prompt_template_chat`` runs the emotion-branch flow; the
    template flow itself is reachable through the repository.
    """

    def __init__(self, repo: BasicChatRepository) -> None:
        self._repo = repo

    async def ask_basic_chat(self, msg: str) -> str:
        try:
            return await self._repo.ask_basic_chat(msg)
        except Exception as e:
            raise wrap(e, "failed to ask") from e

    async def ask_basic_prompt_template_chat(self, msg: str) -> str:
        try:
            return await self._repo.ask_emotion_branch(msg)
        except Exception as e:
            raise wrap(e, "failed to ask") from e
