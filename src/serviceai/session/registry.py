"""Ownership of model sessions, one per conversation."""

import logging
from collections.abc import Callable

from ..gateway import ModelSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps conversation ids to their model session.

    A session is created on the first send in a conversation and discarded
    when the conversation is deleted. No two conversations share a session.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, ModelSession] = {}

    def get(self, conversation_id: str) -> ModelSession | None:
        return self._sessions.get(conversation_id)

    def get_or_create(
        self,
        conversation_id: str,
        factory: Callable[[], ModelSession]
    ) -> ModelSession:
        """Return the conversation's session, creating it with factory if absent."""
        session = self._sessions.get(conversation_id)
        if session is None:
            session = factory()
            self._sessions[conversation_id] = session
            logger.debug("Bound %s to conversation %s", session.session_id, conversation_id)
        return session

    async def discard(self, conversation_id: str) -> bool:
        """Drop and close the conversation's session. Returns False if none existed."""
        session = self._sessions.pop(conversation_id, None)
        if session is None:
            return False
        await session.close()
        return True

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
