"""Best-effort conversation titles derived from the first real user message."""

import logging

from ..config import DEFAULT_CONVERSATION_NAME, MAX_TITLE_LENGTH
from ..conversations import is_greeting
from ..gateway import ModelGateway
from ..prompts import get_title_prompt

logger = logging.getLogger(__name__)

NO_TITLE_MARKER = "NO_TITLE"
_QUOTE_CHARS = "\"'“”‘’`"


def strip_wrapping_quotes(text: str) -> str:
    """Remove quote characters wrapping a title."""
    return text.strip().strip(_QUOTE_CHARS).strip()


def clean_title(raw: str | None) -> str | None:
    """Normalize a model-proposed title, or None if it is not usable."""
    if not raw or not raw.strip():
        return None
    title = strip_wrapping_quotes(raw.strip().splitlines()[0])
    title = title.rstrip(".!?:;").strip()
    if not title or title.upper() == NO_TITLE_MARKER:
        return None
    if title.lower() == DEFAULT_CONVERSATION_NAME.lower():
        return None
    return title[:MAX_TITLE_LENGTH].rstrip()


class TitleGenerator:
    """Asks the model for a short title. Never raises."""

    def __init__(self, gateway: ModelGateway):
        self._gateway = gateway

    async def propose_title(self, seed_text: str) -> str | None:
        """Propose a title for a conversation starting with seed_text.

        Returns:
            A cleaned title, or None for greetings, failures and empty replies
        """
        seed = seed_text.strip()
        if not seed or is_greeting(seed):
            return None

        try:
            raw = await self._gateway.generate_text(get_title_prompt(seed))
        except Exception as e:
            logger.warning("Title generation failed: %s", e)
            return None

        title = clean_title(raw)
        logger.debug("Proposed title for %r: %r", seed[:40], title)
        return title
