"""Local, best-effort inference about the conversation flow.

The model is the authority on conversational state. These helpers only
feed auxiliary decisions such as whether a message is worth titling.
"""

import re

from ..config import FEEDBACK_RATING_MARKER
from .models import ConversationTurnState, Message, Sender

GREETING_PATTERN = re.compile(
    r"^(hi|hello|hey|how are you|what's up|good (morning|afternoon|evening))\s*[.?!]?$",
    re.IGNORECASE,
)


def is_greeting(text: str) -> bool:
    """True if the whole text is a bare greeting."""
    return GREETING_PATTERN.match(text.strip()) is not None


def is_rating_prompt(message: Message | None) -> bool:
    """True if the message is the assistant asking for a 1-5 rating."""
    return (
        message is not None
        and message.sender == Sender.AI
        and FEEDBACK_RATING_MARKER in message.text
    )


def next_state_after_user(state: ConversationTurnState) -> ConversationTurnState:
    """Advance the feedback flow after the user has replied."""
    if state == ConversationTurnState.AWAITING_RATING:
        return ConversationTurnState.AWAITING_DESCRIPTION
    return ConversationTurnState.NORMAL


def next_state_after_ai(state: ConversationTurnState, message: Message) -> ConversationTurnState:
    """Advance the feedback flow after an assistant reply."""
    if is_rating_prompt(message):
        return ConversationTurnState.AWAITING_RATING
    return state
