"""Conversation module: messages, conversations and the in-memory store.

The store is the single source of truth the client renders.
"""

from .formatting import DisplayMessage, render_message
from .heuristics import (
    is_greeting,
    is_rating_prompt,
    next_state_after_ai,
    next_state_after_user,
)
from .models import Conversation, ConversationTurnState, Message, Sender, StoreSnapshot
from .store import ConversationStore

__all__ = [
    "Conversation",
    "ConversationStore",
    "ConversationTurnState",
    "DisplayMessage",
    "Message",
    "Sender",
    "StoreSnapshot",
    "is_greeting",
    "is_rating_prompt",
    "next_state_after_ai",
    "next_state_after_user",
    "render_message",
]
