"""Conversation session module.

Turns chat input into model round trips, tool resolution and stored messages.
"""

from .commands import parse_rename_command
from .events import EventKind, MessageAppendedEvent
from .manager import ConversationSessionManager, to_chat_history
from .registry import SessionRegistry
from .titles import TitleGenerator, clean_title, strip_wrapping_quotes

__all__ = [
    "ConversationSessionManager",
    "EventKind",
    "MessageAppendedEvent",
    "SessionRegistry",
    "TitleGenerator",
    "clean_title",
    "parse_rename_command",
    "strip_wrapping_quotes",
    "to_chat_history",
]
