"""Data models for conversations.

All models are frozen: a change to a conversation produces a new instance,
and a change to the store produces a new StoreSnapshot.
"""

import itertools
import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_CONVERSATION_NAME

_message_counter = itertools.count(1)


class Sender(str, Enum):
    """Who a message is attributed to."""

    USER = "user"
    AI = "ai"


class ConversationTurnState(str, Enum):
    """Where the conversation is in the feedback flow.

    The model decides the real conversational flow; this is the client's
    best-effort view of it, used for titling and display only.
    """

    NORMAL = "normal"
    AWAITING_RATING = "awaiting_rating"
    AWAITING_DESCRIPTION = "awaiting_description"


def _new_message_id(sender: Sender) -> str:
    return f"msg_{sender.value}_{next(_message_counter):06d}_{uuid.uuid4().hex[:8]}"


class Message(BaseModel):
    """A single chat message. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    sender: Sender
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, text: str, sender: Sender) -> "Message":
        """Create a message with a fresh, creation-ordered id."""
        return cls(id=_new_message_id(sender), text=text, sender=sender)

    @classmethod
    def from_user(cls, text: str) -> "Message":
        return cls.create(text, Sender.USER)

    @classmethod
    def from_ai(cls, text: str) -> "Message":
        return cls.create(text, Sender.AI)


class Conversation(BaseModel):
    """One ongoing exchange with a name, an ordered message log and display flags."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: f"chat_{uuid.uuid4().hex[:12]}")
    name: str = DEFAULT_CONVERSATION_NAME
    messages: tuple[Message, ...] = Field(min_length=1)
    is_pinned: bool = False
    is_unread: bool = False
    turn_state: ConversationTurnState = ConversationTurnState.NORMAL

    @property
    def last_message(self) -> Message:
        return self.messages[-1]

    @property
    def has_default_name(self) -> bool:
        return self.name == DEFAULT_CONVERSATION_NAME

    def history(self) -> tuple[Message, ...]:
        """Messages after the initial greeting."""
        return self.messages[1:]

    def with_message(self, message: Message, *, is_unread: bool) -> "Conversation":
        return self.model_copy(update={
            "messages": self.messages + (message,),
            "is_unread": is_unread,
        })


class StoreSnapshot(BaseModel):
    """A consistent view of every conversation and which one is active."""

    model_config = ConfigDict(frozen=True)

    conversations: tuple[Conversation, ...] = ()
    active_id: str | None = None

    def get(self, conversation_id: str) -> Conversation | None:
        for conversation in self.conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    @property
    def active(self) -> Conversation | None:
        if self.active_id is None:
            return None
        return self.get(self.active_id)
