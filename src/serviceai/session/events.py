from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..conversations import Message


class EventKind(str, Enum):
    """How a send concluded."""

    REPLY = "reply"
    COMMAND = "command"
    ERROR = "error"


class MessageAppendedEvent(BaseModel):
    """The message a send appended to its conversation.

    Attributes:
        conversation_id: Conversation the message was appended to
        message: The appended ai message (reply, acknowledgment or apology)
        kind: Whether this was a model reply, a local command or an error
        renamed_to: New conversation name, if the send renamed it
        error: Description of the failure for ERROR events
    """

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    message: Message
    kind: EventKind
    renamed_to: str | None = None
    error: str | None = None
