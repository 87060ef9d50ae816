"""Display helpers for messages."""

from pydantic import BaseModel, ConfigDict

from ..config import CONTACT_SUPPORT_TOKEN
from .models import Message, Sender

TIME_LABEL_FORMAT = "%H:%M:%S"


class DisplayMessage(BaseModel):
    """What the client shows for a message."""

    model_config = ConfigDict(frozen=True)

    text: str
    sender: Sender
    show_contact_info: bool
    time_label: str


def render_message(message: Message) -> DisplayMessage:
    """Strip the contact-support token and flag the contact affordance."""
    show_contact_info = message.sender == Sender.AI and CONTACT_SUPPORT_TOKEN in message.text
    return DisplayMessage(
        text=message.text.replace(CONTACT_SUPPORT_TOKEN, "").strip(),
        sender=message.sender,
        show_contact_info=show_contact_info,
        time_label=message.timestamp.astimezone().strftime(TIME_LABEL_FORMAT),
    )
