"""Conversation session manager.

Owns one model session per conversation and turns a user's chat input into
a durable exchange in the conversation store:

    Idle -> Sending -> (ToolResolution -> Sending)* -> Idle

Sends are serialized per conversation; concurrent sends to different
conversations are independent.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from ..config import (
    APOLOGY_TEXT,
    DEFAULT_CONVERSATION_NAME,
    GREETING_TEMPLATE,
    RENAME_ACK_TEMPLATE,
    Settings,
)
from ..conversations import (
    Conversation,
    ConversationStore,
    Message,
    Sender,
    is_greeting,
    is_rating_prompt,
    next_state_after_ai,
    next_state_after_user,
)
from ..conversations.models import ConversationTurnState
from ..errors import (
    GatewayError,
    GatewayTimeoutError,
    SendInProgressError,
    ToolLoopExceededError,
)
from ..gateway import ChatMessage, ModelGateway, ModelReply, ModelSession
from ..identity import User
from ..prompts import build_identity_envelope
from ..tools import ToolDispatcher, ToolResult
from .commands import parse_rename_command
from .events import EventKind, MessageAppendedEvent
from .registry import SessionRegistry
from .titles import TitleGenerator, strip_wrapping_quotes

logger = logging.getLogger(__name__)

BusyCallback = Callable[[str, bool], None]


def to_chat_history(messages: tuple[Message, ...]) -> list[ChatMessage]:
    """Convert stored messages into gateway history."""
    return [
        ChatMessage(role="user" if m.sender == Sender.USER else "model", content=m.text)
        for m in messages
    ]


class ConversationSessionManager:
    """Mediates between the user, the model gateway and the conversation store.

    Hidden design decisions:
    - When a model session is opened and what history seeds it
    - The identity envelope around each prompt
    - Tool-call resolution loop and its round limit
    - Title fan-out and when a proposed title is applied
    - Failure handling (one apology message, no retries)
    """

    def __init__(
        self,
        store: ConversationStore,
        gateway: ModelGateway,
        dispatcher: ToolDispatcher,
        user: User,
        registry: SessionRegistry | None = None,
        title_generator: TitleGenerator | None = None,
        settings: Settings | None = None,
        on_busy_change: BusyCallback | None = None,
    ):
        """Initialize the session manager.

        Args:
            store: Conversation store to read from and append to
            gateway: Model gateway used to open sessions
            dispatcher: Tool dispatcher for model tool calls
            user: Authenticated user whose identity is sent with each prompt
            registry: Session registry (a private one is created if omitted)
            title_generator: Title generator (defaults to one on the same gateway)
            settings: Round limit and timeout settings
            on_busy_change: Callable(conversation_id, busy) for loading indicators
        """
        self._store = store
        self._gateway = gateway
        self._dispatcher = dispatcher
        self._user = user
        self._registry = registry or SessionRegistry()
        self._titles = title_generator or TitleGenerator(gateway)
        self._settings = settings or Settings()
        self._on_busy_change = on_busy_change
        self._in_flight: set[str] = set()
        self._debug_callback: Any | None = None

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    @property
    def user(self) -> User:
        return self._user

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._dispatcher.set_debug_callback(callback)

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def is_busy(self, conversation_id: str) -> bool:
        """True while a send is outstanding for the conversation."""
        return conversation_id in self._in_flight

    def _set_busy(self, conversation_id: str, busy: bool) -> None:
        if busy:
            self._in_flight.add(conversation_id)
        else:
            self._in_flight.discard(conversation_id)
        if self._on_busy_change:
            self._on_busy_change(conversation_id, busy)

    # Conversation lifecycle

    def new_conversation(self) -> Conversation:
        """Create a conversation greeting the user by first name."""
        return self._store.create_conversation(
            GREETING_TEMPLATE.format(first_name=self._user.first_name)
        )

    async def delete_conversation(self, conversation_id: str) -> bool:
        """Delete a conversation together with its model session."""
        await self._registry.discard(conversation_id)
        return self._store.delete_conversation(conversation_id)

    # Sending

    async def send_user_message(self, conversation_id: str, raw_text: str) -> MessageAppendedEvent:
        """Handle one chat input from the user.

        Args:
            conversation_id: Target conversation
            raw_text: What the user typed

        Returns:
            Event describing the ai message that was appended

        Raises:
            ValueError: If the text is blank
            ConversationNotFoundError: If the conversation does not exist
            SendInProgressError: If a send is already outstanding for it
        """
        text = raw_text.strip()
        if not text:
            raise ValueError("Cannot send an empty message")
        conversation = self._store.require(conversation_id)
        if conversation_id in self._in_flight:
            raise SendInProgressError(conversation_id)

        self._set_busy(conversation_id, True)
        try:
            new_name = parse_rename_command(text)
            if new_name is not None:
                return self._apply_rename(conversation_id, new_name)
            return await self._send(conversation, text)
        finally:
            self._set_busy(conversation_id, False)

    def _apply_rename(self, conversation_id: str, new_name: str) -> MessageAppendedEvent:
        self._store.rename_conversation(conversation_id, new_name)
        ack = Message.from_ai(RENAME_ACK_TEMPLATE.format(name=new_name))
        self._store.append_message(conversation_id, ack)
        logger.info("Renamed conversation %s to %r", conversation_id, new_name)
        return MessageAppendedEvent(
            conversation_id=conversation_id,
            message=ack,
            kind=EventKind.COMMAND,
            renamed_to=new_name,
        )

    def _wants_title(self, conversation: Conversation, text: str) -> bool:
        return (
            conversation.has_default_name
            and not is_greeting(text)
            and not is_rating_prompt(conversation.last_message)
            and conversation.turn_state == ConversationTurnState.NORMAL
        )

    async def _send(self, conversation: Conversation, text: str) -> MessageAppendedEvent:
        conversation_id = conversation.id

        self._store.append_message(conversation_id, Message.from_user(text))
        turn_state = next_state_after_user(conversation.turn_state)
        self._store.set_turn_state(conversation_id, turn_state)

        title_task: asyncio.Task | None = None
        if self._wants_title(conversation, text):
            title_task = asyncio.create_task(self._titles.propose_title(text))

        try:
            reply_text = await self._resolve_reply(conversation, text)
        except Exception as e:
            if title_task is not None:
                title_task.cancel()
            return self._append_apology(conversation_id, e)

        title = await self._await_title(title_task)

        ai_message = Message.from_ai(reply_text)
        self._store.append_message(conversation_id, ai_message)
        self._store.set_turn_state(conversation_id, next_state_after_ai(turn_state, ai_message))

        renamed_to = self._apply_title(conversation_id, title)
        return MessageAppendedEvent(
            conversation_id=conversation_id,
            message=ai_message,
            kind=EventKind.REPLY,
            renamed_to=renamed_to,
        )

    async def _resolve_reply(self, conversation: Conversation, text: str) -> str:
        history = to_chat_history(conversation.history())
        session = self._registry.get_or_create(
            conversation.id,
            lambda: self._gateway.create_session(history),
        )

        reply = await self._call(session, build_identity_envelope(self._user, text))
        rounds = 0
        while reply.is_tool_request:
            if rounds >= self._settings.max_tool_rounds:
                raise ToolLoopExceededError(self._settings.max_tool_rounds)
            rounds += 1
            names = ", ".join(call.name for call in reply.tool_calls)
            logger.info("Tool round %d for %s: %s", rounds, conversation.id, names)
            self._debug("info", "Session", f"Tool round {rounds}: {names}")

            results = self._dispatcher.execute_all(list(reply.tool_calls))
            reply = await self._call(session, results)

        if not reply.text.strip():
            raise GatewayError("Model returned an empty response")
        return reply.text

    async def _call(self, session: ModelSession, message: str | list[ToolResult]) -> ModelReply:
        try:
            return await asyncio.wait_for(session.send(message), timeout=self._settings.request_timeout)
        except asyncio.TimeoutError as e:
            raise GatewayTimeoutError(
                f"No response from the model within {self._settings.request_timeout:g}s"
            ) from e

    async def _await_title(self, title_task: asyncio.Task | None) -> str | None:
        if title_task is None:
            return None
        try:
            return await asyncio.wait_for(title_task, timeout=self._settings.request_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Title proposal timed out after %gs", self._settings.request_timeout
            )
            return None
        except Exception as e:
            logger.warning("Title proposal failed: %s", e)
            return None

    def _apply_title(self, conversation_id: str, title: str | None) -> str | None:
        if not title:
            return None
        name = strip_wrapping_quotes(title)
        if not name or name.lower() == DEFAULT_CONVERSATION_NAME.lower():
            return None
        # The user may have renamed the conversation while the reply was in flight
        current = self._store.get(conversation_id)
        if current is None or not current.has_default_name:
            return None
        self._store.rename_conversation(conversation_id, name)
        logger.info("Titled conversation %s %r", conversation_id, name)
        return name

    def _append_apology(self, conversation_id: str, error: Exception) -> MessageAppendedEvent:
        logger.error("Send failed in conversation %s: %s", conversation_id, error)
        self._debug("error", "Session", str(error))
        apology = Message.from_ai(APOLOGY_TEXT)
        self._store.append_message(conversation_id, apology)
        return MessageAppendedEvent(
            conversation_id=conversation_id,
            message=apology,
            kind=EventKind.ERROR,
            error=str(error),
        )
