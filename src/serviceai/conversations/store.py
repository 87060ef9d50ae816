"""In-memory conversation store.

Every mutation builds a new StoreSnapshot and swaps it in under a lock, so
readers always see a whole, consistent snapshot and writes are applied one
at a time in the order they were requested.
"""

import logging
import threading
from collections.abc import Callable

from ..config import FEEDBACK_RATING_PROMPT
from ..errors import ConversationNotFoundError
from .models import Conversation, ConversationTurnState, Message, Sender, StoreSnapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[StoreSnapshot], None]


class ConversationStore:
    """Ordered collection of conversations with exactly one active (or none).

    Data is lost when the process exits.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._snapshot = StoreSnapshot()
        self._listeners: list[SnapshotListener] = []

    # Reads

    def snapshot(self) -> StoreSnapshot:
        """Current snapshot; never changes after it is returned."""
        return self._snapshot

    def get(self, conversation_id: str) -> Conversation | None:
        return self._snapshot.get(conversation_id)

    def require(self, conversation_id: str) -> Conversation:
        conversation = self._snapshot.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    @property
    def active_id(self) -> str | None:
        return self._snapshot.active_id

    @property
    def active(self) -> Conversation | None:
        return self._snapshot.active

    def __len__(self) -> int:
        return len(self._snapshot.conversations)

    def list_conversations(self, query: str | None = None) -> list[Conversation]:
        """Conversations filtered by name, pinned ones first.

        Args:
            query: Case-insensitive substring to match against names

        Returns:
            Matching conversations; order within pinned/unpinned is preserved
        """
        conversations = self._snapshot.conversations
        if query:
            needle = query.strip().lower()
            conversations = tuple(c for c in conversations if needle in c.name.lower())
        return sorted(conversations, key=lambda c: not c.is_pinned)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call listener with every new snapshot. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    # Writes

    def create_conversation(self, greeting_text: str) -> Conversation:
        """Create a conversation seeded with a greeting; it becomes active."""
        conversation = Conversation(messages=(Message.from_ai(greeting_text),))
        with self._lock:
            self._commit(StoreSnapshot(
                conversations=(conversation,) + self._snapshot.conversations,
                active_id=conversation.id,
            ))
        logger.debug("Created conversation %s", conversation.id)
        return conversation

    def delete_conversation(self, conversation_id: str) -> bool:
        """Delete a conversation. Returns False if it did not exist."""
        with self._lock:
            current = self._snapshot
            remaining = tuple(c for c in current.conversations if c.id != conversation_id)
            if len(remaining) == len(current.conversations):
                return False

            active_id = current.active_id
            if active_id == conversation_id:
                active_id = remaining[0].id if remaining else None
            self._commit(StoreSnapshot(conversations=remaining, active_id=active_id))
        logger.debug("Deleted conversation %s", conversation_id)
        return True

    def rename_conversation(self, conversation_id: str, new_name: str) -> Conversation:
        name = new_name.strip()
        if not name:
            raise ValueError("Conversation name cannot be empty")
        return self._update(conversation_id, lambda c: c.model_copy(update={"name": name}))

    def toggle_pin(self, conversation_id: str) -> Conversation:
        return self._update(conversation_id, lambda c: c.model_copy(update={"is_pinned": not c.is_pinned}))

    def select_conversation(self, conversation_id: str) -> Conversation:
        """Make a conversation active and mark it read."""
        with self._lock:
            conversation = self.require(conversation_id).model_copy(update={"is_unread": False})
            self._commit(StoreSnapshot(
                conversations=self._replace(conversation),
                active_id=conversation_id,
            ))
        return conversation

    def append_message(self, conversation_id: str, message: Message) -> Conversation:
        """Append a message.

        Appending to the active conversation clears its unread flag. An ai
        message appended to an inactive conversation marks it unread. User
        messages never mark a conversation unread.
        """
        with self._lock:
            conversation = self.require(conversation_id)
            if conversation_id == self._snapshot.active_id:
                is_unread = False
            elif message.sender == Sender.AI:
                is_unread = True
            else:
                is_unread = conversation.is_unread
            updated = conversation.with_message(message, is_unread=is_unread)
            self._commit(StoreSnapshot(
                conversations=self._replace(updated),
                active_id=self._snapshot.active_id,
            ))
        return updated

    def set_turn_state(self, conversation_id: str, state: ConversationTurnState) -> Conversation:
        return self._update(conversation_id, lambda c: c.model_copy(update={"turn_state": state}))

    def start_feedback(self, conversation_id: str) -> Conversation:
        """Ask for a rating in the conversation and await the answer."""
        with self._lock:
            self.append_message(conversation_id, Message.from_ai(FEEDBACK_RATING_PROMPT))
            return self.set_turn_state(conversation_id, ConversationTurnState.AWAITING_RATING)

    # Internals

    def _update(
        self,
        conversation_id: str,
        change: Callable[[Conversation], Conversation]
    ) -> Conversation:
        with self._lock:
            updated = change(self.require(conversation_id))
            self._commit(StoreSnapshot(
                conversations=self._replace(updated),
                active_id=self._snapshot.active_id,
            ))
        return updated

    def _replace(self, updated: Conversation) -> tuple[Conversation, ...]:
        return tuple(
            updated if c.id == updated.id else c
            for c in self._snapshot.conversations
        )

    def _commit(self, snapshot: StoreSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
