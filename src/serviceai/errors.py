"""Error types shared across the service core.

Every error the core raises on purpose derives from ServiceAIError so the
CLI can tell them apart from programming errors.
"""


class ServiceAIError(Exception):
    """Base class for all service errors."""


class GatewayError(ServiceAIError):
    """The model gateway failed (network, credentials, malformed response)."""

    retryable: bool = False


class GatewayTimeoutError(GatewayError):
    """A model gateway call did not complete within the request timeout."""

    retryable = True


class ToolLoopExceededError(ServiceAIError):
    """The model kept requesting tools past the configured round limit."""

    def __init__(self, max_rounds: int):
        super().__init__(f"Tool loop exceeded: no final answer after {max_rounds} tool rounds")
        self.max_rounds = max_rounds


class SendInProgressError(ServiceAIError):
    """A send is already outstanding for this conversation."""

    def __init__(self, conversation_id: str):
        super().__init__(f"A message is already being sent in conversation {conversation_id}")
        self.conversation_id = conversation_id


class ConversationNotFoundError(ServiceAIError, KeyError):
    """No conversation exists with the given id."""

    def __init__(self, conversation_id: str):
        super().__init__(conversation_id)
        self.conversation_id = conversation_id

    def __str__(self) -> str:
        return f"Conversation not found: {self.conversation_id}"


class VoiceSessionError(ServiceAIError):
    """A live voice session could not be established or was dropped."""
