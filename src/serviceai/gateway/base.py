from abc import ABC, abstractmethod
from typing import Any

from ..tools import ToolResult
from .models import ChatMessage, ModelReply


class ModelSession(ABC):
    """A stateful conversation with a hosted model.

    The session remembers everything sent through it, so callers only send
    the new user prompt or the results of the tool calls it asked for.
    """

    @property
    @abstractmethod
    def session_id(self) -> str:
        """Identifier of this session (for logs)."""

    @abstractmethod
    async def send(self, message: str | list[ToolResult]) -> ModelReply:
        """Send a prompt or a batch of tool results.

        Args:
            message: User prompt text, or one result per requested tool call

        Returns:
            ModelReply carrying either final text or further tool calls

        Raises:
            GatewayError: If the provider call fails
        """

    async def close(self) -> None:
        """Release the session. Sessions hold no resources by default."""


class ModelGateway(ABC):
    """Abstract base class for model gateways.

    This module hides the design decision of which hosted model to use.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Tool declaration encoding
    - Error translation into GatewayError

    Supports async context manager protocol for proper resource cleanup:
        async with gateway:
            session = gateway.create_session(history)
            reply = await session.send("Where is my order?")
    """

    @abstractmethod
    def create_session(self, history: list[ChatMessage]) -> ModelSession:
        """Open a session seeded with prior messages.

        Args:
            history: Messages exchanged before this session existed

        Returns:
            A new ModelSession with the support tools attached
        """

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system_instruction: str | None = None,
        temperature: float = 0.2,
    ) -> str:
        """One-shot, tool-free text generation.

        Args:
            prompt: The full prompt
            system_instruction: Optional system instruction
            temperature: Sampling temperature

        Returns:
            Generated text (may be empty)

        Raises:
            GatewayError: If the provider call fails
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "ModelGateway":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
