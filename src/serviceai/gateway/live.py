"""Live (voice) variant of the model gateway.

A live stream is a persistent bidirectional connection: microphone audio
goes up, and transcript fragments, audio chunks, turn signals and tool
calls come down as LiveEvents.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_LIVE_MODEL, DEFAULT_VOICE_NAME
from ..tools import TOOL_DECLARATIONS, ToolCall, ToolDeclaration, ToolResult


class TranscriptDirection(str, Enum):
    """Which side of the conversation a transcript fragment belongs to."""

    INPUT = "input"  # user speech-to-text
    OUTPUT = "output"  # model speech transcript


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class StreamOpened(_Event):
    kind: Literal["opened"] = "opened"


class TranscriptFragment(_Event):
    kind: Literal["transcript"] = "transcript"
    direction: TranscriptDirection
    text: str


class AudioChunk(_Event):
    """Raw 16-bit little-endian mono PCM from the model."""

    kind: Literal["audio"] = "audio"
    data: bytes


class TurnComplete(_Event):
    kind: Literal["turn_complete"] = "turn_complete"


class Interrupted(_Event):
    kind: Literal["interrupted"] = "interrupted"


class ToolCallRequested(_Event):
    kind: Literal["tool_call"] = "tool_call"
    calls: tuple[ToolCall, ...]


class StreamClosed(_Event):
    kind: Literal["closed"] = "closed"


class StreamError(_Event):
    kind: Literal["error"] = "error"
    message: str


LiveEvent = Annotated[
    Union[
        StreamOpened,
        TranscriptFragment,
        AudioChunk,
        TurnComplete,
        Interrupted,
        ToolCallRequested,
        StreamClosed,
        StreamError,
    ],
    Field(discriminator="kind"),
]


class LiveConfig(BaseModel):
    """Connection settings for a live stream."""

    model_config = ConfigDict(frozen=True)

    system_instruction: str
    tools: tuple[ToolDeclaration, ...] = TOOL_DECLARATIONS
    model: str = DEFAULT_LIVE_MODEL
    voice_name: str = DEFAULT_VOICE_NAME


class LiveStream(ABC):
    """An open live connection."""

    @abstractmethod
    async def send_audio(self, pcm: bytes) -> None:
        """Send one frame of 16 kHz PCM16 microphone audio."""

    @abstractmethod
    async def send_tool_result(self, result: ToolResult) -> None:
        """Answer one tool call."""

    @abstractmethod
    def events(self) -> AsyncIterator[Any]:
        """Iterate LiveEvents until the stream closes.

        The last event is always StreamClosed, possibly preceded by StreamError.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""


class LiveGateway(ABC):
    """Opens live streams to a hosted model."""

    @abstractmethod
    async def connect(self, config: LiveConfig) -> LiveStream:
        """Open a live stream.

        Raises:
            VoiceSessionError: If the connection cannot be established
        """
