"""Model Session Gateway module.

Hides which hosted model answers, how sessions keep their history, and how
tool calls and live audio travel over the wire.
"""

from .base import ModelGateway, ModelSession
from .factory import create_gateway, create_live_gateway
from .live import (
    AudioChunk,
    Interrupted,
    LiveConfig,
    LiveEvent,
    LiveGateway,
    LiveStream,
    StreamClosed,
    StreamError,
    StreamOpened,
    ToolCallRequested,
    TranscriptDirection,
    TranscriptFragment,
    TurnComplete,
)
from .models import ChatMessage, ModelReply

__all__ = [
    "AudioChunk",
    "ChatMessage",
    "Interrupted",
    "LiveConfig",
    "LiveEvent",
    "LiveGateway",
    "LiveStream",
    "ModelGateway",
    "ModelReply",
    "ModelSession",
    "StreamClosed",
    "StreamError",
    "StreamOpened",
    "ToolCallRequested",
    "TranscriptDirection",
    "TranscriptFragment",
    "TurnComplete",
    "create_gateway",
    "create_live_gateway",
]
