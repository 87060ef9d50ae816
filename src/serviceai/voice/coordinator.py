"""Voice turn coordinator.

Runs one live voice exchange: streams microphone audio up, plays model
audio back, and turns the incremental transcripts of each turn into chat
messages in the conversation store.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from ..config import Settings
from ..conversations import ConversationStore, Message
from ..gateway import (
    AudioChunk,
    Interrupted,
    LiveConfig,
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
from ..identity import User
from ..prompts import build_live_instruction
from ..tools import ToolCall, ToolDispatcher
from .audio import AudioInput, AudioOutput
from .pcm import float32_to_pcm16
from .playback import PlaybackScheduler

logger = logging.getLogger(__name__)


class VoiceStatus(str, Enum):
    """Connection status shown while voice mode is active."""

    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"
    CLOSED = "closed"


StatusCallback = Callable[[VoiceStatus], None]


class VoiceTurnCoordinator:
    """Coordinates one voice-mode activation for a conversation.

    Hidden design decisions:
    - Transcript accumulation and when it is committed
    - Barge-in handling (interrupted playback)
    - Tool calls resolved concurrently with streaming
    - Guaranteed release of audio devices

    Failures are reported through status, never appended to the chat.
    """

    def __init__(
        self,
        store: ConversationStore,
        conversation_id: str,
        gateway: LiveGateway,
        dispatcher: ToolDispatcher,
        user: User,
        audio_input: AudioInput,
        audio_output: AudioOutput,
        settings: Settings | None = None,
        on_status_change: StatusCallback | None = None,
    ):
        """Initialize the coordinator.

        Args:
            store: Conversation store receiving committed transcripts
            conversation_id: Conversation the voice session belongs to
            gateway: Live gateway to connect through
            dispatcher: Tool dispatcher for tool calls made during the session
            user: Authenticated user (named in the system instruction)
            audio_input: Microphone
            audio_output: Speaker
            settings: Live model and voice settings
            on_status_change: Callable(status) for the connection indicator
        """
        self._store = store
        self._conversation_id = conversation_id
        self._gateway = gateway
        self._dispatcher = dispatcher
        self._user = user
        self._audio_input = audio_input
        self._audio_output = audio_output
        self._settings = settings or Settings()
        self._on_status_change = on_status_change

        self._playback = PlaybackScheduler(audio_output)
        self._stream: LiveStream | None = None
        self._status = VoiceStatus.CONNECTING
        self._muted = False
        self._closed = False
        self._input_transcript = ""
        self._output_transcript = ""
        self._mic_task: asyncio.Task | None = None
        self._tool_tasks: set[asyncio.Task] = set()

    # State

    @property
    def status(self) -> VoiceStatus:
        return self._status

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        """Muting suppresses outbound frames; the connection stays open."""
        self._muted = value

    @property
    def is_speaking(self) -> bool:
        return self._playback.is_speaking

    @property
    def playback(self) -> PlaybackScheduler:
        return self._playback

    @property
    def input_transcript(self) -> str:
        return self._input_transcript

    @property
    def output_transcript(self) -> str:
        return self._output_transcript

    def _set_status(self, status: VoiceStatus) -> None:
        if status == self._status:
            return
        logger.info("Voice session %s -> %s", self._status.value, status.value)
        self._status = status
        if self._on_status_change:
            self._on_status_change(status)

    def live_config(self) -> LiveConfig:
        return LiveConfig(
            system_instruction=build_live_instruction(self._user),
            model=self._settings.live_model,
            voice_name=self._settings.voice_name,
        )

    # Lifecycle

    async def run(self) -> None:
        """Run the voice session until the stream ends or close() is called.

        Devices are always released when this returns, even if the
        connection was never established.
        """
        try:
            await self._audio_input.open()
            self._stream = await self._gateway.connect(self.live_config())
            async for event in self._stream.events():
                await self.handle_event(event)
                if self._closed:
                    break
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not self._closed:
                logger.error("Voice session failed: %s", e)
                self._set_status(VoiceStatus.ERROR)
        finally:
            await self.close()

    async def close(self) -> None:
        """End the session and release the microphone and both audio contexts."""
        if self._closed:
            return
        self._closed = True

        if self._mic_task is not None:
            self._mic_task.cancel()
        for task in list(self._tool_tasks):
            task.cancel()
        self._playback.clear()

        try:
            if self._stream is not None:
                await self._stream.close()
        finally:
            try:
                await self._audio_input.close()
            finally:
                await self._audio_output.close()
                if self._status != VoiceStatus.ERROR:
                    self._set_status(VoiceStatus.CLOSED)

    # Events

    async def handle_event(self, event: Any) -> None:
        """Apply one live event."""
        if isinstance(event, StreamOpened):
            self._set_status(VoiceStatus.CONNECTED)
            self._start_microphone()
        elif isinstance(event, TranscriptFragment):
            if event.direction == TranscriptDirection.INPUT:
                self._input_transcript += event.text
            else:
                self._output_transcript += event.text
        elif isinstance(event, TurnComplete):
            self._commit_input()
            self._commit_output()
        elif isinstance(event, AudioChunk):
            self._playback.schedule(event.data)
        elif isinstance(event, Interrupted):
            self._playback.clear()
            self._commit_output()
        elif isinstance(event, ToolCallRequested):
            for call in event.calls:
                task = asyncio.create_task(self._resolve_tool_call(call))
                self._tool_tasks.add(task)
                task.add_done_callback(self._tool_tasks.discard)
        elif isinstance(event, StreamError):
            logger.error("Live stream error: %s", event.message)
            self._set_status(VoiceStatus.ERROR)
        elif isinstance(event, StreamClosed):
            if not self._closed:
                self._set_status(VoiceStatus.ERROR)

    def _commit_input(self) -> None:
        text = self._input_transcript.strip()
        if text:
            self._store.append_message(self._conversation_id, Message.from_user(text))
            self._input_transcript = ""

    def _commit_output(self) -> None:
        text = self._output_transcript.strip()
        if text:
            self._store.append_message(self._conversation_id, Message.from_ai(text))
            self._output_transcript = ""

    async def _resolve_tool_call(self, call: ToolCall) -> None:
        # Runs off the event loop so audio keeps flowing while the tool resolves
        result = await asyncio.to_thread(self._dispatcher.execute, call)
        if self._stream is None or self._closed:
            return
        try:
            await self._stream.send_tool_result(result)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Sending result for %s failed: %s", call.name, e)
            self._set_status(VoiceStatus.ERROR)

    # Microphone

    def _start_microphone(self) -> None:
        if self._mic_task is None:
            self._mic_task = asyncio.create_task(self._pump_microphone())

    async def _pump_microphone(self) -> None:
        try:
            async for frame in self._audio_input.frames():
                if self._closed:
                    break
                if self._muted or self._stream is None:
                    continue
                await self._stream.send_audio(float32_to_pcm16(frame))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Microphone stream failed: %s", e)
            self._set_status(VoiceStatus.ERROR)
