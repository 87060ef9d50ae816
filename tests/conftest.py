"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import numpy as np
import pytest

from serviceai.business.in_memory import InMemoryBusinessData
from serviceai.conversations import ConversationStore
from serviceai.gateway import (
    ChatMessage,
    LiveConfig,
    LiveGateway,
    LiveStream,
    ModelGateway,
    ModelReply,
    ModelSession,
)
from serviceai.identity import User
from serviceai.tools import ToolDispatcher, ToolResult
from serviceai.voice import AudioInput, AudioOutput, PlaybackHandle

# A scripted item is a reply, an exception to raise, or a coroutine function
# awaited in place of the model call.
Scripted = ModelReply | Exception | Callable[[], Awaitable[ModelReply]]


class ScriptedSession(ModelSession):
    """Model session that answers from a shared script."""

    def __init__(self, script: list[Scripted], history: list[ChatMessage], number: int):
        self._script = script
        self.history = history
        self.sent: list[str | list[ToolResult]] = []
        self.closed = False
        self._session_id = f"scripted_{number}"

    @property
    def session_id(self) -> str:
        return self._session_id

    async def send(self, message: str | list[ToolResult]) -> ModelReply:
        self.sent.append(message)
        if not self._script:
            raise AssertionError("Scripted session ran out of replies")
        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return await item()
        return item

    async def close(self) -> None:
        self.closed = True


class ScriptedGateway(ModelGateway):
    """Model gateway whose sessions and titles follow a script."""

    def __init__(
        self,
        replies: list[Scripted] | None = None,
        titles: list[str | Exception] | None = None,
    ):
        self.replies: list[Scripted] = list(replies or [])
        self.titles: list[str | Exception] = list(titles or [])
        self.sessions: list[ScriptedSession] = []
        self.title_prompts: list[str] = []
        self.closed = False

    def create_session(self, history: list[ChatMessage]) -> ModelSession:
        session = ScriptedSession(self.replies, history, len(self.sessions) + 1)
        self.sessions.append(session)
        return session

    async def generate_text(
        self,
        prompt: str,
        system_instruction: str | None = None,
        temperature: float = 0.2,
    ) -> str:
        self.title_prompts.append(prompt)
        if not self.titles:
            return "NO_TITLE"
        item = self.titles.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class FakeLiveStream(LiveStream):
    """Live stream replaying a fixed list of events.

    If hold is given, the stream waits on it before its final event.
    """

    def __init__(self, events: list[Any], hold: asyncio.Event | None = None):
        self._events = events
        self._hold = hold
        self.sent_audio: list[bytes] = []
        self.tool_results: list[ToolResult] = []
        self.closed = False

    async def send_audio(self, pcm: bytes) -> None:
        self.sent_audio.append(pcm)

    async def send_tool_result(self, result: ToolResult) -> None:
        self.tool_results.append(result)

    async def events(self) -> AsyncIterator[Any]:
        for i, event in enumerate(self._events):
            if self._hold is not None and i == len(self._events) - 1:
                await self._hold.wait()
            await asyncio.sleep(0)
            yield event

    async def close(self) -> None:
        self.closed = True


class FakeLiveGateway(LiveGateway):
    """Live gateway returning a prepared stream, or raising."""

    def __init__(self, stream: FakeLiveStream | None = None, error: Exception | None = None):
        self.stream = stream
        self.error = error
        self.configs: list[LiveConfig] = []

    async def connect(self, config: LiveConfig) -> LiveStream:
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        assert self.stream is not None
        return self.stream


class FakeAudioInput(AudioInput):
    """Microphone yielding a fixed number of frames."""

    def __init__(self, frame_count: int = 0, open_error: Exception | None = None):
        self._frame_count = frame_count
        self._open_error = open_error
        self.opened = False
        self.closed = False
        self.exhausted = asyncio.Event()

    async def open(self) -> None:
        if self._open_error is not None:
            raise self._open_error
        self.opened = True

    async def frames(self) -> AsyncIterator[np.ndarray]:
        for _ in range(self._frame_count):
            await asyncio.sleep(0)
            yield np.zeros(1024, dtype=np.float32)
        self.exhausted.set()

    async def close(self) -> None:
        self.closed = True


class FakePlaybackHandle(PlaybackHandle):
    def __init__(self, start: float, frames: int):
        self.start = start
        self.frames = frames
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeAudioOutput(AudioOutput):
    """Speaker with a settable clock that records what was scheduled."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[FakePlaybackHandle] = []
        self.closed = False

    @property
    def current_time(self) -> float:
        return self.now

    def play(self, samples: np.ndarray, start_time: float, sample_rate: int) -> PlaybackHandle:
        handle = FakePlaybackHandle(start_time, len(samples))
        self.handles.append(handle)
        return handle

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def user():
    """Return the demo user Rahul Singh."""
    return User(id=2, full_name="Rahul Singh", email="rahul.singh@example.com")


@pytest.fixture
def business():
    """Return a freshly seeded in-memory business backend."""
    return InMemoryBusinessData()


@pytest.fixture
def dispatcher(business):
    """Return a tool dispatcher over the seeded backend."""
    return ToolDispatcher(business)


@pytest.fixture
def store():
    """Return an empty conversation store."""
    return ConversationStore()


@pytest.fixture
def gateway():
    """Return a scripted gateway with an empty script."""
    return ScriptedGateway()


@pytest.fixture
def gemini_api_key():
    """Return the Gemini API key from environment."""
    return os.getenv("GEMINI_API_KEY")
