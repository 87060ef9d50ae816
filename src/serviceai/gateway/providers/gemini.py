"""Google Gemini gateway implementation.

Uses the official Google GenAI SDK for async chats and live sessions.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty responses due to safety filtering or service issues.
One-shot generation includes retry logic and relaxed safety settings.
"""

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack
from typing import Any

from google import genai
from google.genai import errors, types

from ...config import DEFAULT_TEXT_MODEL, INPUT_SAMPLE_RATE
from ...errors import GatewayError, VoiceSessionError
from ...tools import TOOL_DECLARATIONS, ToolCall, ToolDeclaration, ToolResult
from ..base import ModelGateway, ModelSession
from ..live import (
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
from ..models import ChatMessage, ModelReply

logger = logging.getLogger(__name__)

DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


def to_function_declarations(
    declarations: tuple[ToolDeclaration, ...] = TOOL_DECLARATIONS
) -> list[types.FunctionDeclaration]:
    """Encode tool declarations in the Gemini schema format."""
    return [
        types.FunctionDeclaration(
            name=decl.name.value,
            description=decl.description,
            parameters=types.Schema(
                type="OBJECT",
                properties={
                    key: types.Schema(type=param.type, description=param.description)
                    for key, param in decl.parameters.items()
                },
                required=list(decl.required),
            ),
        )
        for decl in declarations
    ]


def _extract_content(response: Any) -> str:
    """Extract text content from a Gemini response, handling empty responses."""
    if response.candidates and len(response.candidates) > 0:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts)
    return ""


def _to_tool_calls(function_calls: list[types.FunctionCall] | None) -> tuple[ToolCall, ...]:
    return tuple(
        ToolCall(
            call_id=fc.id or str(uuid.uuid4()),
            name=fc.name or "",
            arguments=dict(fc.args or {}),
        )
        for fc in function_calls or []
    )


class GeminiSession(ModelSession):
    """A Gemini chat session with the support tools attached."""

    def __init__(self, chat: Any):
        self._chat = chat
        self._session_id = f"gemini_{uuid.uuid4().hex[:8]}"

    @property
    def session_id(self) -> str:
        return self._session_id

    async def send(self, message: str | list[ToolResult]) -> ModelReply:
        if isinstance(message, str):
            payload: Any = message
        else:
            payload = [
                types.Part.from_function_response(name=result.name, response=result.to_response())
                for result in message
            ]

        try:
            response = await self._chat.send_message(payload)
        except errors.APIError as e:
            raise GatewayError(f"Gemini request failed: {e}") from e

        tool_calls = _to_tool_calls(response.function_calls)
        if tool_calls:
            return ModelReply(tool_calls=tool_calls)
        return ModelReply(text=_extract_content(response))


class GeminiGateway(ModelGateway):
    """Google Gemini text gateway.

    Hidden design decisions:
    - Google GenAI client initialization
    - History and tool-result format conversion
    - Retry logic for empty one-shot responses (known Gemini issue)
    - Relaxed safety settings
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_TEXT_MODEL,
        system_instruction: str | None = None,
        max_retries: int = 3,
        **client_kwargs: Any
    ):
        """Initialize Gemini gateway.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro)
            system_instruction: Support agent instruction (defaults to the bundled prompt)
            max_retries: Max retries for empty one-shot responses (default 3)
            **client_kwargs: Additional kwargs for Client
        """
        if system_instruction is None:
            from ...prompts import get_support_prompt
            system_instruction = get_support_prompt()

        self._model = model
        self._system_instruction = system_instruction
        self._max_retries = max_retries
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _convert_history(self, history: list[ChatMessage]) -> list[types.Content]:
        return [
            types.Content(role=msg.role, parts=[types.Part(text=msg.content)])
            for msg in history
        ]

    def create_session(self, history: list[ChatMessage]) -> ModelSession:
        config = types.GenerateContentConfig(
            system_instruction=self._system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tools=[types.Tool(function_declarations=to_function_declarations())],
            automatic_function_calling=types.AutomaticFunctionCallingConfig(disable=True),
        )
        chat = self._client.aio.chats.create(
            model=self._model,
            config=config,
            history=self._convert_history(history),
        )
        session = GeminiSession(chat)
        logger.debug("Opened %s with %d history messages", session.session_id, len(history))
        return session

    async def generate_text(
        self,
        prompt: str,
        system_instruction: str | None = None,
        temperature: float = 0.2,
    ) -> str:
        # Use tool_config with mode=NONE so plain prompts never trigger function calls
        tool_config = types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(mode="NONE")
        )
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tool_config=tool_config,
        )

        content = ""
        for attempt in range(self._max_retries):
            try:
                response = await self._client.aio.models.generate_content(
                    model=self._model,
                    contents=prompt,
                    config=config,
                )
            except errors.APIError as e:
                raise GatewayError(f"Gemini request failed: {e}") from e

            content = _extract_content(response)
            if content:
                break

            # Empty response - wait briefly before retry
            if attempt < self._max_retries - 1:
                await asyncio.sleep(0.5 * (attempt + 1))

        return content

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass


class GeminiLiveStream(LiveStream):
    """A Gemini Live API session."""

    def __init__(self, stack: AsyncExitStack, session: Any):
        self._stack = stack
        self._session = session
        self._closed = False

    async def send_audio(self, pcm: bytes) -> None:
        if self._closed:
            return
        await self._session.send_realtime_input(
            audio=types.Blob(data=pcm, mime_type=f"audio/pcm;rate={INPUT_SAMPLE_RATE}")
        )

    async def send_tool_result(self, result: ToolResult) -> None:
        if self._closed:
            return
        await self._session.send_tool_response(function_responses=[
            types.FunctionResponse(id=result.call_id, name=result.name, response=result.to_response())
        ])

    async def events(self) -> AsyncIterator[Any]:
        yield StreamOpened()
        try:
            while not self._closed:
                received = 0
                # receive() ends after each completed turn, so keep re-entering it
                async for message in self._session.receive():
                    received += 1
                    for event in self._translate(message):
                        yield event
                if received == 0:
                    break
        except Exception as e:
            if not self._closed:
                logger.warning("Live stream failed: %s", e)
                yield StreamError(message=str(e) or type(e).__name__)
        yield StreamClosed()

    def _translate(self, message: types.LiveServerMessage) -> list[Any]:
        events: list[Any] = []
        content = message.server_content
        if content is not None:
            if content.input_transcription and content.input_transcription.text:
                events.append(TranscriptFragment(
                    direction=TranscriptDirection.INPUT,
                    text=content.input_transcription.text,
                ))
            if content.output_transcription and content.output_transcription.text:
                events.append(TranscriptFragment(
                    direction=TranscriptDirection.OUTPUT,
                    text=content.output_transcription.text,
                ))
            if content.turn_complete:
                events.append(TurnComplete())
            if content.model_turn and content.model_turn.parts:
                inline = content.model_turn.parts[0].inline_data
                if inline is not None and inline.data:
                    events.append(AudioChunk(data=inline.data))
            if content.interrupted:
                events.append(Interrupted())
        if message.tool_call and message.tool_call.function_calls:
            events.append(ToolCallRequested(calls=_to_tool_calls(message.tool_call.function_calls)))
        return events

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._stack.aclose()


class GeminiLiveGateway(LiveGateway):
    """Opens Gemini Live API sessions with audio replies and transcription."""

    def __init__(self, api_key: str, **client_kwargs: Any):
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    async def connect(self, config: LiveConfig) -> LiveStream:
        connect_config = types.LiveConnectConfig(
            response_modalities=[types.Modality.AUDIO],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=config.voice_name)
                )
            ),
            input_audio_transcription=types.AudioTranscriptionConfig(),
            output_audio_transcription=types.AudioTranscriptionConfig(),
            system_instruction=config.system_instruction,
            tools=[types.Tool(function_declarations=to_function_declarations(config.tools))],
        )

        stack = AsyncExitStack()
        try:
            session = await stack.enter_async_context(
                self._client.aio.live.connect(model=config.model, config=connect_config)
            )
        except Exception as e:
            await stack.aclose()
            raise VoiceSessionError(f"Failed to connect to Live API: {e}") from e

        logger.info("Live session connected (model=%s)", config.model)
        return GeminiLiveStream(stack, session)
