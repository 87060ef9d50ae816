"""Configuration constants and environment-driven settings.

Centralizes magic strings and tunables for the service core.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Conversation defaults
DEFAULT_CONVERSATION_NAME = "New Chat"
GREETING_TEMPLATE = "Hey {first_name}, how can I help you? 😊"

# Fixed assistant texts
APOLOGY_TEXT = "Sorry, I'm having trouble connecting right now. Please try again later. 😅"
RENAME_ACK_TEMPLATE = 'Chat renamed to "{name}".'
FEEDBACK_RATING_PROMPT = (
    "I'd be happy to help with your feedback. "
    "On a scale of 1 to 5, how would you rate your overall experience?"
)
# Substring used to recognise the rating prompt, whoever produced it
FEEDBACK_RATING_MARKER = "how would you rate your overall experience?"

# Human handoff
CONTACT_SUPPORT_TOKEN = "[CONTACT_SUPPORT]"
SUPPORT_PHONE_NUMBER = "+91 0101010101"

# Gateway defaults
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_LIVE_MODEL = "gemini-2.5-flash-native-audio-preview-09-2025"
DEFAULT_VOICE_NAME = "Zephyr"
DEFAULT_MAX_TOOL_ROUNDS = 8
DEFAULT_REQUEST_TIMEOUT = 45.0

# Audio formats used by the live gateway
INPUT_SAMPLE_RATE = 16000
OUTPUT_SAMPLE_RATE = 24000

# Titles
MAX_TITLE_LENGTH = 60


class Settings(BaseModel):
    """Runtime settings for the service core."""

    api_key: str | None = Field(default=None, description="Gemini API key")
    model: str = Field(default=DEFAULT_TEXT_MODEL, description="Model for text sessions")
    live_model: str = Field(default=DEFAULT_LIVE_MODEL, description="Model for voice sessions")
    voice_name: str = Field(default=DEFAULT_VOICE_NAME, description="Prebuilt voice for audio replies")
    max_tool_rounds: int = Field(
        default=DEFAULT_MAX_TOOL_ROUNDS,
        ge=1,
        description="Maximum tool-resolution rounds per user message"
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        gt=0,
        description="Seconds before a gateway call is abandoned"
    )
    log_level: str = Field(default="WARNING", description="Root log level")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a .env file if present).

        Environment variables:
            GEMINI_API_KEY: Gemini API key (falls back to API_KEY)
            SERVICEAI_MODEL: Text model (default: gemini-2.5-flash)
            SERVICEAI_LIVE_MODEL: Live audio model
            SERVICEAI_VOICE: Prebuilt voice name (default: Zephyr)
            SERVICEAI_MAX_TOOL_ROUNDS: Tool round limit (default: 8)
            SERVICEAI_REQUEST_TIMEOUT: Gateway timeout in seconds (default: 45)
            SERVICEAI_LOG_LEVEL: Log level (default: WARNING)
        """
        load_dotenv()
        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
            model=os.getenv("SERVICEAI_MODEL", DEFAULT_TEXT_MODEL),
            live_model=os.getenv("SERVICEAI_LIVE_MODEL", DEFAULT_LIVE_MODEL),
            voice_name=os.getenv("SERVICEAI_VOICE", DEFAULT_VOICE_NAME),
            max_tool_rounds=int(os.getenv("SERVICEAI_MAX_TOOL_ROUNDS", str(DEFAULT_MAX_TOOL_ROUNDS))),
            request_timeout=float(os.getenv("SERVICEAI_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
            log_level=os.getenv("SERVICEAI_LOG_LEVEL", "WARNING"),
        )
