from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..tools import ToolCall


class ChatMessage(BaseModel):
    """A prior message used to seed a model session."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = Field(description="Role of the message sender: 'user' or 'model'")
    content: str = Field(description="Content of the message")


class ModelReply(BaseModel):
    """Response from a model session: either final text or tool calls."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Final assistant text (empty for tool requests)")
    tool_calls: tuple[ToolCall, ...] = Field(
        default=(),
        description="Tool calls the model wants resolved before answering"
    )

    @property
    def is_tool_request(self) -> bool:
        return len(self.tool_calls) > 0
