"""Data structures exchanged between the model gateway and the dispatcher."""

import uuid
from typing import Any

from pydantic import BaseModel, Field


class ToolCall(BaseModel):
    """Represents a tool call requested by the model.

    Attributes:
        call_id: Identifier the gateway uses to pair the result with the call
        name: Name of the tool to call
        arguments: Arguments for the tool call
    """

    call_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Result of executing a tool call.

    Attributes:
        call_id: ID of the tool call that was executed
        name: Name of the tool that was called
        result: JSON-serializable success payload or {"error": ...}
        error: Whether the result is a structured error
    """

    call_id: str
    name: str
    result: Any
    error: bool = False

    def to_response(self) -> dict[str, Any]:
        """Payload sent back to the model as the function response."""
        return {"result": self.result}
