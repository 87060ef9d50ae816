"""Tool module: the model-callable operations and their dispatcher."""

from .data_structures import ToolCall, ToolResult
from .declarations import TOOL_DECLARATIONS, ToolDeclaration, ToolName, ToolParameter
from .dispatcher import ToolDispatcher

__all__ = [
    "TOOL_DECLARATIONS",
    "ToolCall",
    "ToolDeclaration",
    "ToolDispatcher",
    "ToolName",
    "ToolParameter",
    "ToolResult",
]
