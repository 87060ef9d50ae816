"""
Service.AI: conversation orchestration core for a customer support chat client.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .business import BusinessDataService, create_business_data
from .conversations import Conversation, ConversationStore, Message, Sender
from .gateway import ModelGateway, create_gateway, create_live_gateway
from .identity import User
from .session import ConversationSessionManager, MessageAppendedEvent, TitleGenerator
from .tools import ToolCall, ToolDispatcher, ToolResult

__all__ = [
    "BusinessDataService",
    "Conversation",
    "ConversationSessionManager",
    "ConversationStore",
    "Message",
    "MessageAppendedEvent",
    "ModelGateway",
    "Sender",
    "TitleGenerator",
    "ToolCall",
    "ToolDispatcher",
    "ToolResult",
    "User",
    "create_business_data",
    "create_gateway",
    "create_live_gateway",
]
