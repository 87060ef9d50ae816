"""Tool dispatcher: executes model tool calls against the Business Data Service.

An unanswered tool call stalls the model session, so execute() converts
every failure into a structured error result instead of raising.
"""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from ..business import BusinessDataService
from .data_structures import ToolCall, ToolResult
from .declarations import (
    ContactHumanSupportArgs,
    FindProductsArgs,
    OrderStatusArgs,
    SubmitFeedbackArgs,
    ToolName,
    UserIdArgs,
)

logger = logging.getLogger(__name__)


def _to_payload(value: Any) -> Any:
    """Convert service return values into JSON-serializable payloads."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_to_payload(v) for v in value]
    return value


class ToolDispatcher:
    """Maps tool calls onto Business Data Service operations.

    Hidden design decisions:
    - Argument validation and coercion (JSON numbers to int ids)
    - Result serialization
    - Error containment
    """

    def __init__(self, service: BusinessDataService):
        """Initialize the dispatcher.

        Args:
            service: Business Data Service the tools operate on
        """
        self._service = service
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def execute(self, tool_call: ToolCall) -> ToolResult:
        """Execute a single tool call. Never raises.

        Args:
            tool_call: The tool call to execute

        Returns:
            ToolResult with the success payload or a structured error
        """
        try:
            tool = ToolName(tool_call.name)
        except ValueError:
            logger.warning("Unknown tool requested: %s", tool_call.name)
            return self._error(tool_call, f"Unknown function: {tool_call.name}")

        self._debug("info", "Tools", f"{tool.value}({tool_call.arguments})")
        try:
            result = self._invoke(tool, tool_call.arguments)
        except ValidationError as e:
            logger.warning("Invalid arguments for %s: %s", tool.value, e)
            return self._error(tool_call, f"Invalid arguments for {tool.value}: {e.errors(include_url=False)}")
        except Exception as e:
            logger.exception("Tool %s failed", tool.value)
            return self._error(tool_call, str(e) or type(e).__name__)

        logger.debug("Tool %s returned %r", tool.value, result)
        return ToolResult(
            call_id=tool_call.call_id,
            name=tool_call.name,
            result=_to_payload(result),
        )

    def execute_all(self, tool_calls: list[ToolCall]) -> list[ToolResult]:
        """Execute a batch of tool calls, one result per call, in order."""
        return [self.execute(call) for call in tool_calls]

    def _invoke(self, tool: ToolName, arguments: dict[str, Any]) -> Any:
        service = self._service

        if tool is ToolName.GET_ORDER_STATUS:
            args = OrderStatusArgs.model_validate(arguments)
            return service.get_order_status(args.orderId)
        if tool is ToolName.LIST_USER_ORDERS:
            args = UserIdArgs.model_validate(arguments)
            return service.list_user_orders(args.userId)
        if tool is ToolName.FIND_PRODUCTS:
            args = FindProductsArgs.model_validate(arguments)
            return service.find_products(args.query)
        if tool is ToolName.SUBMIT_FEEDBACK:
            args = SubmitFeedbackArgs.model_validate(arguments)
            return service.submit_feedback(args.userId, args.rating, args.description)
        if tool is ToolName.LIST_USER_TRANSACTIONS:
            args = UserIdArgs.model_validate(arguments)
            return service.list_user_transactions(args.userId)
        if tool is ToolName.CONTACT_HUMAN_SUPPORT:
            args = ContactHumanSupportArgs.model_validate(arguments)
            return service.contact_human_support(args.name)

        raise AssertionError(f"Unhandled tool: {tool}")

    def _error(self, tool_call: ToolCall, message: str) -> ToolResult:
        self._debug("error", "Tools", message)
        return ToolResult(
            call_id=tool_call.call_id,
            name=tool_call.name,
            result={"error": message},
            error=True,
        )
