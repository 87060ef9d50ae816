"""Declarations of the six support tools.

The same declarations are sent to both the text and the live gateway. Each
tool also has a fixed argument model used to validate what the model sends.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ToolName(str, Enum):
    """Wire names of the tools the model may call."""

    GET_ORDER_STATUS = "getOrderStatus"
    LIST_USER_ORDERS = "listUserOrders"
    FIND_PRODUCTS = "findProducts"
    SUBMIT_FEEDBACK = "submitFeedback"
    LIST_USER_TRANSACTIONS = "listUserTransactions"
    CONTACT_HUMAN_SUPPORT = "contactHumanSupport"


class ToolParameter(BaseModel):
    """A single parameter in a tool declaration."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(description="Gemini schema type: NUMBER or STRING")
    description: str | None = None


class ToolDeclaration(BaseModel):
    """A tool description handed to the model."""

    model_config = ConfigDict(frozen=True)

    name: ToolName
    description: str
    parameters: dict[str, ToolParameter]
    required: tuple[str, ...]

    def to_llm_spec(self) -> dict:
        """JSON-schema style description of the tool."""
        return {
            "name": self.name.value,
            "description": self.description,
            "parameters": {
                "type": "OBJECT",
                "properties": {
                    key: param.model_dump(exclude_none=True)
                    for key, param in self.parameters.items()
                },
                "required": list(self.required),
            },
        }


TOOL_DECLARATIONS: tuple[ToolDeclaration, ...] = (
    ToolDeclaration(
        name=ToolName.GET_ORDER_STATUS,
        description="Get the status of a specific order by its ID.",
        parameters={"orderId": ToolParameter(type="NUMBER", description="The ID of the order to check.")},
        required=("orderId",),
    ),
    ToolDeclaration(
        name=ToolName.LIST_USER_ORDERS,
        description="List all orders for a given user.",
        parameters={"userId": ToolParameter(type="NUMBER", description="The ID of the user whose orders to list.")},
        required=("userId",),
    ),
    ToolDeclaration(
        name=ToolName.FIND_PRODUCTS,
        description="Find products based on a search query.",
        parameters={
            "query": ToolParameter(
                type="STRING",
                description='A search term for products (e.g., "gaming mouse", "laptop").'
            )
        },
        required=("query",),
    ),
    ToolDeclaration(
        name=ToolName.SUBMIT_FEEDBACK,
        description="Submit feedback about the service.",
        parameters={
            "userId": ToolParameter(type="NUMBER"),
            "rating": ToolParameter(type="NUMBER", description="A rating from 1 (bad) to 5 (excellent)."),
            "description": ToolParameter(type="STRING", description="The text content of the feedback."),
        },
        required=("userId", "rating", "description"),
    ),
    ToolDeclaration(
        name=ToolName.LIST_USER_TRANSACTIONS,
        description="List all financial transactions for a given user.",
        parameters={
            "userId": ToolParameter(type="NUMBER", description="The ID of the user whose transactions to list.")
        },
        required=("userId",),
    ),
    ToolDeclaration(
        name=ToolName.CONTACT_HUMAN_SUPPORT,
        description=(
            "Use this function when the user explicitly asks to speak to a human, a person, "
            "an agent, or wants to contact the customer service department."
        ),
        parameters={"name": ToolParameter(type="STRING", description="The user's first name.")},
        required=("name",),
    ),
)


# Argument shapes, one per tool

class OrderStatusArgs(BaseModel):
    orderId: int


class UserIdArgs(BaseModel):
    userId: int


class FindProductsArgs(BaseModel):
    query: str


class SubmitFeedbackArgs(BaseModel):
    userId: int
    rating: int = Field(ge=1, le=5)
    description: str


class ContactHumanSupportArgs(BaseModel):
    name: str = Field(min_length=1)
