"""Records exposed by the Business Data Service.

Field names mirror the column names of the support database schema, since
the model sees these records verbatim as tool results.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class Order(BaseModel):
    """A row of UserOrders."""

    model_config = ConfigDict(frozen=True)

    OrderID: int
    UserID: int
    ProductID: int
    ProductName: str
    Quantity: int
    UserAddress: str
    OrderPlaceDate: str = Field(description="DD-MM-YYYY")
    DeliveryDate: str = Field(description="DD-MM-YYYY")


class Product(BaseModel):
    """A row of Products."""

    model_config = ConfigDict(frozen=True)

    ProductID: int
    ProductName: str
    Category: str
    SubCategory: str
    PriceUSD: float
    Description: str


class Transaction(BaseModel):
    """A row of Transactions."""

    model_config = ConfigDict(frozen=True)

    TransactionID: int
    UserID: int
    PaymentMethod: str
    AmountUSD: float
    TransactionDateTime: str = Field(description="DD-MM-YYYY HH:MM:SS")


class FeedbackRecord(BaseModel):
    """A row of Feedback."""

    model_config = ConfigDict(frozen=True)

    UserID: int
    Rating: int = Field(ge=1, le=5, description="1 (bad) to 5 (excellent)")
    Description: str


class HandoffRequest(BaseModel):
    """A request to be contacted by a human agent."""

    model_config = ConfigDict(frozen=True)

    name: str
    requested_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
