"""In-memory Business Data Service backend.

Seeded with the demo support dataset. Data is lost when the process exits.
"""

import logging
from typing import Any

from ..config import SUPPORT_PHONE_NUMBER
from .base import BusinessDataService
from .models import FeedbackRecord, HandoffRequest, Order, Product, Transaction

logger = logging.getLogger(__name__)

SEED_ORDERS = (
    Order(OrderID=1, UserID=1, ProductID=1, ProductName="PixelPhone Z10", Quantity=1,
          UserAddress="12 MG Road, Bangalore, KA, India",
          OrderPlaceDate="15-10-2025", DeliveryDate="18-10-2025"),
    Order(OrderID=2, UserID=2, ProductID=6, ProductName="XG-900 Gaming Mouse", Quantity=1,
          UserAddress="45 Residency Road, Bangalore, KA, India",
          OrderPlaceDate="20-10-2025", DeliveryDate="22-10-2025"),
    Order(OrderID=3, UserID=2, ProductID=8, ProductName="ThunderPro Cable (Thunderbolt 4)", Quantity=2,
          UserAddress="45 Residency Road, Bangalore, KA, India",
          OrderPlaceDate="01-11-2025", DeliveryDate="04-11-2025"),
)

SEED_PRODUCTS = (
    Product(ProductID=1, ProductName="PixelPhone Z10", Category="Phones", SubCategory="Smartphone",
            PriceUSD=499.00, Description='6.5" display, 128GB storage'),
    Product(ProductID=2, ProductName="MightyBook Pro 15 (Gaming)", Category="Laptops", SubCategory="Gaming",
            PriceUSD=1299.00, Description="RTX GPU, 16GB RAM"),
    Product(ProductID=6, ProductName="XG-900 Gaming Mouse", Category="Mouses", SubCategory="Gaming",
            PriceUSD=79.00, Description="High DPI gaming mouse"),
    Product(ProductID=8, ProductName="ThunderPro Cable (Thunderbolt 4)", Category="Cables",
            SubCategory="Thunderbolt", PriceUSD=39.00, Description="1m Thunderbolt 4 cable"),
)

SEED_TRANSACTIONS = (
    Transaction(TransactionID=101, UserID=1, PaymentMethod="Credit Card", AmountUSD=499.00,
                TransactionDateTime="15-10-2025 10:00:00"),
    Transaction(TransactionID=102, UserID=2, PaymentMethod="PayPal", AmountUSD=79.00,
                TransactionDateTime="20-10-2025 14:30:00"),
    Transaction(TransactionID=103, UserID=2, PaymentMethod="PayPal", AmountUSD=78.00,
                TransactionDateTime="01-11-2025 09:00:00"),
)


class InMemoryBusinessData(BusinessDataService):
    """Business data held in Python lists.

    Orders, products and transactions are fixed; feedback and handoff
    requests are appended as the agent records them.
    """

    def __init__(
        self,
        orders: list[Order] | tuple[Order, ...] = SEED_ORDERS,
        products: list[Product] | tuple[Product, ...] = SEED_PRODUCTS,
        transactions: list[Transaction] | tuple[Transaction, ...] = SEED_TRANSACTIONS,
    ):
        self._orders = list(orders)
        self._products = list(products)
        self._transactions = list(transactions)
        self._feedback: list[FeedbackRecord] = []
        self._handoffs: list[HandoffRequest] = []

    @property
    def feedback_log(self) -> tuple[FeedbackRecord, ...]:
        """Feedback recorded so far, oldest first."""
        return tuple(self._feedback)

    @property
    def handoff_requests(self) -> tuple[HandoffRequest, ...]:
        """Human handoff requests recorded so far, oldest first."""
        return tuple(self._handoffs)

    def get_order_status(self, order_id: int) -> str:
        for order in self._orders:
            if order.OrderID == order_id:
                return (
                    f"Order for {order.ProductName} placed on {order.OrderPlaceDate} "
                    f"is scheduled for delivery on {order.DeliveryDate}."
                )
        return f"Order with ID {order_id} not found."

    def list_user_orders(self, user_id: int) -> list[Order] | str:
        orders = [o for o in self._orders if o.UserID == user_id]
        return orders if orders else "No orders found for this user."

    def find_products(self, query: str) -> list[Product] | str:
        needle = query.lower()
        results = [
            p for p in self._products
            if needle in p.ProductName.lower()
            or needle in p.Category.lower()
            or needle in p.Description.lower()
        ]
        return results if results else "No products found matching that query."

    def submit_feedback(self, user_id: int, rating: int, description: str) -> dict[str, Any]:
        if not 1 <= rating <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {rating}")

        self._feedback.append(FeedbackRecord(UserID=user_id, Rating=rating, Description=description))
        logger.info("Feedback submitted by UserID %s: Rating=%s, Description=%r", user_id, rating, description)
        return {"success": True, "message": "Thank you for your feedback!"}

    def list_user_transactions(self, user_id: int) -> list[Transaction] | str:
        transactions = [t for t in self._transactions if t.UserID == user_id]
        return transactions if transactions else "No transactions found for this user."

    def contact_human_support(self, name: str) -> dict[str, Any]:
        self._handoffs.append(HandoffRequest(name=name))
        logger.info("Human support requested for user: %s. Contacting %s.", name, SUPPORT_PHONE_NUMBER)
        return {"success": True, "message": f"Support contact initiated for {name}."}

    @property
    def backend_type(self) -> str:
        return "memory"
