"""Abstract base class for the Business Data Service.

This module hides the design decision of where support data is stored.
Implementations must:
- Return an explicit "not found" sentinel string instead of raising
- Raise only for environment failures (storage unavailable, bad input)
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import Order, Product, Transaction


class BusinessDataService(ABC):
    """The six query/command operations the support agent can use."""

    @abstractmethod
    def get_order_status(self, order_id: int) -> str:
        """Describe a single order's placement and delivery dates."""

    @abstractmethod
    def list_user_orders(self, user_id: int) -> list[Order] | str:
        """List all orders placed by a user."""

    @abstractmethod
    def find_products(self, query: str) -> list[Product] | str:
        """Search products by name, category or description."""

    @abstractmethod
    def submit_feedback(self, user_id: int, rating: int, description: str) -> dict[str, Any]:
        """Record a feedback entry and acknowledge it."""

    @abstractmethod
    def list_user_transactions(self, user_id: int) -> list[Transaction] | str:
        """List all payment transactions of a user."""

    @abstractmethod
    def contact_human_support(self, name: str) -> dict[str, Any]:
        """Register a human handoff request and acknowledge it."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
