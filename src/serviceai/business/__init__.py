"""Business Data Service module.

Hides where orders, products, transactions and feedback live.
"""

from .base import BusinessDataService
from .factory import create_business_data
from .models import FeedbackRecord, HandoffRequest, Order, Product, Transaction

__all__ = [
    "BusinessDataService",
    "FeedbackRecord",
    "HandoffRequest",
    "Order",
    "Product",
    "Transaction",
    "create_business_data",
]
