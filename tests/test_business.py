"""Tests for the Business Data Service."""
import pytest
from pydantic import ValidationError

from serviceai.business import (
    BusinessDataService,
    FeedbackRecord,
    Order,
    Product,
    create_business_data,
)
from serviceai.business.in_memory import InMemoryBusinessData


class TestOrders:
    """Tests for order lookups."""

    def test_order_status_sentence(self, business):
        """Test the status sentence for a known order."""
        assert business.get_order_status(2) == (
            "Order for XG-900 Gaming Mouse placed on 20-10-2025 "
            "is scheduled for delivery on 22-10-2025."
        )

    def test_order_status_not_found(self, business):
        """Test the sentinel for an unknown order id."""
        assert business.get_order_status(999) == "Order with ID 999 not found."

    def test_list_user_orders(self, business):
        """Test listing orders for a user with orders."""
        orders = business.list_user_orders(2)

        assert [o.OrderID for o in orders] == [2, 3]
        assert all(isinstance(o, Order) for o in orders)

    def test_list_user_orders_empty(self, business):
        """Test the sentinel for a user without orders."""
        assert business.list_user_orders(42) == "No orders found for this user."


class TestProducts:
    """Tests for product search."""

    @pytest.mark.parametrize("query", ["gaming", "GAMING", "Gaming"])
    def test_find_products_case_insensitive(self, business, query):
        """Test that search ignores case."""
        names = [p.ProductName for p in business.find_products(query)]

        assert "XG-900 Gaming Mouse" in names
        assert "MightyBook Pro 15 (Gaming)" in names

    def test_find_products_matches_category(self, business):
        """Test that search also looks at the category."""
        results = business.find_products("cables")

        assert len(results) == 1
        assert isinstance(results[0], Product)
        assert results[0].ProductID == 8

    def test_find_products_matches_description(self, business):
        """Test that search also looks at the description."""
        results = business.find_products("128gb")

        assert [p.ProductID for p in results] == [1]

    def test_find_products_no_match(self, business):
        """Test the sentinel when nothing matches."""
        assert business.find_products("toaster") == "No products found matching that query."


class TestTransactions:
    """Tests for transaction listings."""

    def test_list_user_transactions(self, business):
        """Test listing transactions for a user."""
        transactions = business.list_user_transactions(2)

        assert [t.TransactionID for t in transactions] == [102, 103]

    def test_list_user_transactions_empty(self, business):
        """Test the sentinel for a user without transactions."""
        assert business.list_user_transactions(3) == "No transactions found for this user."


class TestFeedback:
    """Tests for feedback recording."""

    def test_submit_feedback_appends_record(self, business):
        """Test that feedback is recorded exactly once."""
        result = business.submit_feedback(2, 1, "bad")

        assert result == {"success": True, "message": "Thank you for your feedback!"}
        assert business.feedback_log == (FeedbackRecord(UserID=2, Rating=1, Description="bad"),)

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_submit_feedback_rejects_out_of_range(self, business, rating):
        """Test that ratings outside 1-5 are rejected and not recorded."""
        with pytest.raises(ValueError):
            business.submit_feedback(2, rating, "meh")

        assert business.feedback_log == ()

    def test_feedback_record_validates_rating(self):
        """Test that the record model enforces the rating range."""
        with pytest.raises(ValidationError):
            FeedbackRecord(UserID=1, Rating=7, Description="x")

    def test_feedback_log_is_per_instance(self):
        """Test that separate backends keep separate logs."""
        first = InMemoryBusinessData()
        second = InMemoryBusinessData()

        first.submit_feedback(1, 5, "great")

        assert len(first.feedback_log) == 1
        assert second.feedback_log == ()


class TestHumanSupport:
    """Tests for human handoff."""

    def test_contact_human_support(self, business):
        """Test that a handoff request is recorded and acknowledged."""
        result = business.contact_human_support("Rahul")

        assert result["success"] is True
        assert "Rahul" in result["message"]
        assert [h.name for h in business.handoff_requests] == ["Rahul"]


class TestBusinessFactory:
    """Tests for the backend factory."""

    def test_create_memory_backend(self):
        """Test creating the default backend."""
        service = create_business_data()

        assert isinstance(service, BusinessDataService)
        assert service.backend_type == "memory"

    def test_create_unknown_backend(self):
        """Test that an unknown backend is rejected."""
        with pytest.raises(ValueError, match="Unsupported"):
            create_business_data("sqlite")
