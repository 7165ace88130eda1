"""Unit tests for order line items and totals."""
import pytest
from pydantic import ValidationError

from food_ordering.services.ordering.models import OrderItem, OrderRequest, calculate_total


class TestOrderTotal:
    """Test server-side total calculation."""

    def test_total_with_quantities(self):
        """Test total is unit price times quantity summed over items."""
        items = [
            OrderItem(name="Margherita", price=12.0, quantity=1),
            OrderItem(name="Pepperoni", price=6.5, quantity=2),
        ]

        assert calculate_total(items) == 25.0

    def test_total_rounded_to_cents(self):
        """Test floating point sums are rounded to two decimals."""
        items = [OrderItem(price=0.1, quantity=1), OrderItem(price=0.2, quantity=1)]

        assert calculate_total(items) == 0.3

    def test_default_quantity(self):
        """Test quantity defaults to one."""
        assert calculate_total([OrderItem(price=9.99)]) == 9.99

    def test_zero_quantity(self):
        """Test zero-quantity lines add nothing."""
        assert calculate_total([OrderItem(price=9.99, quantity=0)]) == 0.0


class TestOrderItem:
    """Test line item validation."""

    def test_duplicate_toppings_collapsed(self):
        """Test toppings behave as a set, keeping first-seen order."""
        item = OrderItem(price=10.0, toppings=["olives", "basil", "olives"])

        assert item.toppings == ["olives", "basil"]

    def test_missing_price_is_zero(self):
        """Test an item without a price is free rather than invalid."""
        item = OrderItem(name="Margherita")

        assert item.price == 0.0
        assert calculate_total([item]) == 0.0

    @pytest.mark.parametrize("fields", [{"price": "cheap"}, {"price": 5.0, "quantity": "two"}, {"price": 5.0, "quantity": -1}])
    def test_invalid_items(self, fields):
        """Test wrong types and negative quantities are rejected."""
        with pytest.raises(ValidationError):
            OrderItem(**fields)

    def test_camel_case_input(self):
        """Test requests accept camelCase field names."""
        order = OrderRequest(**{
            "customerName": "Asha",
            "phoneNumber": "+15551234567",
            "items": [{"name": "Margherita", "price": 12.0}],
        })

        assert order.customer_name == "Asha"
        assert order.phone_number == "+15551234567"
        assert len(order.items) == 1
