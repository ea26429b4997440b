"""Application tests for converting a cart into an order."""

from unittest.mock import patch

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.cart.cart import ShoppingCart
from storefront.exceptions import StockUnavailableError
from storefront.order.order import Order
from storefront.order.placement import place_order
from storefront.product.management import DeleteProduct, get_product


def _cart(user_id):
    return current_domain.repository_for(ShoppingCart).for_user(user_id)


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


class TestSuccessfulPlacement:
    def test_two_lines_decrement_stock_and_empty_cart(self, make_product, fill_cart):
        product_a = make_product(name="A", price=12.0, quantity=5)
        product_b = make_product(name="B", price=7.5, quantity=1)
        fill_cart("user-001", (product_a, 2), (product_b, 1))

        order_id = place_order("user-001")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "pending"
        assert order.total_amount == pytest.approx(2 * 12.0 + 7.5)
        assert get_product(product_a).quantity == 3
        assert get_product(product_b).quantity == 0
        assert get_product(product_b).in_stock is False
        assert len(_cart("user-001").items) == 0

    def test_snapshot_survives_catalog_changes(self, make_product, fill_cart):
        from storefront.product.management import UpdateProduct

        product_id = make_product(name="Kettle", price=30.0, quantity=5)
        fill_cart("user-001", (product_id, 1))
        order_id = place_order("user-001")

        current_domain.process(
            UpdateProduct(product_id=product_id, name="Kettle v2", price=99.0),
            asynchronous=False,
        )

        item = current_domain.repository_for(Order).get(order_id).items[0]
        assert item.product_name == "Kettle"
        assert item.unit_price == 30.0

    def test_addresses_are_recorded(self, make_product, fill_cart):
        fill_cart("user-001", (make_product(), 1))
        address = {"street": "1 Main St", "city": "Springfield", "state": "IL", "postal_code": "62701", "country": "US"}

        order_id = place_order("user-001", shipping_address=address, billing_address=address)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.shipping_address.city == "Springfield"
        assert order.billing_address.postal_code == "62701"


class TestRejectedPlacement:
    def test_missing_cart(self):
        with pytest.raises(ValidationError):
            place_order("user-001")
        assert _orders() == []

    def test_empty_cart(self, make_product, fill_cart):
        from storefront.cart.items import ClearCart

        fill_cart("user-001", (make_product(), 1))
        current_domain.process(ClearCart(user_id="user-001"), asynchronous=False)

        with pytest.raises(ValidationError):
            place_order("user-001")

    def test_insufficient_stock_changes_nothing(self, make_product, fill_cart):
        plenty = make_product(name="Plenty", quantity=10)
        scarce = make_product(name="Scarce", quantity=1)
        fill_cart("user-001", (plenty, 3), (scarce, 2))

        with pytest.raises(StockUnavailableError) as exc:
            place_order("user-001")

        assert exc.value.product_id == scarce
        assert exc.value.available == 1
        assert exc.value.requested == 2
        assert get_product(plenty).quantity == 10
        assert get_product(scarce).quantity == 1
        assert len(_cart("user-001").items) == 2
        assert _orders() == []

    def test_deleted_product_rejected(self, make_product, fill_cart):
        product_id = make_product()
        fill_cart("user-001", (product_id, 1))
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ValidationError) as exc:
            place_order("user-001")
        assert "no longer exists" in str(exc.value)
        assert _orders() == []


class TestFailureMidWrite:
    def test_cart_failure_rolls_back_stock_and_order(self, make_product, fill_cart):
        first = make_product(name="First", quantity=5)
        second = make_product(name="Second", quantity=3)
        fill_cart("user-001", (first, 2), (second, 1))

        # Stock is withdrawn and the order added before the cart is cleared
        with patch.object(ShoppingCart, "clear", side_effect=RuntimeError("cart store down")):
            with pytest.raises(RuntimeError):
                place_order("user-001")

        assert get_product(first).quantity == 5
        assert get_product(second).quantity == 3
        assert _orders() == []
        assert len(_cart("user-001").items) == 2
