"""Tests for Product stock movements and the in_stock flag."""

import pytest
from protean.exceptions import ValidationError

from storefront.exceptions import StockUnavailableError
from storefront.product.events import ProductCreated, StockRestored, StockWithdrawn
from storefront.product.product import Product


def _make_product(quantity=5):
    return Product.create(name="Kettle", price=30.0, quantity=quantity)


class TestCreate:
    def test_in_stock_derived_from_quantity(self):
        assert _make_product(quantity=3).in_stock is True
        assert _make_product(quantity=0).in_stock is False

    def test_raises_product_created(self):
        product = _make_product()
        created = [e for e in product._events if isinstance(e, ProductCreated)]
        assert created[0].name == "Kettle"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Kettle", price=-1.0, quantity=1)


class TestWithdraw:
    def test_decrements_quantity(self):
        product = _make_product(quantity=5)
        product.withdraw_stock(2, order_id="ord-1")
        assert product.quantity == 3
        assert product.in_stock is True

    def test_last_unit_clears_in_stock(self):
        product = _make_product(quantity=1)
        product.withdraw_stock(1)
        assert product.quantity == 0
        assert product.in_stock is False

    def test_raises_stock_withdrawn(self):
        product = _make_product(quantity=5)
        product.withdraw_stock(2, order_id="ord-1")
        withdrawn = [e for e in product._events if isinstance(e, StockWithdrawn)]
        assert withdrawn[0].previous_quantity == 5
        assert withdrawn[0].new_quantity == 3
        assert withdrawn[0].order_id == "ord-1"

    def test_insufficient_stock_rejected_and_unchanged(self):
        product = _make_product(quantity=2)
        with pytest.raises(StockUnavailableError) as exc:
            product.withdraw_stock(3)
        assert product.quantity == 2
        assert exc.value.available == 2
        assert exc.value.requested == 3
        assert exc.value.product_name == "Kettle"


class TestRestock:
    def test_increments_and_sets_in_stock(self):
        product = _make_product(quantity=0)
        product.restock(4)
        assert product.quantity == 4
        assert product.in_stock is True
        assert any(isinstance(e, StockRestored) for e in product._events)

    def test_non_positive_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.restock(0)


class TestUpdateDetails:
    def test_partial_update_touches_only_given_fields(self):
        product = _make_product()
        product.update_details(price=25.0)
        assert product.price == 25.0
        assert product.name == "Kettle"
        assert product.quantity == 5

    def test_quantity_update_recomputes_in_stock(self):
        product = _make_product(quantity=5)
        product.update_details(quantity=0)
        assert product.in_stock is False

    def test_negative_quantity_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(quantity=-3)
