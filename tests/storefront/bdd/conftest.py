"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart
from storefront.exceptions import StockUnavailableError
from storefront.order.order import Order
from storefront.order.placement import place_order
from storefront.product.management import CreateProduct, get_product


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def placed():
    return {"order_id": None, "exc": None}


@pytest.fixture()
def error():
    """Container for exceptions captured by When steps."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {quantity:d} unit in stock'))
@given(parsers.cfparse('a product "{name}" priced {price:f} with {quantity:d} units in stock'))
def stock_product(products, name, price, quantity):
    products[name] = current_domain.process(
        CreateProduct(name=name, price=price, quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('shopper "{user_id}" has {quantity:d} of "{name}" in the cart'))
def put_in_cart(products, user_id, quantity, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=products[name], quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('shopper "{user_id}" places an order'))
@when(parsers.cfparse('shopper "{user_id}" places an order'))
def shopper_places_order(placed, user_id):
    try:
        order_id = place_order(user_id)
    except (StockUnavailableError, ValidationError) as exc:
        placed["exc"] = exc
    else:
        placed["order_id"] = order_id


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {quantity:d} units in stock'))
def product_stock_is(products, name, quantity):
    assert get_product(products[name]).quantity == quantity


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then(parsers.cfparse('the cart of shopper "{user_id}" is empty'))
def cart_is_empty(user_id):
    assert current_domain.repository_for(ShoppingCart).for_user(user_id).items == []
