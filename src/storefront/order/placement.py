"""Order placement — converts the caller's cart into an order.

Every stock check runs before anything is mutated. The stock decrements,
the order insert and the cart clear all happen in the handler's unit of work,
so they commit together or not at all.
"""

from protean import handle
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.fields import Dict, Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.exceptions import StockUnavailableError
from storefront.order.order import Address, Order
from storefront.product.locking import stock_lock
from storefront.product.product import Product

MAX_PLACEMENT_ATTEMPTS = 3

_ADDRESS_FIELDS = ("street", "city", "state", "postal_code", "country")


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Dict()
    billing_address = Dict()


def _address(data):
    if not data:
        return None
    return Address(**{key: data.get(key) for key in _ADDRESS_FIELDS})


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        carts = current_domain.repository_for(ShoppingCart)
        products = current_domain.repository_for(Product)

        cart = carts.for_user(command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        # Lock in id order so two carts naming the same products cannot deadlock
        product_ids = sorted({str(item.product_id) for item in cart.items})
        locked = {pid: products.get_for_update(pid) for pid in product_ids}

        # Validate every line before touching anything
        reserved = []
        for item in cart.items:
            product = locked[str(item.product_id)]
            if product is None:
                raise ValidationError({"cart": [f"Product {item.product_id} no longer exists"]})
            if not product.can_supply(item.quantity):
                raise StockUnavailableError(product.id, product.name, product.quantity, item.quantity)
            reserved.append((product, item.quantity))

        order = Order.place(
            user_id=command.user_id,
            lines=[
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "unit_price": product.price,
                    "quantity": quantity,
                }
                for product, quantity in reserved
            ],
            shipping_address=_address(command.shipping_address),
            billing_address=_address(command.billing_address),
        )

        for product, quantity in reserved:
            product.withdraw_stock(quantity, order_id=order.id)
            products.add(product)

        current_domain.repository_for(Order).add(order)

        cart.clear()
        carts.add(cart)

        return str(order.id)


def place_order(user_id, shipping_address=None, billing_address=None, max_attempts=MAX_PLACEMENT_ATTEMPTS):
    """Place an order, retrying when a concurrent writer changed a product first.

    Each attempt holds ``stock_lock`` until its unit of work has committed,
    so the losing buyer of the last unit reads the winner's decrement and gets
    a ``StockUnavailableError``. Returns the new order's id.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            with stock_lock():
                return current_domain.process(
                    PlaceOrder(
                        user_id=user_id,
                        shipping_address=shipping_address,
                        billing_address=billing_address,
                    ),
                    asynchronous=False,
                )
        except ExpectedVersionError:
            logger.warning("order_placement_version_conflict", user_id=str(user_id), attempt=attempt)
            if attempt == max_attempts:
                raise
