"""Read side of the cart: lines with their product details resolved."""

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.product.product import Product


def _product_summary(product_id):
    product = current_domain.repository_for(Product)._dao.query.filter(id=str(product_id)).all().first
    if product is None:
        return None
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "in_stock": product.in_stock,
        "quantity": product.quantity,
    }


def cart_for_user(user_id) -> dict:
    """Return the user's cart; an empty one when the user has never added anything.

    Lines whose product was deleted carry ``product=None``.
    """
    cart = current_domain.repository_for(ShoppingCart).for_user(user_id)
    if cart is None:
        return {"id": None, "user_id": str(user_id), "items": []}

    return {
        "id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": [
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "product": _product_summary(item.product_id),
            }
            for item in cart.items
        ],
    }
