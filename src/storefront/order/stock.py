"""Putting cancelled order quantities back into the catalog."""

from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.product.product import Product


def restore_stock(order):
    """Restock every line of a cancelled order, at most once per order.

    Must run inside the handler that persists ``order`` so both writes share
    one unit of work, under ``stock_lock``. Products deleted since placement
    are skipped.
    """
    products = current_domain.repository_for(Product)
    for product_id, quantity in sorted(order.release_stock()):
        product = products.get_for_update(product_id)
        if product is None:
            logger.warning(
                "restock_skipped_missing_product",
                order_id=str(order.id),
                product_id=product_id,
                quantity=quantity,
            )
            continue
        product.restock(quantity, order_id=order.id)
        products.add(product)
