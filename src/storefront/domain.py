"""Storefront bounded context — catalog, users, carts, orders and notifications.

All aggregates live in one domain and share one persistence provider, so a
command handler that touches Products, a ShoppingCart and an Order commits
them together in a single unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
