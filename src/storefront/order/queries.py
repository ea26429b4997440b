"""Order read helpers used by the HTTP layer."""

import math

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.order.order import Order, parse_status


def get_order_for_user(user_id, order_id):
    """Return the order if it exists and belongs to ``user_id``."""
    order = current_domain.repository_for(Order)._dao.query.filter(id=str(order_id)).all().first
    if order is None or str(order.user_id) != str(user_id):
        raise ObjectNotFoundError({"_entity": [f"Order {order_id} not found"]})
    return order


def list_orders_for_user(user_id):
    return current_domain.repository_for(Order).for_user(user_id)


def list_all_orders(status=None, page=1, limit=20):
    """One page of all orders, newest first, optionally filtered by status."""
    if page < 1:
        raise ValidationError({"page": ["Page must be 1 or greater"]})
    if limit < 1:
        raise ValidationError({"limit": ["Limit must be 1 or greater"]})
    if status:
        status = parse_status(status).value

    result = current_domain.repository_for(Order).page(status=status, offset=(page - 1) * limit, limit=limit)
    return {
        "orders": result.items,
        "page": page,
        "limit": limit,
        "total": result.total,
        "total_pages": math.ceil(result.total / limit) if result.total else 0,
    }
