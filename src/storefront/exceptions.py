"""Storefront-specific exceptions.

Conflicts (insufficient stock, illegal status transitions) are
``InvalidStateError`` subclasses so the HTTP layer can render them as 409.
Validation problems reuse Protean's ``ValidationError`` and missing records
reuse ``ObjectNotFoundError``.
"""

from protean.exceptions import InvalidStateError


class StockUnavailableError(InvalidStateError):
    """A product does not have enough units on hand for the requested quantity."""

    def __init__(self, product_id, product_name, available, requested):
        self.product_id = str(product_id)
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            {"stock": [f"Insufficient stock: only {available} units of \"{product_name}\" available, {requested} requested"]}
        )


class InvalidStatusTransitionError(InvalidStateError):
    def __init__(self, current_status, requested_status):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__({"status": [f"Cannot change status from \"{current_status}\" to \"{requested_status}\""]})


class AuthenticationError(Exception):
    """Credentials or bearer token could not be verified."""
