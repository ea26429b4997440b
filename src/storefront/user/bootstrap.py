"""Admin account bootstrap, run once per process start."""

import os

from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.user.registration import register_user
from storefront.user.user import User, UserRole

DEFAULT_ADMIN_EMAIL = "admin@ecommerce.com"


def ensure_admin_account():
    """Create the admin user unless one with the admin email already exists.

    Returns the new user's id, or None when nothing was created.
    """
    email = os.getenv("ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL).strip().lower()
    password = os.getenv("ADMIN_PASSWORD")

    if current_domain.repository_for(User).find_by_email(email) is not None:
        logger.debug("admin_account_exists", email=email)
        return None

    if not password:
        logger.warning("admin_account_skipped", email=email, reason="ADMIN_PASSWORD is not set")
        return None

    user_id, _ = register_user(
        name=os.getenv("ADMIN_NAME", "Administrator"),
        email=email,
        password=password,
        role=UserRole.ADMIN.value,
    )
    logger.info("admin_account_created", email=email, user_id=user_id)
    return user_id
