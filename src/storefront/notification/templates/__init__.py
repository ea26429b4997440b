"""Template registry — maps NotificationKind to template classes.

Templates render plain-text subject and body from a context dict.
"""

from storefront.notification.notification import NotificationKind
from storefront.notification.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notification.templates.order_status_update import OrderStatusUpdateTemplate
from storefront.notification.templates.password_reset import PasswordResetTemplate
from storefront.notification.templates.welcome import WelcomeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationKind.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationKind.ORDER_STATUS_UPDATE.value: OrderStatusUpdateTemplate,
    NotificationKind.WELCOME.value: WelcomeTemplate,
    NotificationKind.PASSWORD_RESET.value: PasswordResetTemplate,
}


def get_template(kind: str):
    """Look up a template class by notification kind."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for notification kind: {kind}")
    return template_cls
