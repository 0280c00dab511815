"""Template registry: maps NotificationType to the template that renders it."""

from marketplace.notification.notification import NotificationType
from marketplace.notification.templates.new_order import NewOrderTemplate
from marketplace.notification.templates.order_cancelled import OrderCancelledTemplate
from marketplace.notification.templates.order_update import OrderUpdateTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.NEW_ORDER.value: NewOrderTemplate,
    NotificationType.ORDER_UPDATE.value: OrderUpdateTemplate,
    NotificationType.ORDER_CANCELLED.value: OrderCancelledTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
