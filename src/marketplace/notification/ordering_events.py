"""Order event handler: fans out notifications after an order change commits.

A failure here is logged and dropped; the order itself is already durable
and is never rolled back because a notification could not be stored.
"""

import json

import structlog
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.notification.delivery import notify
from marketplace.notification.notification import Notification, NotificationType
from marketplace.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=Notification, stream_category="marketplace::order")
class OrderEventsHandler:
    """Reacts to Order events to notify artisans and customers."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        """One ``new_order`` notification per distinct artisan in the order."""
        for artisan_id in json.loads(event.artisan_ids):
            self._safely_notify(
                artisan_id,
                NotificationType.NEW_ORDER.value,
                {
                    "order_id": str(event.order_id),
                    "order_number": event.order_number,
                    "customer_id": str(event.customer_id),
                    "total_amount": event.total_amount,
                },
            )

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        self._safely_notify(
            str(event.customer_id),
            NotificationType.ORDER_UPDATE.value,
            {
                "order_id": str(event.order_id),
                "order_number": event.order_number,
                "new_status": event.new_status,
                "tracking_number": event.tracking_number,
            },
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        for artisan_id in json.loads(event.artisan_ids):
            self._safely_notify(
                artisan_id,
                NotificationType.ORDER_CANCELLED.value,
                {
                    "order_id": str(event.order_id),
                    "order_number": event.order_number,
                    "customer_id": str(event.customer_id),
                    "reason": event.reason,
                },
            )

    @staticmethod
    def _safely_notify(user_id, notification_type, context):
        try:
            notify(user_id, notification_type, context)
        except Exception:
            logger.exception(
                "Failed to create notification",
                user_id=user_id,
                notification_type=notification_type,
                order_id=context.get("order_id"),
            )
