"""Notification aggregate: an in-app message for one user.

Notifications are created as a side effect of order events and only ever
mutated by their owner marking them read.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Dict, Identifier, String, Text

from marketplace.domain import marketplace


class NotificationType(Enum):
    NEW_ORDER = "new_order"
    ORDER_UPDATE = "order_update"
    ORDER_CANCELLED = "order_cancelled"


@marketplace.aggregate
class Notification:
    user_id = Identifier(required=True)
    notification_type = String(choices=NotificationType, required=True)
    title = String(required=True, max_length=200)
    message = Text(required=True)
    data = Dict()
    is_read = Boolean(default=False)
    read_at = DateTime()
    created_at = DateTime()

    @classmethod
    def create(cls, user_id, notification_type, title, message, data=None):
        return cls(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            data=data or {},
            created_at=datetime.now(UTC),
        )

    def mark_read(self):
        if self.is_read:
            return
        self.is_read = True
        self.read_at = datetime.now(UTC)
