from marketplace.domain import marketplace
from marketplace.notification.notification import Notification
from marketplace.utils.scan import scan


@marketplace.repository(part_of=Notification)
class NotificationRepository:
    def for_user(self, user_id, unread_only=False) -> list[Notification]:
        """The user's notifications, newest first."""
        criteria = {"user_id": user_id}
        if unread_only:
            criteria["is_read"] = False
        return sorted(scan(self, **criteria), key=lambda n: n.created_at, reverse=True)
