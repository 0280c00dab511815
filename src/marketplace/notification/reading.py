"""Marking notifications read by their owner."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import Forbidden, NotificationNotFound
from marketplace.notification.notification import Notification
from marketplace.utils.lookup import load


@marketplace.command(part_of="Notification")
class MarkNotificationRead:
    notification_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Notification")
class MarkAllNotificationsRead:
    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=Notification)
class NotificationReadHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command):
        notification = load(Notification, command.notification_id, NotificationNotFound, "Notification does not exist")
        if notification.user_id != command.user_id:
            raise Forbidden("You can only update your own notifications")
        notification.mark_read()
        current_domain.repository_for(Notification).add(notification)
        return notification.to_dict()

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = repo.for_user(command.user_id, unread_only=True)
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)
