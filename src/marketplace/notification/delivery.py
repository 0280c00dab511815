"""Shared helper for creating rendered notifications."""

import structlog
from protean.utils.globals import current_domain

from marketplace.notification.notification import Notification
from marketplace.notification.templates import get_template

logger = structlog.get_logger(__name__)


def notify(user_id: str, notification_type: str, context: dict) -> str:
    """Render the template for ``notification_type`` and store it for ``user_id``.

    Returns:
        The id of the created notification.
    """
    rendered = get_template(notification_type).render(context)
    notification = Notification.create(
        user_id=user_id,
        notification_type=notification_type,
        title=rendered["title"],
        message=rendered["message"],
        data=context,
    )
    current_domain.repository_for(Notification).add(notification)
    logger.info(
        "Notification created",
        notification_id=str(notification.id),
        user_id=user_id,
        notification_type=notification_type,
    )
    return str(notification.id)
