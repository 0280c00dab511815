"""FastAPI endpoints for a user's in-app notifications."""

from typing import Annotated

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from marketplace.api.presenters import paginate
from marketplace.api.schemas import ApiResponse, NotificationListQuery
from marketplace.api.security import AuthenticatedUser
from marketplace.notification.notification import Notification
from marketplace.notification.reading import MarkAllNotificationsRead, MarkNotificationRead

notification_router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@notification_router.get("", response_model=ApiResponse)
async def list_notifications(
    params: Annotated[NotificationListQuery, Query()], user: AuthenticatedUser
) -> ApiResponse:
    repo = current_domain.repository_for(Notification)
    notifications = repo.for_user(user.id, unread_only=params.unread_only)
    if params.sort_order == "asc":
        notifications.reverse()

    page, pagination = paginate(notifications, params.page, params.limit)
    unread_count = len(notifications) if params.unread_only else len(repo.for_user(user.id, unread_only=True))
    return ApiResponse(
        message="Notifications retrieved successfully",
        data={
            "notifications": [n.to_dict() for n in page],
            "pagination": pagination,
            "unread_count": unread_count,
        },
    )


@notification_router.patch("/{notification_id}/read", response_model=ApiResponse)
async def mark_read(notification_id: str, user: AuthenticatedUser) -> ApiResponse:
    notification = current_domain.process(
        MarkNotificationRead(notification_id=notification_id, user_id=user.id), asynchronous=False
    )
    return ApiResponse(message="Notification marked as read", data={"notification": notification})


@notification_router.post("/read-all", response_model=ApiResponse)
async def mark_all_read(user: AuthenticatedUser) -> ApiResponse:
    updated = current_domain.process(MarkAllNotificationsRead(user_id=user.id), asynchronous=False)
    return ApiResponse(message="All notifications marked as read", data={"updated": updated})
