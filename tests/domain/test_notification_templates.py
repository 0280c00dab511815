"""Tests for notification rendering and read state."""

import pytest

from marketplace.notification.notification import Notification, NotificationType
from marketplace.notification.templates import get_template


class TestTemplates:
    def test_new_order(self):
        rendered = get_template("new_order").render({"order_number": "ORD-1-ABC"})
        assert rendered == {"title": "New Order Received", "message": "You have received a new order ORD-1-ABC"}

    def test_order_update_with_tracking(self):
        rendered = get_template("order_update").render(
            {"order_number": "ORD-1-ABC", "new_status": "shipped", "tracking_number": "TRK-9"}
        )
        assert rendered["message"] == "Your order ORD-1-ABC has been shipped. Tracking number: TRK-9"

    def test_order_cancelled(self):
        rendered = get_template("order_cancelled").render({"order_number": "ORD-1-ABC"})
        assert rendered["title"] == "Order Cancelled"

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            get_template("birthday")


class TestReadState:
    def test_mark_read_once(self):
        notification = Notification.create(
            user_id="user-1",
            notification_type=NotificationType.NEW_ORDER.value,
            title="New Order Received",
            message="You have received a new order",
        )
        notification.mark_read()
        read_at = notification.read_at

        notification.mark_read()

        assert notification.is_read is True
        assert notification.read_at == read_at
