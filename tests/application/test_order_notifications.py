"""Application tests for notifications raised from order events."""

import json
from datetime import UTC, datetime

from protean import current_domain

from marketplace.notification import ordering_events
from marketplace.notification.notification import Notification, NotificationType
from marketplace.notification.ordering_events import OrderEventsHandler
from marketplace.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


def _notifications_for(user_id):
    return current_domain.repository_for(Notification).for_user(user_id)


class TestOrderPlacedHandler:
    def test_one_new_order_notification_per_artisan(self):
        OrderEventsHandler().on_order_placed(
            OrderPlaced(
                order_id="ord-100",
                order_number="ORD-1-ABCDEFGHI",
                customer_id="cust-100",
                total_amount=400.0,
                currency="INR",
                artisan_ids=json.dumps(["art-100", "art-200"]),
                placed_at=datetime.now(UTC),
            )
        )

        for artisan_id in ("art-100", "art-200"):
            [notification] = _notifications_for(artisan_id)
            assert notification.notification_type == NotificationType.NEW_ORDER.value
            assert notification.message == "You have received a new order ORD-1-ABCDEFGHI"
            assert notification.data["order_id"] == "ord-100"
        assert _notifications_for("cust-100") == []


class TestOrderStatusChangedHandler:
    def test_customer_is_notified(self):
        OrderEventsHandler().on_order_status_changed(
            OrderStatusChanged(
                order_id="ord-101",
                order_number="ORD-1-BCDEFGHIJ",
                customer_id="cust-101",
                previous_status="processing",
                new_status="shipped",
                tracking_number="TRK-42",
                changed_by="art-101",
                changed_at=datetime.now(UTC),
            )
        )

        [notification] = _notifications_for("cust-101")
        assert notification.notification_type == NotificationType.ORDER_UPDATE.value
        assert notification.message == "Your order ORD-1-BCDEFGHIJ has been shipped. Tracking number: TRK-42"


class TestOrderCancelledHandler:
    def test_artisans_are_notified(self):
        OrderEventsHandler().on_order_cancelled(
            OrderCancelled(
                order_id="ord-102",
                order_number="ORD-1-CDEFGHIJK",
                customer_id="cust-102",
                artisan_ids=json.dumps(["art-102"]),
                reason="Changed my mind",
                cancelled_at=datetime.now(UTC),
            )
        )

        [notification] = _notifications_for("art-102")
        assert notification.notification_type == NotificationType.ORDER_CANCELLED.value
        assert notification.data["reason"] == "Changed my mind"


class TestNotificationFailures:
    def test_failure_is_logged_not_raised(self, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(ordering_events, "notify", _boom)

        OrderEventsHandler().on_order_status_changed(
            OrderStatusChanged(
                order_id="ord-103",
                order_number="ORD-1-DEFGHIJKL",
                customer_id="cust-103",
                previous_status="pending",
                new_status="confirmed",
                changed_by="art-103",
                changed_at=datetime.now(UTC),
            )
        )

        assert _notifications_for("cust-103") == []


class TestEndToEnd:
    def test_placing_an_order_notifies_its_artisan(self, list_product, place_order):
        vase = list_product("art-104")
        place_order("cust-104", [(vase, 1)])

        notifications = _notifications_for("art-104")
        assert [n.notification_type for n in notifications] == [NotificationType.NEW_ORDER.value]
