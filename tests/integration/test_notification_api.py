"""Integration tests for notification endpoints."""

from marketplace.notification.delivery import notify


def _notify(user_id, order_number):
    return notify(user_id, "new_order", {"order_id": "ord-1", "order_number": order_number})


class TestNotifications:
    def test_list_own_notifications(self, client, artisan):
        _notify("art-1", "ORD-1")
        _notify("art-1", "ORD-2")
        _notify("art-2", "ORD-3")

        data = client.get("/api/notifications", headers=artisan).json()["data"]

        assert data["pagination"]["total"] == 2
        assert data["unread_count"] == 2
        assert {n["user_id"] for n in data["notifications"]} == {"art-1"}

    def test_mark_read(self, client, artisan):
        notification_id = _notify("art-1", "ORD-1")

        response = client.patch(f"/api/notifications/{notification_id}/read", headers=artisan)

        assert response.status_code == 200
        assert response.json()["data"]["notification"]["is_read"] is True
        assert client.get("/api/notifications", headers=artisan).json()["data"]["unread_count"] == 0

    def test_cannot_mark_someone_elses(self, client, artisan):
        notification_id = _notify("art-2", "ORD-1")

        response = client.patch(f"/api/notifications/{notification_id}/read", headers=artisan)

        assert response.status_code == 403

    def test_read_all_and_unread_filter(self, client, artisan):
        _notify("art-1", "ORD-1")
        _notify("art-1", "ORD-2")

        updated = client.post("/api/notifications/read-all", headers=artisan).json()["data"]["updated"]
        unread = client.get("/api/notifications", params={"unread_only": True}, headers=artisan).json()["data"]

        assert updated == 2
        assert unread["notifications"] == []


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "marketplace"}
