"""Integration tests for analytics endpoints."""

import pytest
from protean import current_domain

from marketplace.order.order import Order


@pytest.fixture
def sales(artisan, customer, register_user, list_product, place_order, client):
    """Two buyers, one of them returning, across two of Meera's products."""
    register_user("art-2", role="artisan", first_name="Kabir", last_name="Das")
    vase = list_product("art-1", name="Blue Pottery Vase", price=100.0, stock=10)
    quilt = list_product("art-1", name="Kantha Quilt", price=250.0, stock=5, category="textiles")
    shawl = list_product("art-2", name="Pashmina Shawl", price=300.0, stock=4, category="textiles")
    for _ in range(4):
        client.get(f"/api/products/{vase}")

    place_order("cust-1", [(vase, 2), (shawl, 1)])
    place_order("cust-1", [(quilt, 1)])
    place_order("cust-2", [(vase, 1)])
    return {"vase": vase, "quilt": quilt, "shawl": shawl}


class TestOverview:
    def test_artisan_overview(self, client, artisan, sales):
        response = client.get("/api/analytics/overview", headers=artisan)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["timeframe"] == "30d"
        assert data["user_type"] == "artisan"
        assert data["analytics"] == {
            "total_products": 2,
            "total_orders": 3,
            "total_revenue": 550.0,
            "total_views": 4,
            "average_order_value": 183.33,
        }

    def test_customer_overview(self, client, customer, sales):
        response = client.get("/api/analytics/overview", params={"timeframe": "7d"}, headers=customer)

        data = response.json()["data"]
        assert data["user_type"] == "customer"
        assert data["analytics"]["total_orders"] == 2
        assert data["analytics"]["total_spent"] == 750.0
        assert data["analytics"]["favorite_categories"][0] == {"category": "textiles", "count": 2}

    def test_cancelled_orders_are_left_out(self, client, customer, artisan, list_product, place_order):
        vase = list_product("art-1", price=100.0)
        order = place_order("cust-1", [(vase, 1)])
        client.post(f"/api/orders/{order['id']}/cancel", headers=customer)

        response = client.get("/api/analytics/overview", headers=customer)

        assert response.json()["data"]["analytics"]["total_orders"] == 0

    def test_unknown_timeframe_is_rejected(self, client, customer):
        response = client.get("/api/analytics/overview", params={"timeframe": "1y"}, headers=customer)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    def test_requires_authentication(self, client):
        assert client.get("/api/analytics/overview").status_code == 401


class TestSales:
    def test_sales_report(self, client, artisan, sales):
        response = client.get("/api/analytics/sales", params={"group_by": "month"}, headers=artisan)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["group_by"] == "month"
        [period] = data["sales_data"]["sales_by_period"]
        assert period["revenue"] == 550.0
        assert period["order_count"] == 3
        assert data["customer_metrics"] == {
            "total_customers": 2,
            "repeat_customers": 1,
            "repeat_customer_rate": 50.0,
        }
        assert [p["name"] for p in data["top_products"]] == ["Blue Pottery Vase", "Kantha Quilt"]

    def test_old_orders_fall_outside_the_window(self, client, artisan, sales):
        repo = current_domain.repository_for(Order)
        for order in repo.for_artisan("art-1"):
            order.created_at = order.created_at.replace(year=order.created_at.year - 1)
            repo.add(order)

        response = client.get("/api/analytics/sales", params={"timeframe": "90d"}, headers=artisan)

        assert response.json()["data"]["summary"]["total_orders"] == 0

    def test_customers_are_forbidden(self, client, customer):
        assert client.get("/api/analytics/sales", headers=customer).status_code == 403


class TestProducts:
    def test_product_report(self, client, artisan, sales):
        response = client.get(
            "/api/analytics/products", params={"sort_by": "recent_revenue", "sort_order": "desc"}, headers=artisan
        )

        assert response.status_code == 200
        data = response.json()["data"]
        vase, quilt = data["products"]
        assert vase["id"] == sales["vase"]
        assert vase["recent_orders"] == 2
        assert vase["recent_revenue"] == 300.0
        assert vase["conversion_rate"] == 50.0
        assert quilt["recent_revenue"] == 250.0
        assert data["summary"]["total_products"] == 2
        assert {c["category"] for c in data["category_performance"]} == {"pottery", "textiles"}

    def test_invalid_sort_field(self, client, artisan):
        response = client.get("/api/analytics/products", params={"sort_by": "price"}, headers=artisan)
        assert response.status_code == 400
