"""Integration tests for registration and profile endpoints."""

from protean import current_domain

from marketplace.user.user import User

REGISTRATION = {
    "email": "meera@example.com",
    "password": "s3cret!",
    "first_name": "Meera",
    "last_name": "Devi",
    "role": "artisan",
    "phone": "+919876543210",
    "location": {"city": "Jaipur", "state": "Rajasthan", "pincode": "302001"},
}


class TestRegister:
    def test_register_artisan(self, client, identity):
        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        user = body["data"]["user"]
        assert user["role"] == "artisan"
        assert user["profile_complete"] is True
        assert user["artisan_profile"]["total_sales"] == 0
        assert user["id"] in identity.accounts

    def test_duplicate_email(self, client):
        client.post("/api/auth/register", json=REGISTRATION)

        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 400
        assert response.json()["error"] == "Email Already Exists"

    def test_validation_errors_are_listed(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "email": "not-an-email", "password": "123"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert body["message"] == "Invalid input data"
        assert {detail["field"] for detail in body["details"]} == {"email", "password"}

    def test_admin_role_cannot_self_register(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "role": "admin"})
        assert response.status_code == 400

    def test_failed_registration_removes_identity_account(self, client, identity, register_user):
        register_user("legacy-1", role="artisan", email="meera@example.com")

        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 400
        assert response.json()["error"] == "Email Already Exists"
        assert identity.accounts == {}

    def test_registration_can_be_retried_after_failure(self, client, identity, register_user):
        register_user("legacy-1", role="artisan", email="meera@example.com")
        client.post("/api/auth/register", json=REGISTRATION)

        response = client.post("/api/auth/register", json={**REGISTRATION, "email": "meera.devi@example.com"})

        assert response.status_code == 201
        assert list(identity.accounts) == [response.json()["data"]["user"]["id"]]


class TestProfile:
    def test_get_profile_records_last_seen(self, client, customer):
        response = client.get("/api/user/profile", headers=customer)

        assert response.status_code == 200
        assert response.json()["data"]["user"]["last_seen_at"] is not None

    def test_update_profile(self, client, customer):
        response = client.put(
            "/api/user/profile",
            json={"phone": "+919812345678", "location": {"city": "Pune", "state": "Maharashtra", "pincode": "411001"}},
            headers=customer,
        )

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["first_name"] == "Asha"
        assert user["profile_complete"] is True

    def test_artisan_profile_requires_artisan(self, client, customer):
        response = client.put("/api/user/artisan-profile", json={"skills": ["weaving"]}, headers=customer)
        assert response.status_code == 403

    def test_public_profile_hides_revenue(self, client, artisan):
        response = client.get("/api/user/profile/art-1")

        assert response.status_code == 200
        profile = response.json()["data"]["user"]
        assert profile["is_own_profile"] is False
        assert "total_revenue" not in profile["artisan_profile"]
        assert "email" not in profile

    def test_own_public_profile(self, client, artisan):
        response = client.get("/api/user/profile/art-1", headers=artisan)
        assert response.json()["data"]["user"]["is_own_profile"] is True


class TestDashboard:
    def test_customer_dashboard(self, client, customer, list_product, place_order):
        vase = list_product("art-1", price=100.0)
        place_order("cust-1", [(vase, 2)])

        response = client.get("/api/user/dashboard", headers=customer)

        stats = response.json()["data"]["stats"]
        assert stats == {"total_orders": 1, "total_spent": 200.0}

    def test_artisan_dashboard(self, client, artisan, list_product):
        list_product("art-1")
        list_product("art-1", name="Terracotta Bowl")

        response = client.get("/api/user/dashboard", headers=artisan)

        stats = response.json()["data"]["stats"]
        assert stats["total_products"] == 2
        assert stats["total_orders"] == 0
        assert stats["revenue"] == 0


class TestDeleteAccount:
    def test_confirmation_is_required(self, client, customer):
        response = client.request("DELETE", "/api/user/account", json={"confirmation": "yes"}, headers=customer)

        assert response.status_code == 400
        assert current_domain.repository_for(User).get("cust-1").is_active is True

    def test_account_is_deactivated_and_tokens_revoked(self, client, customer):
        response = client.request(
            "DELETE", "/api/user/account", json={"confirmation": "DELETE_MY_ACCOUNT"}, headers=customer
        )

        assert response.status_code == 200
        assert current_domain.repository_for(User).get("cust-1").is_active is False

        again = client.get("/api/user/profile", headers=customer)
        assert again.status_code == 401
        assert again.json()["error"] == "Token Revoked"
