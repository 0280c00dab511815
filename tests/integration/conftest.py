from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from marketplace.api.app import build_app
from marketplace.identity.memory_provider import InMemoryIdentityProvider


@pytest.fixture
def identity():
    return InMemoryIdentityProvider()


@pytest.fixture
def client(identity):
    return TestClient(build_app(identity_provider=identity))


@pytest.fixture
def auth_headers(identity):
    def _headers(uid, expires_in=timedelta(hours=1)):
        return {"Authorization": f"Bearer {identity.issue_token(uid, expires_in=expires_in)}"}

    return _headers


@pytest.fixture
def customer(register_user, auth_headers):
    register_user("cust-1", role="customer", first_name="Asha", last_name="Rao")
    return auth_headers("cust-1")


@pytest.fixture
def artisan(register_user, auth_headers):
    register_user("art-1", role="artisan", first_name="Meera", last_name="Devi")
    return auth_headers("art-1")


@pytest.fixture
def admin(register_user, auth_headers):
    register_user("admin-1", role="admin", first_name="Ravi", last_name="Kumar")
    return auth_headers("admin-1")
