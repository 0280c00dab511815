import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from marketplace.domain import marketplace

    marketplace.init()
    marketplace.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db, setup_db

    setup_db(marketplace)

    yield

    drop_db(marketplace)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture
def register_user():
    """Register a marketplace user directly through the domain."""
    from protean import current_domain

    from marketplace.user.registration import RegisterUser

    def _register(user_id, role="customer", first_name="Asha", last_name="Rao", email=None):
        return current_domain.process(
            RegisterUser(
                user_id=user_id,
                email=email or f"{user_id}@example.com",
                first_name=first_name,
                last_name=last_name,
                role=role,
            ),
            asynchronous=False,
        )

    return _register


@pytest.fixture
def list_product():
    """List a product for an artisan directly through the domain."""
    from protean import current_domain

    from marketplace.product.creation import CreateProduct

    def _list(artisan_id, name="Blue Pottery Vase", price=100.0, stock=10, category="pottery"):
        product = current_domain.process(
            CreateProduct(
                artisan_id=artisan_id,
                artisan_name="Meera Devi",
                name=name,
                description=f"Handmade {name.lower()} from Jaipur",
                category=category,
                price=price,
                stock_quantity=stock,
            ),
            asynchronous=False,
        )
        return product["id"]

    return _list


SHIPPING_ADDRESS = {
    "name": "Asha Rao",
    "street": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "pincode": "560001",
    "phone": "+919812345678",
}


@pytest.fixture
def shipping_address():
    return dict(SHIPPING_ADDRESS)


@pytest.fixture
def place_order(shipping_address):
    """Place an order for ``customer_id`` with ``[(product_id, quantity), ...]``."""
    import json

    from protean import current_domain

    from marketplace.order.placement import PlaceOrder

    def _place(customer_id, lines, payment_method="upi"):
        return current_domain.process(
            PlaceOrder(
                customer_id=customer_id,
                customer_name="Asha Rao",
                customer_email=f"{customer_id}@example.com",
                items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines]),
                shipping_address=json.dumps(shipping_address),
                payment_method=payment_method,
            ),
            asynchronous=False,
        )

    return _place
