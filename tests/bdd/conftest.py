"""Shared BDD fixtures and step definitions for the order lifecycle."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace.errors import InvalidTransition, OrderNotCancellable
from marketplace.order.order import Order

_PATH = [
    ("confirmed", None),
    ("processing", None),
    ("shipped", "TRK-0"),
    ("delivered", None),
]


@pytest.fixture()
def error():
    """Container for the error raised by a When step."""
    return {"exc": None}


def _pending_order():
    order = Order.place(
        customer_id="cust-001",
        customer_name="Asha Rao",
        customer_email="asha@example.com",
        lines=[
            {
                "product_id": "prod-001",
                "product_name": "Blue Pottery Vase",
                "artisan_id": "art-001",
                "artisan_name": "Meera Devi",
                "price": 100.0,
                "quantity": 2,
            }
        ],
        shipping_address={
            "name": "Asha Rao",
            "street": "12 MG Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pincode": "560001",
            "phone": "+919812345678",
        },
        payment_method="upi",
    )
    order._events.clear()
    return order


@given("a pending order", target_fixture="order")
def pending_order():
    return _pending_order()


@given(parsers.parse('an order in "{status}"'), target_fixture="order")
def order_in(status):
    order = _pending_order()
    for step, tracking in _PATH:
        if order.status == status:
            break
        order.transition_to(step, tracking_number=tracking, changed_by="art-001")
    order._events.clear()
    return order


@then(parsers.parse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the transition is rejected")
def transition_rejected(error):
    assert isinstance(error["exc"], InvalidTransition)


@then("a tracking number is demanded")
def tracking_number_demanded(error):
    assert isinstance(error["exc"], ValidationError)
    assert "tracking_number" in error["exc"].messages


@then("the cancellation is refused")
def cancellation_refused(error):
    assert isinstance(error["exc"], OrderNotCancellable)
