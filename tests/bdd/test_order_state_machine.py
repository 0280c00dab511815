"""BDD tests for the order state machine."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

from marketplace.errors import InvalidTransition, OrderNotCancellable

scenarios("features/order_state_machine.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.re(r'the artisan moves the order to "(?P<status>[^"]+)" with tracking number "(?P<tracking>[^"]+)"'))
def move_with_tracking(order, error, status, tracking):
    try:
        order.transition_to(status, tracking_number=tracking, changed_by="art-001")
    except (InvalidTransition, ValidationError) as exc:
        error["exc"] = exc


@when(parsers.re(r'the artisan moves the order to "(?P<status>[^"]+)"'))
def move(order, error, status):
    try:
        order.transition_to(status, changed_by="art-001")
    except (InvalidTransition, ValidationError) as exc:
        error["exc"] = exc


@when("the customer cancels the order")
def customer_cancels(order, error):
    try:
        order.cancel(cancelled_by="cust-001")
    except OrderNotCancellable as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the tracking number is "{tracking}"'))
def tracking_number_is(order, tracking):
    assert order.tracking_number == tracking


@then(parsers.parse('the cancellation reason is "{reason}"'))
def cancellation_reason_is(order, reason):
    assert order.cancellation_reason == reason
