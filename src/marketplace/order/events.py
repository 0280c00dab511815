"""Domain events for the Order aggregate.

Notification fan-out listens to these after the Unit of Work that raised
them has committed. List payloads are carried as JSON text.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and its stock was reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    total_amount = Float(required=True)
    currency = String(default="INR")
    artisan_ids = Text(required=True)  # JSON array of artisan ids
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    """A participating artisan moved the order along its lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    tracking_number = String()
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    """The customer cancelled the order and its stock was restored."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    artisan_ids = Text(required=True)  # JSON array of artisan ids
    reason = String()
    cancelled_at = DateTime(required=True)
