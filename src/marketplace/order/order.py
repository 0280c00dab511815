"""Order aggregate: the core of the marketplace.

An order snapshots the price, name and artisan of every product at creation
time, so later catalogue edits never change what the customer bought.

State Machine (6 states):
    pending    -> confirmed | cancelled
    confirmed  -> processing | cancelled
    processing -> shipped | cancelled
    shipped    -> delivered
    delivered  -> (terminal)
    cancelled  -> (terminal)

Customers may only cancel from pending or confirmed; artisans drive every
other transition.
"""

import json
import math
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Dict,
    Float,
    HasMany,
    Identifier,
    Integer,
    List,
    String,
    Text,
    ValueObject,
)

from marketplace.domain import marketplace
from marketplace.errors import InvalidTransition, OrderNotCancellable
from marketplace.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from marketplace.order.numbering import generate_order_number


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"
    COD = "cod"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# States from which the customer may cancel
_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

# Timestamp recorded when the order enters a state
_STATUS_TIMESTAMPS = {
    OrderStatus.CONFIRMED: "confirmed_at",
    OrderStatus.PROCESSING: "processing_at",
    OrderStatus.SHIPPED: "shipped_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCELLED: "cancelled_at",
}

STATUS_OPTIONS = [
    {"value": "pending", "label": "Pending", "description": "Order placed, awaiting confirmation"},
    {"value": "confirmed", "label": "Confirmed", "description": "Order confirmed by artisan"},
    {"value": "processing", "label": "Processing", "description": "Order is being prepared"},
    {"value": "shipped", "label": "Shipped", "description": "Order has been shipped"},
    {"value": "delivered", "label": "Delivered", "description": "Order has been delivered"},
    {"value": "cancelled", "label": "Cancelled", "description": "Order has been cancelled"},
]


def allowed_transitions(status):
    return {s.value for s in _VALID_TRANSITIONS[OrderStatus(status)]}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, fixed once the order is placed."""

    name = String(required=True, max_length=100)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=10)
    country = String(max_length=100, default="India")
    phone = String(required=True, max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Order")
class OrderItem:
    """A line item: a product snapshot plus the ordered quantity."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=100)
    artisan_id = Identifier(required=True)
    artisan_name = String(max_length=101)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    total = Float(required=True, min_value=0.0)
    customizations = Dict()
    product_image = String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    order_number = String(required=True, max_length=40)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=101)
    customer_email = String(max_length=254)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="INR")
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(choices=PaymentMethod, required=True)
    payment_status = String(max_length=20, default="pending")
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    notes = Text()
    status_notes = Text()
    artisan_ids = List(content_type=String)
    tracking_number = String(max_length=100)
    estimated_delivery = DateTime()
    cancellation_reason = String(max_length=500)
    cancelled_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()
    confirmed_at = DateTime()
    processing_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def total_matches_line_items(self):
        if not self.items:
            return
        lines_total = sum(item.total for item in self.items)
        if not math.isclose(lines_total, self.total_amount or 0.0, abs_tol=0.005):
            raise ValidationError({"total_amount": ["Order total must equal the sum of its line totals"]})

    @invariant.post
    def artisan_ids_match_line_items(self):
        if not self.items:
            return
        if set(self.artisan_ids or []) != {item.artisan_id for item in self.items}:
            raise ValidationError({"artisan_ids": ["Artisans must be exactly those of the line items"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        customer_name,
        customer_email,
        lines,
        shipping_address,
        payment_method,
        notes=None,
        currency="INR",
        estimated_delivery_days=7,
    ):
        """Create a pending order from already-snapshotted line data.

        Args:
            lines: List of dicts with product_id, product_name, artisan_id,
                artisan_name, price, quantity, customizations, product_image.
        """
        now = datetime.now(UTC)

        items = [OrderItem(**line, total=line["price"] * line["quantity"]) for line in lines]
        artisan_ids = list(dict.fromkeys(item.artisan_id for item in items))

        order = cls(
            order_number=generate_order_number(now),
            customer_id=customer_id,
            customer_name=customer_name,
            customer_email=customer_email,
            items=items,
            total_amount=sum(item.total for item in items),
            currency=currency,
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            notes=notes or "",
            artisan_ids=artisan_ids,
            estimated_delivery=now + timedelta(days=estimated_delivery_days),
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                total_amount=order.total_amount,
                currency=currency,
                artisan_ids=json.dumps(artisan_ids),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def lines_for(self, artisan_id):
        return [item for item in self.items if item.artisan_id == artisan_id]

    def artisan_total(self, artisan_id):
        return sum(item.total for item in self.lines_for(artisan_id))

    def involves(self, artisan_id):
        return artisan_id in (self.artisan_ids or [])

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def transition_to(self, new_status, tracking_number=None, notes=None, changed_by=None):
        """Move the order to ``new_status`` on behalf of a participating artisan.

        Nothing is mutated unless the transition is allowed and, for
        ``shipped``, a tracking number is supplied.
        """
        current = OrderStatus(self.status)
        target = OrderStatus(new_status)
        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot change status from {current.value} to {target.value}")
        tracking_number = (tracking_number or "").strip() or None
        if target == OrderStatus.SHIPPED and not tracking_number:
            raise ValidationError(
                {"tracking_number": ["Tracking number is required when marking order as shipped"]}
            )

        now = datetime.now(UTC)
        self.status = target.value
        setattr(self, _STATUS_TIMESTAMPS[target], now)
        if tracking_number:
            self.tracking_number = tracking_number
        if notes:
            self.status_notes = notes
        if target == OrderStatus.CANCELLED:
            self.cancelled_by = changed_by
            self.cancellation_reason = notes or "Cancelled by artisan"
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_id=str(self.customer_id),
                previous_status=current.value,
                new_status=target.value,
                tracking_number=tracking_number,
                changed_by=changed_by,
                changed_at=now,
            )
        )

    def cancel(self, reason=None, cancelled_by=None):
        """Cancel on behalf of the customer. Only pending or confirmed orders qualify."""
        current = OrderStatus(self.status)
        if current not in _CANCELLABLE_STATES:
            raise OrderNotCancellable("Order cannot be cancelled at this stage")

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.cancelled_by = cancelled_by
        self.cancellation_reason = reason or "Cancelled by customer"
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_id=str(self.customer_id),
                artisan_ids=json.dumps(list(self.artisan_ids)),
                reason=reason or "No reason provided",
                cancelled_at=now,
            )
        )
