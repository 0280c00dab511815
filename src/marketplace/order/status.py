"""Artisan-driven status updates along the order state machine."""

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import Forbidden, OrderNotFound, UserNotFound
from marketplace.order.cancellation import restore_order_stock
from marketplace.order.order import Order, OrderStatus
from marketplace.user.user import User
from marketplace.utils.lookup import load


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    tracking_number = String(max_length=100)
    notes = Text()


@marketplace.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        order = load(Order, command.order_id, OrderNotFound, "Order does not exist")
        if not order.involves(command.artisan_id):
            raise Forbidden("You do not have access to this order")

        order.transition_to(
            command.status,
            tracking_number=command.tracking_number,
            notes=command.notes,
            changed_by=command.artisan_id,
        )

        if order.status == OrderStatus.DELIVERED.value:
            artisan = load(User, command.artisan_id, UserNotFound)
            artisan.record_delivery_sale(order.artisan_total(command.artisan_id))
            current_domain.repository_for(User).add(artisan)
        elif order.status == OrderStatus.CANCELLED.value:
            restore_order_stock(order)

        current_domain.repository_for(Order).add(order)
        return order.to_dict()
