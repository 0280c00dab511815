"""Order cancellation by the customer, with stock restoration."""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import Forbidden, OrderNotFound, ProductNotFound
from marketplace.order.order import Order
from marketplace.product.product import Product
from marketplace.utils.lookup import load


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String(max_length=500)


def restore_order_stock(order):
    """Return every line's quantity to its product, reversing the reservation."""
    product_repo = current_domain.repository_for(Product)
    restocked = {}
    for item in order.items:
        if item.product_id not in restocked:
            restocked[item.product_id] = load(Product, item.product_id, ProductNotFound)
        restocked[item.product_id].restore_stock(item.quantity)
    for product in restocked.values():
        product_repo.add(product)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load(Order, command.order_id, OrderNotFound, "Order does not exist")
        if order.customer_id != command.customer_id:
            raise Forbidden("You can only cancel your own orders")

        order.cancel(reason=command.reason, cancelled_by=command.customer_id)
        restore_order_stock(order)
        current_domain.repository_for(Order).add(order)
        return order.to_dict()
