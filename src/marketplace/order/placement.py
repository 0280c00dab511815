"""Order placement: command and handler.

Every product is loaded and checked before anything is written. The order
insert and all stock reservations are then persisted by the command's Unit
of Work, so either all of them land or none do.
"""

import json
from collections import defaultdict

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import ProductNotFound
from marketplace.order.order import Order
from marketplace.product.product import Product
from marketplace.utils.lookup import load
from marketplace.utils.settings import setting


@marketplace.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_name = String(max_length=101)
    customer_email = String(max_length=254)
    items = Text(required=True)  # JSON: [{product_id, quantity, customizations}]
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=10)
    notes = Text()


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested_items = json.loads(command.items)

        products = {}
        requested = defaultdict(int)
        lines = []
        for item in requested_items:
            product_id = item["product_id"]
            if product_id not in products:
                products[product_id] = load(Product, product_id, ProductNotFound, f"Product {product_id} not found")
            product = products[product_id]

            # Repeated lines for one product draw on the same stock
            requested[product_id] += item["quantity"]
            product.ensure_orderable(requested[product_id])

            lines.append(
                {
                    "product_id": product_id,
                    "product_name": product.name,
                    "artisan_id": product.artisan_id,
                    "artisan_name": product.artisan_name,
                    "price": product.price,
                    "quantity": item["quantity"],
                    "customizations": item.get("customizations") or {},
                    "product_image": product.thumbnail_url,
                }
            )

        order = Order.place(
            customer_id=command.customer_id,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            lines=lines,
            shipping_address=json.loads(command.shipping_address),
            payment_method=command.payment_method,
            notes=command.notes,
            estimated_delivery_days=setting("estimated_delivery_days"),
        )

        product_repo = current_domain.repository_for(Product)
        for product_id, quantity in requested.items():
            product = products[product_id]
            product.reserve_stock(quantity)
            product_repo.add(product)

        current_domain.repository_for(Order).add(order)
        return order.to_dict()
