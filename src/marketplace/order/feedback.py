"""Reviews submitted by a customer against a delivered order."""

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import (
    DuplicateReview,
    Forbidden,
    OrderNotFound,
    OrderNotReviewable,
    ProductNotFound,
)
from marketplace.order.order import Order, OrderStatus
from marketplace.product.product import Product
from marketplace.review.review import Review
from marketplace.utils.lookup import load


@marketplace.command(part_of="Order")
class SubmitOrderReview:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=101)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()


@marketplace.command_handler(part_of=Order)
class SubmitOrderReviewHandler:
    @handle(SubmitOrderReview)
    def submit_review(self, command):
        order = load(Order, command.order_id, OrderNotFound, "Order does not exist")
        if order.customer_id != command.customer_id:
            raise Forbidden("You can only review your own orders")
        if order.status != OrderStatus.DELIVERED.value:
            raise OrderNotReviewable("You can only review delivered orders")

        line = next((item for item in order.items if item.product_id == command.product_id), None)
        if line is None:
            raise OrderNotReviewable("Product not found in this order")

        review_repo = current_domain.repository_for(Review)
        if review_repo.exists_for(command.order_id, command.product_id, command.customer_id):
            raise DuplicateReview("You have already reviewed this product")

        review = Review.submit(
            order_id=command.order_id,
            product_id=command.product_id,
            customer_id=command.customer_id,
            customer_name=command.customer_name,
            artisan_id=line.artisan_id,
            rating=command.rating,
            comment=command.comment,
        )

        product = load(Product, command.product_id, ProductNotFound, "Product does not exist")
        product.record_review(command.rating)

        review_repo.add(review)
        current_domain.repository_for(Product).add(product)
        return review.to_dict()
