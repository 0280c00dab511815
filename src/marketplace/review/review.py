"""Review aggregate: a customer's rating of a product from a delivered order."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.aggregate
class Review:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=101)
    artisan_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and not 1 <= self.rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

    @classmethod
    def submit(cls, order_id, product_id, customer_id, customer_name, artisan_id, rating, comment=None):
        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            product_id=product_id,
            customer_id=customer_id,
            customer_name=customer_name,
            artisan_id=artisan_id,
            rating=rating,
            comment=comment or "",
            created_at=now,
            updated_at=now,
        )
