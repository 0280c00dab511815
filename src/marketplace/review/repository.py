from marketplace.domain import marketplace
from marketplace.review.review import Review
from marketplace.utils.scan import scan


@marketplace.repository(part_of=Review)
class ReviewRepository:
    def exists_for(self, order_id, product_id, customer_id) -> bool:
        found = (
            self._dao.query.filter(
                order_id=order_id,
                product_id=product_id,
                customer_id=customer_id,
            )
            .limit(1)
            .all()
        )
        return bool(found.items)

    def latest_for_product(self, product_id, limit=10) -> list[Review]:
        reviews = scan(self, product_id=product_id, is_active=True)
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)[:limit]
