from marketplace.domain import marketplace
from marketplace.order.order import Order
from marketplace.utils.scan import scan


@marketplace.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id, status=None) -> list[Order]:
        criteria = {"customer_id": customer_id}
        if status:
            criteria["status"] = status
        return list(scan(self, **criteria))

    def for_artisan(self, artisan_id, status=None) -> list[Order]:
        """Orders containing at least one line sold by ``artisan_id``."""
        criteria = {"status": status} if status else {}
        return [order for order in scan(self, **criteria) if order.involves(artisan_id)]
