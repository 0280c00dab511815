from marketplace.domain import marketplace
from marketplace.product.product import Product
from marketplace.utils.scan import scan


@marketplace.repository(part_of=Product)
class ProductRepository:
    def search(
        self,
        category=None,
        artisan_id=None,
        min_price=None,
        max_price=None,
        search=None,
        featured=None,
    ) -> list[Product]:
        """Active products matching every given filter, newest first."""
        criteria = {"is_active": True}
        if category:
            criteria["category"] = category
        if artisan_id:
            criteria["artisan_id"] = artisan_id
        if featured:
            criteria["is_featured"] = True

        needle = search.lower() if search else None
        matches = []
        for product in scan(self, **criteria):
            if min_price is not None and product.price < min_price:
                continue
            if max_price is not None and product.price > max_price:
                continue
            if needle:
                haystack = " ".join([product.name or "", product.description or "", " ".join(product.tags or [])])
                if needle not in haystack.lower():
                    continue
            matches.append(product)

        return sorted(matches, key=lambda p: p.created_at, reverse=True)

    def by_artisan(self, artisan_id) -> list[Product]:
        return list(scan(self, artisan_id=artisan_id))
