"""Customer engagement with a product: favorites and page views."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import ProductNotFound
from marketplace.product.product import Product
from marketplace.utils.lookup import load


@marketplace.command(part_of="Product")
class ToggleFavorite:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Product")
class RecordProductView:
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Product)
class ProductEngagementHandler:
    @handle(ToggleFavorite)
    def toggle_favorite(self, command):
        product = load(Product, command.product_id, ProductNotFound, "Product does not exist")
        added = product.toggle_favorite(command.user_id)
        current_domain.repository_for(Product).add(product)
        return {
            "action": "added" if added else "removed",
            "favorites_count": len(product.favorites),
            "is_favorited": added,
        }

    @handle(RecordProductView)
    def record_view(self, command):
        product = load(Product, command.product_id, ProductNotFound, "Product does not exist")
        product.record_view()
        current_domain.repository_for(Product).add(product)
