"""Product lifecycle: soft deletion by the owner and featuring by an admin."""

from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import ProductNotFound
from marketplace.product.details import load_owned_product
from marketplace.product.product import Product
from marketplace.utils.lookup import load


@marketplace.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)


@marketplace.command(part_of="Product")
class FeatureProduct:
    product_id = Identifier(required=True)
    is_featured = Boolean(default=True)


@marketplace.command_handler(part_of=Product)
class ProductLifecycleHandler:
    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        product = load_owned_product(command.product_id, command.artisan_id, "delete")
        product.deactivate()
        current_domain.repository_for(Product).add(product)

    @handle(FeatureProduct)
    def feature_product(self, command):
        product = load(Product, command.product_id, ProductNotFound, "Product does not exist")
        product.set_featured(bool(command.is_featured))
        current_domain.repository_for(Product).add(product)
        return product.to_dict()
