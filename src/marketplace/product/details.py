"""Partial edits of a product by its owning artisan."""

import json

from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import Forbidden, ProductNotFound
from marketplace.product.product import Product
from marketplace.utils.lookup import load


@marketplace.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    category = String(max_length=50)
    price = Float()
    tags = Text()  # JSON array of strings
    materials = Text()  # JSON array of strings
    image_urls = Text()  # JSON array of strings
    customizable = Boolean()
    stock_quantity = Integer()
    is_active = Boolean()


def load_owned_product(product_id, artisan_id, action):
    product = load(Product, product_id, ProductNotFound, "Product does not exist")
    if product.artisan_id != artisan_id:
        raise Forbidden(f"You can only {action} your own products")
    return product


@marketplace.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_owned_product(command.product_id, command.artisan_id, "update")
        product.update_details(
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
            tags=json.loads(command.tags) if command.tags else None,
            materials=json.loads(command.materials) if command.materials else None,
            image_urls=json.loads(command.image_urls) if command.image_urls else None,
            customizable=command.customizable,
            stock_quantity=command.stock_quantity,
            is_active=command.is_active,
        )
        current_domain.repository_for(Product).add(product)
        return product.to_dict()
