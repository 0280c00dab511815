"""Product listing by an artisan."""

import json

from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class CreateProduct:
    artisan_id = Identifier(required=True)
    artisan_name = String(max_length=101)
    name = String(required=True, max_length=100)
    description = Text(required=True)
    category = String(required=True, max_length=50)
    price = Float(required=True)
    currency = String(max_length=3, default="INR")
    tags = Text()  # JSON array of strings
    materials = Text()  # JSON array of strings
    image_urls = Text()  # JSON array of strings
    customizable = Boolean(default=False)
    stock_quantity = Integer(required=True)


@marketplace.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.list_new(
            artisan_id=command.artisan_id,
            artisan_name=command.artisan_name,
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
            currency=command.currency or "INR",
            tags=json.loads(command.tags) if command.tags else [],
            materials=json.loads(command.materials) if command.materials else [],
            image_urls=json.loads(command.image_urls) if command.image_urls else [],
            customizable=bool(command.customizable),
            stock_quantity=command.stock_quantity,
        )
        current_domain.repository_for(Product).add(product)
        return product.to_dict()
