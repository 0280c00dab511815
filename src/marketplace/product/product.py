"""Product aggregate: a handmade item listed by an artisan.

Stock and sales counters move only through ``reserve_stock`` and
``restore_stock`` so that placing an order and cancelling it are exact
inverses. Products are never physically deleted.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    Identifier,
    Integer,
    List,
    String,
    Text,
)

from marketplace.domain import marketplace
from marketplace.errors import InsufficientStock, ProductUnavailable


@marketplace.aggregate
class Product:
    artisan_id = Identifier(required=True)
    artisan_name = String(max_length=101)
    name = String(required=True, max_length=100)
    description = Text(required=True)
    category = String(required=True, max_length=50)
    price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="INR")
    tags = List(content_type=String)
    materials = List(content_type=String)
    customizable = Boolean(default=False)
    stock_quantity = Integer(default=0)
    image_urls = List(content_type=String)
    thumbnail_url = String(max_length=500)

    # Engagement counters
    views = Integer(default=0)
    sales_count = Integer(default=0)
    rating = Float(default=0.0)
    reviews_count = Integer(default=0)
    favorites = List(content_type=String)

    is_active = Boolean(default=True)
    is_featured = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()
    deleted_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})

    @classmethod
    def list_new(cls, artisan_id, artisan_name, **details):
        now = datetime.now(UTC)
        image_urls = details.get("image_urls") or []
        if not details.get("thumbnail_url") and image_urls:
            details["thumbnail_url"] = image_urls[0]
        return cls(
            artisan_id=artisan_id,
            artisan_name=artisan_name,
            created_at=now,
            updated_at=now,
            **details,
        )

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    def ensure_orderable(self, quantity):
        """Check that ``quantity`` units can be ordered right now, without mutating."""
        if not self.is_active:
            raise ProductUnavailable(f"Product {self.name} is no longer available")
        if self.stock_quantity < quantity:
            raise InsufficientStock(f"Only {self.stock_quantity} units available for {self.name}")

    def reserve_stock(self, quantity):
        self.ensure_orderable(quantity)
        self.stock_quantity -= quantity
        self.sales_count += quantity
        self._touch()

    def restore_stock(self, quantity):
        self.stock_quantity += quantity
        self.sales_count -= quantity
        self._touch()

    def record_review(self, rating):
        """Fold a new rating into the running average."""
        count = self.reviews_count or 0
        self.rating = ((self.rating or 0.0) * count + rating) / (count + 1)
        self.reviews_count = count + 1
        self._touch()

    def record_view(self):
        self.views = (self.views or 0) + 1

    def toggle_favorite(self, user_id):
        """Add or remove ``user_id`` from favorites. Returns True when added."""
        favorites = list(self.favorites or [])
        if user_id in favorites:
            favorites.remove(user_id)
            added = False
        else:
            favorites.append(user_id)
            added = True
        self.favorites = favorites
        self._touch()
        return added

    def update_details(self, **changes):
        for field_name, value in changes.items():
            if value is not None:
                setattr(self, field_name, value)
        if changes.get("image_urls") and not self.thumbnail_url:
            self.thumbnail_url = self.image_urls[0]
        self._touch()

    def set_featured(self, featured):
        self.is_featured = featured
        self._touch()

    def deactivate(self):
        now = datetime.now(UTC)
        self.is_active = False
        self.deleted_at = now
        self.updated_at = now
