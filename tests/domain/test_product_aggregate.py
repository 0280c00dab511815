"""Tests for Product stock, rating and engagement behaviour."""

import pytest
from protean.exceptions import ValidationError

from marketplace.errors import InsufficientStock, ProductUnavailable
from marketplace.product.product import Product


def _product(stock=5, **overrides):
    details = {
        "name": "Brass Lamp",
        "description": "Hand-cast brass diya",
        "category": "metalwork",
        "price": 450.0,
        "stock_quantity": stock,
        **overrides,
    }
    return Product.list_new(artisan_id="art-1", artisan_name="Meera Devi", **details)


class TestListing:
    def test_defaults(self):
        product = _product()
        assert product.currency == "INR"
        assert product.is_active is True
        assert product.views == 0
        assert product.sales_count == 0

    def test_thumbnail_defaults_to_first_image(self):
        product = _product(image_urls=["https://img/1.jpg", "https://img/2.jpg"])
        assert product.thumbnail_url == "https://img/1.jpg"

    def test_negative_stock_is_invalid(self):
        with pytest.raises(ValidationError):
            _product(stock=-1)


class TestStock:
    def test_reserve_decrements_stock_and_counts_sales(self):
        product = _product(stock=5)
        product.reserve_stock(2)
        assert product.stock_quantity == 3
        assert product.sales_count == 2

    def test_reserve_more_than_available(self):
        product = _product(stock=1)
        with pytest.raises(InsufficientStock) as exc:
            product.reserve_stock(2)
        assert "Only 1 units available" in exc.value.message
        assert product.stock_quantity == 1
        assert product.sales_count == 0

    def test_reserve_inactive_product(self):
        product = _product()
        product.deactivate()
        with pytest.raises(ProductUnavailable):
            product.reserve_stock(1)

    def test_restore_is_inverse_of_reserve(self):
        product = _product(stock=5)
        product.reserve_stock(3)
        product.restore_stock(3)
        assert product.stock_quantity == 5
        assert product.sales_count == 0


class TestEngagement:
    def test_running_average_rating(self):
        product = _product()
        product.record_review(5)
        product.record_review(4)
        product.record_review(3)
        assert product.reviews_count == 3
        assert product.rating == pytest.approx(4.0)

    def test_toggle_favorite(self):
        product = _product()
        assert product.toggle_favorite("cust-1") is True
        assert product.favorites == ["cust-1"]
        assert product.toggle_favorite("cust-1") is False
        assert product.favorites == []

    def test_partial_update_ignores_missing_values(self):
        product = _product()
        product.update_details(name="Brass Lamp Large", price=None)
        assert product.name == "Brass Lamp Large"
        assert product.price == 450.0

    def test_deactivate_is_soft(self):
        product = _product()
        product.deactivate()
        assert product.is_active is False
        assert product.deleted_at is not None
