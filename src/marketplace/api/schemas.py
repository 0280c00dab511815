"""Pydantic request/query schemas and the response envelope.

Unknown fields are ignored (pydantic's default), so handlers only ever see
the normalized model with defaults applied.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

PHONE_PATTERN = r"^[+]?[1-9][\d]{0,15}$"
PINCODE_PATTERN = r"^[0-9]{6}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

OrderStatusValue = Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled"]


# --- Envelope ---


class ApiResponse(BaseModel):
    success: bool = True
    message: str
    data: dict[str, Any] | None = None


# --- Shared ---


class LocationSchema(BaseModel):
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field("India", max_length=100)
    pincode: str = Field(..., pattern=PINCODE_PATTERN)


class PaginationQuery(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=50)
    sort_order: Literal["asc", "desc"] = "desc"


# --- Users ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "meera@example.com",
                    "password": "s3cret!",
                    "first_name": "Meera",
                    "last_name": "Devi",
                    "role": "artisan",
                    "phone": "+919876543210",
                    "location": {"city": "Jaipur", "state": "Rajasthan", "pincode": "302001"},
                }
            ]
        }
    }

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    role: Literal["customer", "artisan"]
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    location: LocationSchema | None = None


class UpdateProfileRequest(BaseModel):
    first_name: str | None = Field(None, min_length=2, max_length=50)
    last_name: str | None = Field(None, min_length=2, max_length=50)
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    bio: str | None = Field(None, max_length=500)
    avatar_url: str | None = Field(None, max_length=500)
    location: LocationSchema | None = None


class UpdateArtisanProfileRequest(BaseModel):
    skills: list[str] | None = None
    specializations: list[str] | None = None
    bio: str | None = Field(None, max_length=500)
    experience_level: Literal["beginner", "intermediate", "expert", "master"] | None = None


class DeleteAccountRequest(BaseModel):
    confirmation: Literal["DELETE_MY_ACCOUNT"]


# --- Products ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Blue Pottery Vase",
                    "description": "Hand-painted Jaipur blue pottery vase.",
                    "category": "pottery",
                    "price": 1200,
                    "tags": ["vase", "blue pottery"],
                    "materials": ["quartz", "glass"],
                    "stock_quantity": 5,
                }
            ]
        }
    }

    name: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    category: str = Field(..., min_length=1, max_length=50)
    price: float = Field(..., gt=0)
    currency: str = Field("INR", max_length=3)
    tags: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    customizable: bool = False
    stock_quantity: int = Field(..., ge=0)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=3, max_length=100)
    description: str | None = Field(None, min_length=10, max_length=1000)
    category: str | None = Field(None, min_length=1, max_length=50)
    price: float | None = Field(None, gt=0)
    tags: list[str] | None = None
    materials: list[str] | None = None
    image_urls: list[str] | None = None
    customizable: bool | None = None
    stock_quantity: int | None = Field(None, ge=0)
    is_active: bool | None = None


class FeatureProductRequest(BaseModel):
    is_featured: bool = True


class ProductListQuery(PaginationQuery):
    limit: int = Field(12, ge=1, le=50)
    category: str | None = None
    artisan_id: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    search: str | None = None
    featured: bool | None = None


# --- Orders ---


class ShippingAddressSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., pattern=PINCODE_PATTERN)
    country: str = Field("India", max_length=100)
    phone: str = Field(..., pattern=PHONE_PATTERN)


class OrderItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    customizations: dict[str, Any] = Field(default_factory=dict)


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                    "shipping_address": {
                        "name": "Asha Rao",
                        "street": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "pincode": "560001",
                        "phone": "+919812345678",
                    },
                    "payment_method": "upi",
                }
            ]
        }
    }

    items: list[OrderItemRequest] = Field(..., min_length=1)
    shipping_address: ShippingAddressSchema
    payment_method: Literal["card", "upi", "wallet", "cod"]
    notes: str | None = Field(None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatusValue
    tracking_number: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=500)


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class OrderReviewRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=1000)


class OrderListQuery(PaginationQuery):
    status: OrderStatusValue | None = None


# --- Notifications ---


class NotificationListQuery(PaginationQuery):
    unread_only: bool = False


# --- Analytics ---


class AnalyticsQuery(BaseModel):
    timeframe: Literal["7d", "30d", "90d"] = "30d"


class SalesAnalyticsQuery(AnalyticsQuery):
    group_by: Literal["day", "week", "month"] = "day"


class ProductAnalyticsQuery(AnalyticsQuery):
    sort_by: Literal["views", "sales_count", "rating", "recent_orders", "recent_revenue"] = "views"
    sort_order: Literal["asc", "desc"] = "desc"
