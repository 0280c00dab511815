"""FastAPI endpoints for seller and buyer analytics."""

from typing import Annotated

from fastapi import APIRouter, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.analytics.reports import (
    artisan_overview,
    customer_overview,
    product_report,
    recent_orders,
    sales_report,
    window_start,
)
from marketplace.api.schemas import AnalyticsQuery, ApiResponse, ProductAnalyticsQuery, SalesAnalyticsQuery
from marketplace.api.security import ArtisanUser, AuthenticatedUser
from marketplace.order.order import Order
from marketplace.product.product import Product

analytics_router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def _categories(orders) -> dict:
    products = current_domain.repository_for(Product)
    categories = {}
    for product_id in {item.product_id for order in orders for item in order.items}:
        try:
            categories[product_id] = products.get(product_id).category
        except ObjectNotFoundError:
            continue
    return categories


def _artisan_activity(artisan_id: str, timeframe: str):
    since = window_start(timeframe)
    orders = recent_orders(current_domain.repository_for(Order).for_artisan(artisan_id), since)
    products = current_domain.repository_for(Product).by_artisan(artisan_id)
    return orders, products


@analytics_router.get("/overview", response_model=ApiResponse)
async def overview(params: Annotated[AnalyticsQuery, Query()], user: AuthenticatedUser) -> ApiResponse:
    if user.role == "artisan":
        orders, products = _artisan_activity(user.id, params.timeframe)
        analytics = artisan_overview(user.id, orders, products)
    else:
        since = window_start(params.timeframe)
        orders = recent_orders(current_domain.repository_for(Order).for_customer(user.id), since)
        analytics = customer_overview(orders, _categories(orders))

    return ApiResponse(
        message="Analytics overview retrieved successfully",
        data={"analytics": analytics, "timeframe": params.timeframe, "user_type": user.role},
    )


@analytics_router.get("/sales", response_model=ApiResponse)
async def sales(params: Annotated[SalesAnalyticsQuery, Query()], user: ArtisanUser) -> ApiResponse:
    orders, products = _artisan_activity(user.id, params.timeframe)
    report = sales_report(user.id, orders, products, group_by=params.group_by)
    return ApiResponse(
        message="Sales analytics retrieved successfully",
        data={**report, "timeframe": params.timeframe, "group_by": params.group_by},
    )


@analytics_router.get("/products", response_model=ApiResponse)
async def products(params: Annotated[ProductAnalyticsQuery, Query()], user: ArtisanUser) -> ApiResponse:
    orders, listed = _artisan_activity(user.id, params.timeframe)
    report = product_report(user.id, orders, listed, sort_by=params.sort_by, sort_order=params.sort_order)
    return ApiResponse(
        message="Product analytics retrieved successfully",
        data={**report, "timeframe": params.timeframe},
    )
