"""FastAPI endpoints for the order lifecycle."""

import json
from typing import Annotated

from fastapi import APIRouter, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.api.presenters import order_view, paginate
from marketplace.api.retry import process_with_retry
from marketplace.api.schemas import (
    ApiResponse,
    CancelOrderRequest,
    CreateOrderRequest,
    OrderListQuery,
    OrderReviewRequest,
    UpdateOrderStatusRequest,
)
from marketplace.api.security import ArtisanUser, AuthenticatedUser, CustomerUser
from marketplace.errors import Forbidden, OrderNotFound
from marketplace.order.cancellation import CancelOrder
from marketplace.order.feedback import SubmitOrderReview
from marketplace.order.order import STATUS_OPTIONS, Order
from marketplace.order.placement import PlaceOrder
from marketplace.order.status import UpdateOrderStatus
from marketplace.user.user import User

order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("/create", status_code=201, response_model=ApiResponse)
async def create_order(body: CreateOrderRequest, user: CustomerUser) -> ApiResponse:
    command = PlaceOrder(
        customer_id=user.id,
        customer_name=user.full_name,
        customer_email=user.email,
        items=json.dumps([item.model_dump() for item in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
        notes=body.notes,
    )
    order = process_with_retry(command)
    return ApiResponse(
        message="Order created successfully",
        data={"order_id": order["id"], "order_number": order["order_number"], "order": order},
    )


@order_router.get("/list", response_model=ApiResponse)
async def list_orders(params: Annotated[OrderListQuery, Query()], user: AuthenticatedUser) -> ApiResponse:
    repo = current_domain.repository_for(Order)
    if user.role == "artisan":
        orders = repo.for_artisan(user.id, status=params.status)
    else:
        orders = repo.for_customer(user.id, status=params.status)

    orders.sort(key=lambda o: o.created_at, reverse=params.sort_order == "desc")
    page, pagination = paginate(orders, params.page, params.limit)
    return ApiResponse(
        message="Orders retrieved successfully",
        data={"orders": [order_view(order.to_dict(), user) for order in page], "pagination": pagination},
    )


@order_router.get("/status-options", response_model=ApiResponse)
async def status_options(user: AuthenticatedUser) -> ApiResponse:
    return ApiResponse(message="Status options retrieved successfully", data={"status_options": STATUS_OPTIONS})


@order_router.get("/{order_id}", response_model=ApiResponse)
async def get_order(order_id: str, user: AuthenticatedUser) -> ApiResponse:
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError as exc:
        raise OrderNotFound("Order does not exist") from exc

    is_owner = order.customer_id == user.id
    is_participant = user.role == "artisan" and order.involves(user.id)
    if not (is_owner or is_participant or user.role == "admin"):
        raise Forbidden("You do not have access to this order")

    data = order_view(order.to_dict(), user)
    if user.role == "artisan":
        try:
            customer = current_domain.repository_for(User).get(order.customer_id)
            data["customer"] = {
                "first_name": customer.first_name,
                "last_name": customer.last_name,
                "email": customer.email,
                "phone": customer.phone,
                "avatar_url": customer.avatar_url,
            }
        except ObjectNotFoundError:
            data["customer"] = None

    return ApiResponse(message="Order retrieved successfully", data={"order": data})


@order_router.patch("/{order_id}/status", response_model=ApiResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, user: ArtisanUser) -> ApiResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        artisan_id=user.id,
        status=body.status,
        tracking_number=body.tracking_number,
        notes=body.notes,
    )
    order = process_with_retry(command)
    return ApiResponse(
        message="Order status updated successfully",
        data={
            "order_id": order_id,
            "new_status": order["status"],
            "tracking_number": order.get("tracking_number"),
            "order": order_view(order, user),
        },
    )


@order_router.post("/{order_id}/cancel", response_model=ApiResponse)
async def cancel_order(order_id: str, user: AuthenticatedUser, body: CancelOrderRequest | None = None) -> ApiResponse:
    reason = body.reason if body else None
    order = process_with_retry(CancelOrder(order_id=order_id, customer_id=user.id, reason=reason))
    return ApiResponse(
        message="Order cancelled successfully",
        data={
            "order_id": order_id,
            "order_number": order["order_number"],
            "reason": order["cancellation_reason"],
        },
    )


@order_router.post("/{order_id}/review", status_code=201, response_model=ApiResponse)
async def review_order(order_id: str, body: OrderReviewRequest, user: AuthenticatedUser) -> ApiResponse:
    command = SubmitOrderReview(
        order_id=order_id,
        customer_id=user.id,
        customer_name=user.full_name,
        product_id=body.product_id,
        rating=body.rating,
        comment=body.comment,
    )
    review = process_with_retry(command)
    return ApiResponse(message="Review added successfully", data={"review_id": review["id"], "review": review})
