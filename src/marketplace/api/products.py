"""FastAPI endpoints for product listings."""

import json
from typing import Annotated

from fastapi import APIRouter, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.api.presenters import artisan_card, paginate
from marketplace.api.schemas import (
    ApiResponse,
    CreateProductRequest,
    FeatureProductRequest,
    ProductListQuery,
    UpdateProductRequest,
)
from marketplace.api.security import AdminUser, ArtisanUser, AuthenticatedUser, OptionalUser
from marketplace.errors import ProductNotFound
from marketplace.product.categories import DEFAULT_CATEGORIES
from marketplace.product.creation import CreateProduct
from marketplace.product.details import UpdateProduct
from marketplace.product.engagement import RecordProductView, ToggleFavorite
from marketplace.product.lifecycle import DeactivateProduct, FeatureProduct
from marketplace.product.product import Product
from marketplace.review.review import Review
from marketplace.user.user import User

product_router = APIRouter(prefix="/api/products", tags=["products"])


def _json_list(values):
    return json.dumps(values) if values is not None else None


def _artisan(artisan_id):
    try:
        return current_domain.repository_for(User).get(artisan_id)
    except ObjectNotFoundError:
        return None


@product_router.post("/create", status_code=201, response_model=ApiResponse)
async def create_product(body: CreateProductRequest, user: ArtisanUser) -> ApiResponse:
    command = CreateProduct(
        artisan_id=user.id,
        artisan_name=user.full_name,
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        currency=body.currency,
        tags=_json_list(body.tags),
        materials=_json_list(body.materials),
        image_urls=_json_list(body.image_urls),
        customizable=body.customizable,
        stock_quantity=body.stock_quantity,
    )
    product = current_domain.process(command, asynchronous=False)
    return ApiResponse(
        message="Product created successfully",
        data={"product_id": product["id"], "product": product},
    )


@product_router.get("/list", response_model=ApiResponse)
async def list_products(params: Annotated[ProductListQuery, Query()], viewer: OptionalUser) -> ApiResponse:
    products = current_domain.repository_for(Product).search(
        category=params.category,
        artisan_id=params.artisan_id,
        min_price=params.min_price,
        max_price=params.max_price,
        search=params.search,
        featured=params.featured,
    )
    if params.sort_order == "asc":
        products.reverse()

    page, pagination = paginate(products, params.page, params.limit)
    artisans = {}
    listing = []
    for product in page:
        if product.artisan_id not in artisans:
            artisans[product.artisan_id] = artisan_card(_artisan(product.artisan_id))
        listing.append(
            {
                **product.to_dict(),
                "artisan": artisans[product.artisan_id],
                "is_favorited": viewer is not None and viewer.id in (product.favorites or []),
            }
        )

    filters = params.model_dump(exclude={"page", "limit", "sort_order"}, exclude_none=True)
    return ApiResponse(
        message="Products retrieved successfully",
        data={"products": listing, "pagination": pagination, "filters": filters},
    )


@product_router.get("/categories", response_model=ApiResponse)
async def list_categories() -> ApiResponse:
    return ApiResponse(message="Categories retrieved successfully", data={"categories": DEFAULT_CATEGORIES})


@product_router.get("/{product_id}", response_model=ApiResponse)
async def get_product(product_id: str, viewer: OptionalUser) -> ApiResponse:
    repo = current_domain.repository_for(Product)
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError as exc:
        raise ProductNotFound("Product does not exist") from exc
    if not product.is_active:
        raise ProductNotFound("Product is no longer available")

    current_domain.process(RecordProductView(product_id=product_id), asynchronous=False)
    product = repo.get(product_id)

    reviews = current_domain.repository_for(Review).latest_for_product(product_id)
    return ApiResponse(
        message="Product retrieved successfully",
        data={
            "product": {
                **product.to_dict(),
                "artisan": artisan_card(_artisan(product.artisan_id)),
                "reviews": [review.to_dict() for review in reviews],
                "is_favorited": viewer is not None and viewer.id in (product.favorites or []),
            }
        },
    )


@product_router.put("/{product_id}", response_model=ApiResponse)
async def update_product(product_id: str, body: UpdateProductRequest, user: ArtisanUser) -> ApiResponse:
    command = UpdateProduct(
        product_id=product_id,
        artisan_id=user.id,
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        tags=_json_list(body.tags),
        materials=_json_list(body.materials),
        image_urls=_json_list(body.image_urls),
        customizable=body.customizable,
        stock_quantity=body.stock_quantity,
        is_active=body.is_active,
    )
    product = current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Product updated successfully", data={"product_id": product_id, "product": product})


@product_router.delete("/{product_id}", response_model=ApiResponse)
async def delete_product(product_id: str, user: ArtisanUser) -> ApiResponse:
    current_domain.process(DeactivateProduct(product_id=product_id, artisan_id=user.id), asynchronous=False)
    return ApiResponse(message="Product deleted successfully", data={"product_id": product_id})


@product_router.post("/{product_id}/favorite", response_model=ApiResponse)
async def toggle_favorite(product_id: str, user: AuthenticatedUser) -> ApiResponse:
    result = current_domain.process(ToggleFavorite(product_id=product_id, user_id=user.id), asynchronous=False)
    preposition = "to" if result["action"] == "added" else "from"
    return ApiResponse(message=f"Product {result['action']} {preposition} favorites", data=result)


@product_router.put("/{product_id}/feature", response_model=ApiResponse)
async def feature_product(product_id: str, body: FeatureProductRequest, user: AdminUser) -> ApiResponse:
    product = current_domain.process(
        FeatureProduct(product_id=product_id, is_featured=body.is_featured), asynchronous=False
    )
    return ApiResponse(message="Product feature flag updated", data={"product": product})
