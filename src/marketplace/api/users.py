"""FastAPI endpoints for registration and user profiles."""

import json
from dataclasses import asdict
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.api.presenters import public_profile
from marketplace.api.schemas import (
    ApiResponse,
    DeleteAccountRequest,
    RegisterRequest,
    UpdateArtisanProfileRequest,
    UpdateProfileRequest,
)
from marketplace.api.security import ArtisanUser, AuthenticatedUser, OptionalUser, get_identity_provider
from marketplace.errors import UserNotFound
from marketplace.identity import IdentityProvider
from marketplace.order.order import Order, OrderStatus
from marketplace.product.product import Product
from marketplace.user.account import DeactivateAccount
from marketplace.user.profile import RecordLastSeen, UpdateArtisanProfile, UpdateProfile
from marketplace.user.registration import RegisterUser
from marketplace.user.user import User

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
user_router = APIRouter(prefix="/api/user", tags=["users"])

Provider = Annotated[IdentityProvider, Depends(get_identity_provider)]

logger = structlog.get_logger(__name__)


# --- Registration ---


@auth_router.post("/register", status_code=201, response_model=ApiResponse)
async def register(body: RegisterRequest, provider: Provider) -> ApiResponse:
    uid = provider.create_account(body.email, body.password, f"{body.first_name} {body.last_name}")
    try:
        command = RegisterUser(
            user_id=uid,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            role=body.role,
            phone=body.phone,
            location=json.dumps(body.location.model_dump()) if body.location else None,
        )
        user = current_domain.process(command, asynchronous=False)
    except Exception:
        logger.warning("Registration failed, removing identity account", uid=uid)
        provider.delete_account(uid)
        raise
    return ApiResponse(message="User registered successfully", data={"user": user})


# --- Own profile ---


@user_router.get("/profile", response_model=ApiResponse)
async def get_profile(user: AuthenticatedUser) -> ApiResponse:
    profile = current_domain.process(RecordLastSeen(user_id=user.id), asynchronous=False)
    return ApiResponse(message="Profile retrieved successfully", data={"user": profile})


@user_router.put("/profile", response_model=ApiResponse)
async def update_profile(body: UpdateProfileRequest, user: AuthenticatedUser) -> ApiResponse:
    command = UpdateProfile(
        user_id=user.id,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        bio=body.bio,
        avatar_url=body.avatar_url,
        location=json.dumps(body.location.model_dump()) if body.location else None,
    )
    profile = current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Profile updated successfully", data={"user": profile})


@user_router.put("/artisan-profile", response_model=ApiResponse)
async def update_artisan_profile(body: UpdateArtisanProfileRequest, user: ArtisanUser) -> ApiResponse:
    command = UpdateArtisanProfile(
        user_id=user.id,
        skills=json.dumps(body.skills) if body.skills is not None else None,
        specializations=json.dumps(body.specializations) if body.specializations is not None else None,
        experience_level=body.experience_level,
        bio=body.bio,
    )
    profile = current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Artisan profile updated successfully", data={"user": profile})


@user_router.get("/dashboard", response_model=ApiResponse)
async def dashboard(user: AuthenticatedUser) -> ApiResponse:
    order_repo = current_domain.repository_for(Order)
    delivered = OrderStatus.DELIVERED.value
    cancelled = OrderStatus.CANCELLED.value

    if user.role == "artisan":
        artisan = current_domain.repository_for(User).get(user.id)
        products = [p for p in current_domain.repository_for(Product).by_artisan(user.id) if p.is_active]
        orders = order_repo.for_artisan(user.id)
        profile = artisan.artisan_profile
        stats = {
            "total_products": len(products),
            "total_orders": len(orders),
            "revenue": sum(o.artisan_total(user.id) for o in orders if o.status == delivered),
            "rating": profile.rating if profile else 0,
            "reviews": profile.total_reviews if profile else 0,
        }
    else:
        orders = order_repo.for_customer(user.id)
        stats = {
            "total_orders": len(orders),
            "total_spent": sum(o.total_amount for o in orders if o.status != cancelled),
        }

    return ApiResponse(
        message="Dashboard data retrieved successfully",
        data={"user": asdict(user), "stats": stats},
    )


@user_router.delete("/account", response_model=ApiResponse)
async def delete_account(body: DeleteAccountRequest, user: AuthenticatedUser, provider: Provider) -> ApiResponse:
    current_domain.process(DeactivateAccount(user_id=user.id), asynchronous=False)
    provider.revoke_tokens(user.id)
    return ApiResponse(message="Account marked for deletion. It will be permanently deleted in 30 days.")


# --- Public profile ---


@user_router.get("/profile/{uid}", response_model=ApiResponse)
async def get_public_profile(uid: str, viewer: OptionalUser) -> ApiResponse:
    try:
        profile_owner = current_domain.repository_for(User).get(uid)
    except ObjectNotFoundError as exc:
        raise UserNotFound("User profile not found") from exc
    if not profile_owner.is_active:
        raise UserNotFound("User profile not found")

    data = public_profile(profile_owner)
    data["is_own_profile"] = viewer is not None and viewer.id == uid
    return ApiResponse(message="Public profile retrieved successfully", data={"user": data})
