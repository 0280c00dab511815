"""Shaping of aggregate data for API responses."""

import math

from marketplace.api.security import CurrentUser


def paginate(records: list, page: int, limit: int) -> tuple[list, dict]:
    start = (page - 1) * limit
    return records[start : start + limit], {
        "page": page,
        "limit": limit,
        "total": len(records),
        "total_pages": math.ceil(len(records) / limit),
    }


def order_view(order_data: dict, viewer: CurrentUser) -> dict:
    """An order as ``viewer`` may see it: artisans only see their own lines."""
    if viewer.role != "artisan":
        return order_data
    return {
        **order_data,
        "items": [item for item in order_data["items"] if item["artisan_id"] == viewer.id],
    }


def artisan_card(artisan) -> dict:
    if artisan is None:
        return {"first_name": "Anonymous", "last_name": "Artisan", "rating": 0, "is_verified": False}
    profile = artisan.artisan_profile
    return {
        "uid": str(artisan.id),
        "first_name": artisan.first_name,
        "last_name": artisan.last_name,
        "avatar_url": artisan.avatar_url,
        "location": artisan.location.to_dict() if artisan.location else None,
        "rating": profile.rating if profile else 0,
        "total_reviews": profile.total_reviews if profile else 0,
        "total_sales": profile.total_sales if profile else 0,
        "is_verified": profile.is_verified if profile else False,
        "skills": list(profile.skills or []) if profile else [],
    }


def public_profile(user) -> dict:
    data = {
        "uid": str(user.id),
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
        "bio": user.bio,
        "avatar_url": user.avatar_url,
        "location": user.location.to_dict() if user.location else None,
        "created_at": user.created_at,
    }
    if user.artisan_profile:
        profile = user.artisan_profile.to_dict()
        profile.pop("total_revenue", None)
        data["artisan_profile"] = profile
    return data
