"""User aggregate: customers, artisans and administrators.

The identity of a User is the uid issued by the identity provider, so the
aggregate is created with an explicit id rather than a generated one.
Accounts are never physically removed; deactivation flips ``is_active``.
"""

from datetime import UTC, datetime
from enum import Enum

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
    ValueObject,
)

from marketplace.domain import marketplace


class Role(Enum):
    CUSTOMER = "customer"
    ARTISAN = "artisan"
    ADMIN = "admin"


class ExperienceLevel(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"
    MASTER = "master"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="User")
class Location:
    city = String(max_length=100)
    state = String(max_length=100)
    country = String(max_length=100, default="India")
    pincode = String(max_length=10)


@marketplace.value_object(part_of="User")
class ArtisanProfile:
    """Seller-facing profile and running sales counters of an artisan.

    Counters are only ever changed by replacing the whole value object, so a
    profile read from the store is never partially updated.
    """

    skills = List(content_type=String)
    specializations = List(content_type=String)
    experience_level = String(choices=ExperienceLevel, default=ExperienceLevel.BEGINNER.value)
    rating = Float(default=0.0)
    total_reviews = Integer(default=0)
    total_sales = Integer(default=0)
    total_revenue = Float(default=0.0)
    is_verified = Boolean(default=False)

    @invariant.post
    def counters_cannot_be_negative(self):
        if (self.total_sales or 0) < 0 or (self.total_revenue or 0.0) < 0:
            raise ValidationError({"artisan_profile": ["Sales counters cannot be negative"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class User:
    id = Identifier(identifier=True)
    email = String(required=True, max_length=254)
    role = String(choices=Role, default=Role.CUSTOMER.value)
    first_name = String(required=True, max_length=50)
    last_name = String(required=True, max_length=50)
    phone = String(max_length=20)
    bio = Text()
    location = ValueObject(Location)
    avatar_url = String(max_length=500)
    artisan_profile = ValueObject(ArtisanProfile)
    is_active = Boolean(default=True)
    profile_complete = Boolean(default=False)
    email_verified = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()
    last_seen_at = DateTime()
    deleted_at = DateTime()

    @classmethod
    def register(cls, uid, email, first_name, last_name, role, phone=None, location=None):
        now = datetime.now(UTC)
        user = cls(
            id=uid,
            email=email.strip().lower(),
            role=role,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            location=Location(**location) if location else None,
            artisan_profile=ArtisanProfile() if role == Role.ARTISAN.value else None,
            created_at=now,
            updated_at=now,
        )
        user._refresh_profile_complete()
        return user

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def is_artisan(self):
        return self.role == Role.ARTISAN.value

    def _refresh_profile_complete(self):
        self.profile_complete = bool(self.first_name and self.last_name and self.phone and self.location)

    def update_profile(self, first_name=None, last_name=None, phone=None, bio=None, avatar_url=None, location=None):
        """Apply a partial profile update. ``None`` means "leave unchanged"."""
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if phone is not None:
            self.phone = phone
        if bio is not None:
            self.bio = bio
        if avatar_url is not None:
            self.avatar_url = avatar_url
        if location is not None:
            current = self.location.to_dict() if self.location else {}
            self.location = Location(**{**current, **location})

        self._refresh_profile_complete()
        self.updated_at = datetime.now(UTC)

    def update_artisan_profile(self, skills=None, specializations=None, experience_level=None, bio=None):
        if not self.is_artisan:
            raise ValidationError({"role": ["Only artisans have an artisan profile"]})

        current = self.artisan_profile.to_dict() if self.artisan_profile else {}
        if skills is not None:
            current["skills"] = skills
        if specializations is not None:
            current["specializations"] = specializations
        if experience_level is not None:
            current["experience_level"] = experience_level
        self.artisan_profile = ArtisanProfile(**current)

        if bio is not None:
            self.bio = bio
        self.updated_at = datetime.now(UTC)

    def record_delivery_sale(self, revenue):
        """Count one delivered order worth ``revenue`` towards the artisan's totals."""
        current = self.artisan_profile.to_dict() if self.artisan_profile else {}
        current["total_sales"] = (current.get("total_sales") or 0) + 1
        current["total_revenue"] = (current.get("total_revenue") or 0.0) + revenue
        self.artisan_profile = ArtisanProfile(**current)
        self.updated_at = datetime.now(UTC)

    def touch_last_seen(self):
        self.last_seen_at = datetime.now(UTC)

    def deactivate(self):
        now = datetime.now(UTC)
        self.is_active = False
        self.deleted_at = now
        self.updated_at = now
