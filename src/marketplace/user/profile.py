"""Profile maintenance: personal details, artisan profile and last-seen."""

import json

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import UserNotFound
from marketplace.user.user import User
from marketplace.utils.lookup import load


@marketplace.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    first_name = String(max_length=50)
    last_name = String(max_length=50)
    phone = String(max_length=20)
    bio = Text()
    avatar_url = String(max_length=500)
    location = Text()  # JSON: partial {city, state, country, pincode}


@marketplace.command(part_of="User")
class UpdateArtisanProfile:
    user_id = Identifier(required=True)
    skills = Text()  # JSON array of strings
    specializations = Text()  # JSON array of strings
    experience_level = String(max_length=20)
    bio = Text()


@marketplace.command(part_of="User")
class RecordLastSeen:
    user_id = Identifier(required=True)


def _json_or_none(value):
    return json.loads(value) if value else None


@marketplace.command_handler(part_of=User)
class UserProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = load(User, command.user_id, UserNotFound, "User profile does not exist")
        user.update_profile(
            first_name=command.first_name,
            last_name=command.last_name,
            phone=command.phone,
            bio=command.bio,
            avatar_url=command.avatar_url,
            location=_json_or_none(command.location),
        )
        repo.add(user)
        return user.to_dict()

    @handle(UpdateArtisanProfile)
    def update_artisan_profile(self, command):
        repo = current_domain.repository_for(User)
        user = load(User, command.user_id, UserNotFound, "User profile does not exist")
        user.update_artisan_profile(
            skills=_json_or_none(command.skills),
            specializations=_json_or_none(command.specializations),
            experience_level=command.experience_level,
            bio=command.bio,
        )
        repo.add(user)
        return user.to_dict()

    @handle(RecordLastSeen)
    def record_last_seen(self, command):
        repo = current_domain.repository_for(User)
        user = load(User, command.user_id, UserNotFound)
        user.touch_last_seen()
        repo.add(user)
        return user.to_dict()
