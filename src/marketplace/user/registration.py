"""User registration: command and handler.

The identity-provider account is created by the caller before this command
is processed; the command only records the marketplace profile for the uid.
"""

import json

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import EmailAlreadyExists
from marketplace.user.user import User


@marketplace.command(part_of="User")
class RegisterUser:
    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    first_name = String(required=True, max_length=50)
    last_name = String(required=True, max_length=50)
    role = String(required=True, max_length=20)
    phone = String(max_length=20)
    location = Text()  # JSON: {city, state, country, pincode}


@marketplace.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise EmailAlreadyExists("An account with this email address already exists")

        user = User.register(
            uid=command.user_id,
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            role=command.role,
            phone=command.phone,
            location=json.loads(command.location) if command.location else None,
        )
        repo.add(user)
        return user.to_dict()
