"""Account deactivation (soft delete)."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import UserNotFound
from marketplace.user.user import User
from marketplace.utils.lookup import load


@marketplace.command(part_of="User")
class DeactivateAccount:
    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=User)
class DeactivateAccountHandler:
    @handle(DeactivateAccount)
    def deactivate_account(self, command):
        user = load(User, command.user_id, UserNotFound)
        user.deactivate()
        current_domain.repository_for(User).add(user)
