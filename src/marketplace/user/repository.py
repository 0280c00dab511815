from marketplace.domain import marketplace
from marketplace.user.user import User


@marketplace.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).limit(1).all().first
