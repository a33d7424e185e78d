"""
User database repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from mrlister.db.models import User
from mrlister.db.repositories.base_repo import BaseRepository

# Authentication is mocked, so callers are provisioned on first write with
# a placeholder address on a reserved domain.
PLACEHOLDER_EMAIL_DOMAIN = "users.mrlister.invalid"


def placeholder_email(user_id: int) -> str:
    return f"user-{user_id}@{PLACEHOLDER_EMAIL_DOMAIN}"


class UserRepository(BaseRepository[User]):
    """Repository for the user rows that own inventory and marketplaces."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_or_create(self, user_id: int) -> User:
        """Return the user with this id, inserting a placeholder row if absent."""
        user = await self.get_by_id(user_id)
        if user is None:
            user = await self.create(id=user_id, email=placeholder_email(user_id))
        return user
