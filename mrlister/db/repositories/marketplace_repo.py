"""
Marketplace-connection database repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from mrlister.db.models import Marketplace
from mrlister.db.repositories.base_repo import BaseRepository


class MarketplaceRepository(BaseRepository[Marketplace]):
    """Repository for a user's marketplace connections."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Marketplace)

    async def find_by_user(self, user_id: int) -> list[Marketplace]:
        """All marketplace connections for a user, in creation order."""
        return await self.scalars(self.owned_by(user_id))
