"""
Generic async repository base class.

Every MrLister table except ``users`` is owned by a user, so the base class
carries the tenant filter that the entity repositories build their queries
on. Writes flush but never commit; ``session_scope`` owns the transaction.
"""

from typing import Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from mrlister.db.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Primary-key access, inserts, partial updates and tenant-scoped selects.

    Subclasses pass their model class and add entity-specific queries,
    starting from ``owned_by()`` whenever the rows belong to a user.
    """

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    def owned_by(self, user_id: int) -> Select:
        """SELECT over the model restricted to one user's rows, oldest first."""
        return (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.id.asc())
        )

    async def scalars(self, stmt: Select) -> list[ModelType]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, record_id: int) -> ModelType | None:
        return await self.session.get(self.model, record_id)

    async def create(self, **columns) -> ModelType:
        """Insert a row and flush so the database-assigned id is available."""
        instance = self.model(**columns)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def update(self, record_id: int, **changes) -> ModelType | None:
        """
        Apply column changes to an existing row.

        Keys that are not mapped columns are ignored. Returns None when the
        id does not resolve.
        """
        instance = await self.get_by_id(record_id)
        if instance is None:
            return None
        columns = self.model.__table__.columns.keys()
        for key, value in changes.items():
            if key in columns:
                setattr(instance, key, value)
        await self.session.flush()
        return instance
