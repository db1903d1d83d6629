from typing import Generic, TypeVar, Type

from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from tournament_api.core.database import Base
from tournament_api.schemas.pagination import PagedList

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class GameRepository(BaseRepository[Game]):
            def __init__(self, db: AsyncSession):
                super().__init__(db, Game)

            # Add custom methods here
            async def get_by_title(self, tournament_id: int, title: str):
                ...
    """

    def __init__(self, db: AsyncSession, model: Type[ModelType]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def create(self, entity: ModelType) -> ModelType:
        """Create a new entity."""
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: ModelType) -> ModelType:
        """Flush pending changes of an existing entity."""
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Hard delete an entity (permanent)."""
        await self.db.delete(entity)
        await self.db.flush()

    async def count(self, **filters) -> int:
        """
        Count entities matching filters.

        Args:
            **filters: Field filters (e.g., tournament_id=1)

        Returns:
            Count of matching entities
        """
        query = select(func.count()).select_from(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        result = await self.db.execute(query)
        return result.scalar()

    async def paginate(self, statement: Select, page_number: int, page_size: int) -> PagedList[ModelType]:
        """
        Count the full statement, then load one page of it.

        Args:
            statement: Ordered select of this repository's model
            page_number: 1-based page number
            page_size: Maximum number of entities per page

        Returns:
            PagedList of entities
        """
        return await PagedList.create_async(self.db, statement, page_number, page_size)
