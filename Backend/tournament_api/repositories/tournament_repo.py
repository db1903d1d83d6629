from datetime import datetime
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
from tournament_api.models.game import Game  # noqa: F401  (registers the games mapper)
from tournament_api.models.tournament import Tournament
from tournament_api.repositories.base import BaseRepository
from tournament_api.schemas.pagination import PagedList


class TournamentRepository(BaseRepository[Tournament]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Tournament)

    async def get(self, tournament_id: int, include_games: bool = False) -> Tournament | None:
        query = select(Tournament).where(Tournament.id == tournament_id)
        if include_games:
            query = query.options(selectinload(Tournament.games))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_title_and_start_date(self, title: str, start_date: datetime) -> Tournament | None:
        query = select(Tournament).where(Tournament.title == title, Tournament.start_date == start_date)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_page(self, page_number: int, page_size: int, include_games: bool = False) -> PagedList[Tournament]:
        query = select(Tournament).order_by(Tournament.title, Tournament.id)
        if include_games:
            query = query.options(selectinload(Tournament.games))
        return await self.paginate(query, page_number, page_size)

    async def is_empty(self) -> bool:
        return await self.count() == 0
