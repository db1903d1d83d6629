from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from tournament_api.models.game import Game
from tournament_api.models.tournament import Tournament  # noqa: F401  (registers the tournaments mapper)
from tournament_api.repositories.base import BaseRepository
from tournament_api.schemas.pagination import PagedList


class GameRepository(BaseRepository[Game]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Game)

    async def get_in_tournament(self, tournament_id: int, game_id: int) -> Game | None:
        query = select(Game).where(Game.id == game_id, Game.tournament_id == tournament_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_title(self, tournament_id: int, title: str) -> Game | None:
        query = select(Game).where(Game.tournament_id == tournament_id, Game.title == title)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def count_in_tournament(self, tournament_id: int) -> int:
        return await self.count(tournament_id=tournament_id)

    async def get_page(self, tournament_id: int, page_number: int, page_size: int) -> PagedList[Game]:
        query = (
            select(Game)
            .where(Game.tournament_id == tournament_id)
            .order_by(Game.title, Game.id)
        )
        return await self.paginate(query, page_number, page_size)
