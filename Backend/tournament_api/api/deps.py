from typing import Annotated
from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from tournament_api.core.database import get_db
from tournament_api.repositories.game_repo import GameRepository
from tournament_api.repositories.tournament_repo import TournamentRepository
from tournament_api.schemas.pagination import RequestParameters, TournamentRequestParameters
from tournament_api.services.game_service import GameService
from tournament_api.services.health_service import HealthService
from tournament_api.services.tournament_service import TournamentService

db_dependency = Annotated[AsyncSession, Depends(get_db)]

async def get_tournament_repo(db: db_dependency) -> TournamentRepository:
    return TournamentRepository(db)

tournament_repo_dependency = Annotated[TournamentRepository, Depends(get_tournament_repo)]

async def get_tournament_service(tournament_repo: tournament_repo_dependency) -> TournamentService:
    return TournamentService(tournament_repo)


async def get_game_repo(db: db_dependency) -> GameRepository:
    return GameRepository(db)

game_repo_dependency = Annotated[GameRepository, Depends(get_game_repo)]

async def get_game_service(game_repo: game_repo_dependency, tournament_repo: tournament_repo_dependency) -> GameService:
    return GameService(game_repo, tournament_repo)


async def get_health_service(db: db_dependency) -> HealthService:
    return HealthService(db)


# No ge/le bounds here: out-of-range paging values are clamped, never rejected.
def get_request_parameters(
    page_number: int = Query(default=1, alias="pageNumber"),
    page_size: int | None = Query(default=None, alias="pageSize"),
) -> RequestParameters:
    if page_size is None:
        return RequestParameters(page_number=page_number)
    return RequestParameters(page_number=page_number, page_size=page_size)


def get_tournament_request_parameters(
    page_number: int = Query(default=1, alias="pageNumber"),
    page_size: int | None = Query(default=None, alias="pageSize"),
    include_games: bool = Query(default=False, alias="includeGames"),
) -> TournamentRequestParameters:
    if page_size is None:
        return TournamentRequestParameters(page_number=page_number, include_games=include_games)
    return TournamentRequestParameters(page_number=page_number, page_size=page_size, include_games=include_games)
