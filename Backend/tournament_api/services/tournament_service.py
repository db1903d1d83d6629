from tournament_api.schemas.pagination import PagedList, TournamentRequestParameters
from tournament_api.schemas.patch import PatchOperation
from tournament_api.schemas.tournament import TournamentCreate, TournamentResponse, TournamentUpdate
from tournament_api.core.exceptions import ConflictException, NotFoundException
from tournament_api.models.tournament import Tournament
from tournament_api.repositories.tournament_repo import TournamentRepository
from tournament_api.services.paging import fetch_page
from tournament_api.services.patching import apply_json_patch
from sqlalchemy.exc import IntegrityError
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


def _duplicate_detail(title: str, start_date: datetime) -> str:
    return f"A tournament with title {title} and start date {start_date.isoformat()} already exists."


class TournamentService:
    def __init__(self, tournament_repo: TournamentRepository):
        self.tournament_repo = tournament_repo

    async def list_tournaments(self, params: TournamentRequestParameters) -> PagedList[TournamentResponse]:
        async def query_page(page: TournamentRequestParameters) -> PagedList[Tournament]:
            return await self.tournament_repo.get_page(page.page_number, page.page_size, page.include_games)

        tournaments = await fetch_page(query_page, params)
        return tournaments.map(lambda tournament: TournamentResponse.from_entity(tournament, params.include_games))

    async def get_tournament(self, tournament_id: int, include_games: bool = False) -> Tournament:
        tournament = await self.tournament_repo.get(tournament_id, include_games=include_games)
        if not tournament:
            raise NotFoundException(detail=f"Tournament with id {tournament_id} not found.")
        return tournament

    async def create_tournament(self, tournament_in: TournamentCreate) -> Tournament:
        if await self.tournament_repo.get_by_title_and_start_date(tournament_in.title, tournament_in.start_date):
            logger.warning("Attempt to create duplicate tournament: title=%s start_date=%s",
                           tournament_in.title, tournament_in.start_date)
            raise ConflictException(detail=_duplicate_detail(tournament_in.title, tournament_in.start_date))

        tournament = Tournament(**tournament_in.model_dump())
        try:
            created = await self.tournament_repo.create(tournament)
            logger.info("Tournament created: tournament_id=%s", created.id)
            return created
        except IntegrityError:
            logger.error("IntegrityError during tournament creation for title=%s", tournament_in.title)
            raise ConflictException(detail=_duplicate_detail(tournament_in.title, tournament_in.start_date))

    async def update_tournament(self, tournament_id: int, tournament_in: TournamentUpdate) -> Tournament:
        tournament = await self.get_tournament(tournament_id)
        return await self._apply_changes(tournament, tournament_in.model_dump())

    async def patch_tournament(self, tournament_id: int, operations: list[PatchOperation]) -> Tournament:
        tournament = await self.get_tournament(tournament_id)
        current = {"title": tournament.title, "start_date": tournament.start_date.isoformat()}
        tournament_in = apply_json_patch(TournamentUpdate, current, operations)
        return await self._apply_changes(tournament, tournament_in.model_dump())

    async def delete_tournament(self, tournament_id: int) -> None:
        tournament = await self.get_tournament(tournament_id)
        await self.tournament_repo.delete(tournament)
        logger.info("Tournament deleted: tournament_id=%s", tournament_id)

    async def _apply_changes(self, tournament: Tournament, changes: dict) -> Tournament:
        title = changes.get("title", tournament.title)
        start_date = changes.get("start_date", tournament.start_date)

        if (title, start_date) != (tournament.title, tournament.start_date):
            existing = await self.tournament_repo.get_by_title_and_start_date(title, start_date)
            if existing and existing.id != tournament.id:
                logger.warning("Tournament update collides with tournament_id=%s", existing.id)
                raise ConflictException(detail=_duplicate_detail(title, start_date))

        for field, value in changes.items():
            setattr(tournament, field, value)

        try:
            updated = await self.tournament_repo.update(tournament)
            logger.info("Tournament updated: tournament_id=%s", updated.id)
            return updated
        except IntegrityError:
            logger.error("IntegrityError during tournament update for tournament_id=%s", tournament.id)
            raise ConflictException(detail=_duplicate_detail(title, start_date))
