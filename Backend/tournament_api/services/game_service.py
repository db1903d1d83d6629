from tournament_api.schemas.pagination import PagedList, RequestParameters
from tournament_api.schemas.game import GameCreate, GameResponse, GameUpdate
from tournament_api.schemas.patch import PatchOperation
from tournament_api.core.config import get_settings
from tournament_api.core.exceptions import BadRequestException, BusinessRuleException, ConflictException, NotFoundException
from tournament_api.models.game import Game
from tournament_api.models.tournament import Tournament
from tournament_api.repositories.game_repo import GameRepository
from tournament_api.repositories.tournament_repo import TournamentRepository
from tournament_api.services.paging import fetch_page
from tournament_api.services.patching import apply_json_patch
from sqlalchemy.exc import IntegrityError
import logging

logger = logging.getLogger(__name__)

class GameService:
    def __init__(self, game_repo: GameRepository, tournament_repo: TournamentRepository):
        self.game_repo = game_repo
        self.tournament_repo = tournament_repo

    async def list_games(self, tournament_id: int, params: RequestParameters) -> PagedList[GameResponse]:
        await self._get_tournament(tournament_id)

        async def query_page(page: RequestParameters) -> PagedList[Game]:
            return await self.game_repo.get_page(tournament_id, page.page_number, page.page_size)

        games = await fetch_page(query_page, params)
        return games.map(GameResponse.model_validate)

    async def get_game(self, tournament_id: int, game_id: int) -> Game:
        await self._get_tournament(tournament_id)
        game = await self.game_repo.get_in_tournament(tournament_id, game_id)
        if not game:
            raise NotFoundException(detail=f"Game with id {game_id} was not found in tournament {tournament_id}.")
        return game

    async def get_game_by_title(self, tournament_id: int, title: str) -> Game:
        title = title.strip()
        if not title:
            raise BadRequestException(detail="Title must be a non-empty string.")
        await self._get_tournament(tournament_id)
        game = await self.game_repo.get_by_title(tournament_id, title)
        if not game:
            raise NotFoundException(detail=f"Game with title {title} was not found.")
        return game

    async def create_game(self, tournament_id: int, game_in: GameCreate) -> Game:
        tournament = await self._get_tournament(tournament_id)

        if await self.game_repo.get_by_title(tournament_id, game_in.title):
            logger.warning("Attempt to create duplicate game: tournament_id=%s title=%s", tournament_id, game_in.title)
            raise ConflictException(detail=f"Game with title '{game_in.title}' already exists in tournament {tournament_id}.")

        self._check_period(tournament, game_in.time)

        max_games = get_settings().MAX_GAMES_PER_TOURNAMENT
        if await self.game_repo.count_in_tournament(tournament_id) >= max_games:
            logger.warning("Game limit reached for tournament_id=%s", tournament_id)
            raise BusinessRuleException(detail=f"Tournament {tournament_id} already has the maximum of {max_games} games.")

        game = Game(**game_in.model_dump(), tournament_id=tournament_id)
        try:
            created = await self.game_repo.create(game)
            logger.info("Game created: game_id=%s tournament_id=%s", created.id, tournament_id)
            return created
        except IntegrityError:
            logger.error("IntegrityError during game creation for tournament_id=%s title=%s", tournament_id, game_in.title)
            raise ConflictException(detail=f"Game with title '{game_in.title}' already exists in tournament {tournament_id}.")

    async def update_game(self, tournament_id: int, game_id: int, game_in: GameUpdate) -> Game:
        tournament = await self._get_tournament(tournament_id)
        game = await self._get_game(tournament_id, game_id)
        return await self._apply_changes(tournament, game, game_in.model_dump())

    async def patch_game(self, tournament_id: int, game_id: int, operations: list[PatchOperation]) -> Game:
        tournament = await self._get_tournament(tournament_id)
        game = await self._get_game(tournament_id, game_id)
        current = {"title": game.title, "time": game.time.isoformat()}
        game_in = apply_json_patch(GameUpdate, current, operations)
        return await self._apply_changes(tournament, game, game_in.model_dump())

    async def delete_game(self, tournament_id: int, game_id: int) -> None:
        game = await self.get_game(tournament_id, game_id)
        await self.game_repo.delete(game)
        logger.info("Game deleted: game_id=%s tournament_id=%s", game_id, tournament_id)

    async def _get_tournament(self, tournament_id: int) -> Tournament:
        tournament = await self.tournament_repo.get(tournament_id)
        if not tournament:
            raise NotFoundException(detail=f"Tournament with id {tournament_id} not found.")
        return tournament

    async def _get_game(self, tournament_id: int, game_id: int) -> Game:
        game = await self.game_repo.get_in_tournament(tournament_id, game_id)
        if not game:
            raise NotFoundException(detail=f"Game with id {game_id} was not found in tournament {tournament_id}.")
        return game

    def _check_period(self, tournament: Tournament, time) -> None:
        if not tournament.is_within_period(time):
            logger.warning("Game time %s outside period of tournament_id=%s", time, tournament.id)
            raise BadRequestException(detail="Game start time must be within the tournament period.")

    async def _apply_changes(self, tournament: Tournament, game: Game, changes: dict) -> Game:
        if "title" in changes and changes["title"] != game.title:
            if await self.game_repo.get_by_title(tournament.id, changes["title"]):
                raise ConflictException(detail=f"Game with title '{changes['title']}' already exists in tournament {tournament.id}.")

        if "time" in changes and changes["time"] != game.time:
            self._check_period(tournament, changes["time"])

        for field, value in changes.items():
            setattr(game, field, value)

        try:
            updated = await self.game_repo.update(game)
            logger.info("Game updated: game_id=%s tournament_id=%s", updated.id, tournament.id)
            return updated
        except IntegrityError:
            logger.error("IntegrityError during game update for game_id=%s", game.id)
            raise ConflictException(detail=f"Game with title '{game.title}' already exists in tournament {tournament.id}.")
