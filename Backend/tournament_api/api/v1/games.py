from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request, Response, status
from tournament_api.api.deps import get_game_service, get_request_parameters
from tournament_api.schemas.game import GameCreate, GameResponse, GameUpdate
from tournament_api.schemas.pagination import RequestParameters
from tournament_api.schemas.patch import PatchOperation
from tournament_api.services.game_service import GameService

router = APIRouter()

game_service = Annotated[GameService, Depends(get_game_service)]
tournament_id_path = Annotated[int, Path(gt=0)]
game_id_path = Annotated[int, Path(gt=0)]


@router.get("/", response_model=list[GameResponse])
async def list_games(
    tournament_id: tournament_id_path,
    response: Response,
    service: game_service,
    params: Annotated[RequestParameters, Depends(get_request_parameters)],
):
    games = await service.list_games(tournament_id, params)
    response.headers["X-Pagination"] = games.meta_data.to_header()
    return list(games.items)

@router.get("/by-title/{title}", response_model=GameResponse)
async def get_game_by_title(tournament_id: tournament_id_path, title: str, service: game_service):
    return await service.get_game_by_title(tournament_id, title)

@router.get("/{game_id}", response_model=GameResponse)
async def get_game(tournament_id: tournament_id_path, game_id: game_id_path, service: game_service):
    return await service.get_game(tournament_id, game_id)

@router.post("/", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    tournament_id: tournament_id_path, game_in: GameCreate, request: Request, response: Response, service: game_service
):
    game = await service.create_game(tournament_id, game_in)
    response.headers["Location"] = str(request.url_for("get_game", tournament_id=tournament_id, game_id=game.id))
    return game

@router.put("/{game_id}", response_model=GameResponse)
async def update_game(tournament_id: tournament_id_path, game_id: game_id_path, game_in: GameUpdate, service: game_service):
    return await service.update_game(tournament_id, game_id, game_in)

@router.patch("/{game_id}", response_model=GameResponse)
async def patch_game(tournament_id: tournament_id_path, game_id: game_id_path, operations: list[PatchOperation], service: game_service):
    return await service.patch_game(tournament_id, game_id, operations)

@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(tournament_id: tournament_id_path, game_id: game_id_path, service: game_service):
    await service.delete_game(tournament_id, game_id)
