from typing import Annotated
from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from tournament_api.api.deps import get_tournament_request_parameters, get_tournament_service
from tournament_api.schemas.pagination import TournamentRequestParameters
from tournament_api.schemas.patch import PatchOperation
from tournament_api.schemas.tournament import TournamentCreate, TournamentResponse, TournamentUpdate
from tournament_api.services.tournament_service import TournamentService

router = APIRouter()

tournament_service = Annotated[TournamentService, Depends(get_tournament_service)]
tournament_id_path = Annotated[int, Path(gt=0)]


@router.get("/", response_model=list[TournamentResponse])
async def list_tournaments(
    response: Response,
    service: tournament_service,
    params: Annotated[TournamentRequestParameters, Depends(get_tournament_request_parameters)],
):
    tournaments = await service.list_tournaments(params)
    response.headers["X-Pagination"] = tournaments.meta_data.to_header()
    return list(tournaments.items)

@router.get("/{tournament_id}", response_model=TournamentResponse)
async def get_tournament(
    tournament_id: tournament_id_path,
    service: tournament_service,
    include_games: bool = Query(default=False, alias="includeGames"),
):
    tournament = await service.get_tournament(tournament_id, include_games=include_games)
    return TournamentResponse.from_entity(tournament, include_games)

@router.post("/", response_model=TournamentResponse, status_code=status.HTTP_201_CREATED)
async def create_tournament(tournament_in: TournamentCreate, request: Request, response: Response, service: tournament_service):
    tournament = await service.create_tournament(tournament_in)
    response.headers["Location"] = str(request.url_for("get_tournament", tournament_id=tournament.id))
    return TournamentResponse.from_entity(tournament)

@router.put("/{tournament_id}", response_model=TournamentResponse)
async def update_tournament(tournament_id: tournament_id_path, tournament_in: TournamentUpdate, service: tournament_service):
    tournament = await service.update_tournament(tournament_id, tournament_in)
    return TournamentResponse.from_entity(tournament)

@router.patch("/{tournament_id}", response_model=TournamentResponse)
async def patch_tournament(tournament_id: tournament_id_path, operations: list[PatchOperation], service: tournament_service):
    tournament = await service.patch_tournament(tournament_id, operations)
    return TournamentResponse.from_entity(tournament)

@router.delete("/{tournament_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tournament(tournament_id: tournament_id_path, service: tournament_service):
    await service.delete_tournament(tournament_id)
