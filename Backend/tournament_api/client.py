"""Async HTTP client for the Tournaments API."""

from typing import Any

import httpx

from tournament_api.schemas.game import GameResponse
from tournament_api.schemas.pagination import MetaData, PagedList
from tournament_api.schemas.tournament import TournamentResponse

API_PREFIX = "/api/v1/tournaments"
PAGINATION_HEADER = "X-Pagination"


class TournamentsClientError(Exception):
    """Raised for non-2xx responses and transport failures."""

    def __init__(self, message: str, status_code: int | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class TournamentsClient:
    """Reads tournaments and games, rebuilding pages from the ``X-Pagination`` header."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )

    def _handle_error(self, resp: httpx.Response, context: str) -> None:
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
            raise TournamentsClientError(
                f"{context}: HTTP {resp.status_code}: {detail}",
                status_code=resp.status_code,
            )

    async def _get(self, path: str, context: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            async with self._make_client() as client:
                resp = await client.get(path, params=params)
        except httpx.HTTPError as e:
            raise TournamentsClientError(f"{context}: {e}", cause=e) from e
        self._handle_error(resp, context)
        return resp

    @staticmethod
    def _paging_params(page_number: int, page_size: int | None) -> dict[str, Any]:
        params: dict[str, Any] = {"pageNumber": page_number}
        if page_size is not None:
            params["pageSize"] = page_size
        return params

    @staticmethod
    def _meta_data(resp: httpx.Response, context: str) -> MetaData:
        raw = resp.headers.get(PAGINATION_HEADER)
        if raw is None:
            raise TournamentsClientError(f"{context}: missing {PAGINATION_HEADER} header", status_code=resp.status_code)
        return MetaData.from_header(raw)

    async def list_tournaments(
        self,
        page_number: int = 1,
        page_size: int | None = None,
        include_games: bool = False,
    ) -> PagedList[TournamentResponse]:
        params = self._paging_params(page_number, page_size)
        params["includeGames"] = str(include_games).lower()
        resp = await self._get(f"{API_PREFIX}/", "list_tournaments", params)
        items = tuple(TournamentResponse.model_validate(item) for item in resp.json())
        return PagedList(items=items, meta_data=self._meta_data(resp, "list_tournaments"))

    async def get_tournament(self, tournament_id: int, include_games: bool = False) -> TournamentResponse:
        resp = await self._get(
            f"{API_PREFIX}/{tournament_id}",
            f"get_tournament({tournament_id})",
            {"includeGames": str(include_games).lower()},
        )
        return TournamentResponse.model_validate(resp.json())

    async def list_games(
        self,
        tournament_id: int,
        page_number: int = 1,
        page_size: int | None = None,
    ) -> PagedList[GameResponse]:
        context = f"list_games({tournament_id})"
        resp = await self._get(
            f"{API_PREFIX}/{tournament_id}/games/", context, self._paging_params(page_number, page_size)
        )
        items = tuple(GameResponse.model_validate(item) for item in resp.json())
        return PagedList(items=items, meta_data=self._meta_data(resp, context))

    async def get_game(self, tournament_id: int, game_id: int) -> GameResponse:
        resp = await self._get(
            f"{API_PREFIX}/{tournament_id}/games/{game_id}", f"get_game({tournament_id}, {game_id})"
        )
        return GameResponse.model_validate(resp.json())
