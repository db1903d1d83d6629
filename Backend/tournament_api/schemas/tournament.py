from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from tournament_api.core.utils import to_naive_utc
from tournament_api.models.tournament import Tournament
from tournament_api.schemas.game import GameResponse


class TournamentBase(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    start_date: datetime

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("start_date")
    @classmethod
    def normalize_start_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class TournamentCreate(TournamentBase):
    pass


class TournamentUpdate(TournamentBase):
    pass


class TournamentResponse(BaseModel):
    id: int
    title: str
    start_date: datetime
    end_date: datetime
    games: list[GameResponse] = []

    @classmethod
    def from_entity(cls, tournament: Tournament, include_games: bool = False) -> "TournamentResponse":
        # games is only touched when it was eager-loaded by the repository
        games = [GameResponse.model_validate(game) for game in tournament.games] if include_games else []
        return cls(
            id=tournament.id,
            title=tournament.title,
            start_date=tournament.start_date,
            end_date=tournament.end_date,
            games=games,
        )
