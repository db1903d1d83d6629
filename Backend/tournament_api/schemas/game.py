from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from tournament_api.core.utils import to_naive_utc


class GameBase(BaseModel):
    title: str = Field(min_length=3, max_length=100)
    time: datetime

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class GameCreate(GameBase):
    pass


class GameUpdate(GameBase):
    pass


class GameResponse(BaseModel):
    id: int
    title: str
    time: datetime
    tournament_id: int

    model_config = ConfigDict(from_attributes=True)
