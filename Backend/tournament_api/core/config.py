from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    PROJECT_NAME: str = "Tournaments"
    DATABASE_URL: str = "sqlite+aiosqlite:///./tournaments.db"
    ALLOWED_ORIGINS: list[str] = []
    LOG_LEVEL: str = "INFO"

    # Paging
    DEFAULT_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 50

    # Domain rules
    MAX_GAMES_PER_TOURNAMENT: int = 10
    TOURNAMENT_DURATION_MONTHS: int = 3

    # Readiness probe
    HEALTH_CHECK_URL: str | None = None
    HEALTH_CHECK_TIMEOUT_SECONDS: float = 5.0

    SEED_DATA: bool = False

    model_config = SettingsConfigDict(env_file=".env")


@lru_cache
def get_settings():
    return Settings()
