import asyncio
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from tournament_api.core.database import AsyncSessionLocal, close_engine
from tournament_api.models.game import Game
from tournament_api.models.tournament import Tournament
from tournament_api.repositories.tournament_repo import TournamentRepository
import logging

logger = logging.getLogger(__name__)

DEMO_TOURNAMENTS = (
    ("Autumn Open", datetime(2026, 9, 1, 10, 0), ("Opening Match", "Quarter Final", "Semi Final", "Final")),
    ("Spring Cup", datetime(2027, 3, 15, 12, 0), ("Group Stage A", "Group Stage B", "Final")),
    ("Summer Invitational", datetime(2027, 6, 1, 9, 0), ("Round One", "Round Two")),
    ("Winter Classic", datetime(2026, 12, 5, 14, 0), ("Exhibition",)),
)
DEMO_GAME_SPACING = timedelta(days=7)


def build_demo_tournaments() -> list[Tournament]:
    tournaments = []
    for title, start_date, game_titles in DEMO_TOURNAMENTS:
        games = [
            Game(title=game_title, time=start_date + index * DEMO_GAME_SPACING)
            for index, game_title in enumerate(game_titles)
        ]
        tournaments.append(Tournament(title=title, start_date=start_date, games=games))
    return tournaments


async def seed_demo_data(session: AsyncSession) -> int:
    """Insert demo tournaments when the table is empty. Returns how many were added."""
    if not await TournamentRepository(session).is_empty():
        logger.info("Tournaments table not empty, skipping seeding")
        return 0
    tournaments = build_demo_tournaments()
    session.add_all(tournaments)
    await session.flush()
    logger.info("Seeded %d demo tournaments", len(tournaments))
    return len(tournaments)


async def main() -> None:
    async with AsyncSessionLocal() as session:
        await seed_demo_data(session)
        await session.commit()
    await close_engine()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
