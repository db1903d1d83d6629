from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import DeclarativeBase
from tournament_api.core.config import get_settings



# ==================================================================
# DECLARATIVE BASE
# ==================================================================
class Base(DeclarativeBase): pass


# ==================================================================
# DATABASE ENGINE & SESSION FACTORY
# ==================================================================

_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_async_engine(get_settings().DATABASE_URL)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_local


def AsyncSessionLocal() -> AsyncSession:
    return get_session_factory()()


async def close_engine() -> None:
    global _engine, _async_session_local
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_local = None


async def ping(session: AsyncSession) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    await session.execute(text("SELECT 1"))


# The Dependency
async def get_db():
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
