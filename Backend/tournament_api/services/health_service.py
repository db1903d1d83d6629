from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from tournament_api.core.config import get_settings
from tournament_api.core.database import ping
import httpx
import logging

logger = logging.getLogger(__name__)


class HealthService:
    """Readiness checks for the database and an optional upstream web dependency."""

    def __init__(self, db: AsyncSession, http_client: httpx.AsyncClient | None = None):
        self.db = db
        self.http_client = http_client

    async def check_database(self) -> bool:
        try:
            await ping(self.db)
            return True
        except Exception:
            logger.exception("Database readiness check failed")
            return False

    async def check_web_dependency(self, url: str) -> bool:
        settings = get_settings()
        try:
            if self.http_client is not None:
                response = await self.http_client.get(url)
            else:
                async with httpx.AsyncClient(timeout=settings.HEALTH_CHECK_TIMEOUT_SECONDS) as client:
                    response = await client.get(url)
        except httpx.HTTPError:
            logger.exception("Web dependency check failed for url=%s", url)
            return False
        if response.is_success:
            return True
        logger.warning("Web dependency returned status %s for url=%s", response.status_code, url)
        return False

    async def readiness(self) -> tuple[bool, dict]:
        checks = {"database": "ok" if await self.check_database() else "failed"}

        url = get_settings().HEALTH_CHECK_URL
        if url:
            checks["web_dependency"] = "ok" if await self.check_web_dependency(url) else "failed"

        ready = all(result == "ok" for result in checks.values())
        return ready, {
            "status": "ready" if ready else "not_ready",
            "checks": checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
