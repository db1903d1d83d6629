from fastapi import FastAPI, Request
from tournament_api.core.config import get_settings
from tournament_api.api.v1.tournaments import router as tournament_router
from tournament_api.api.v1.games import router as game_router
from tournament_api.api.v1.health import router as health_router
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tournament_api.core.database import AsyncSessionLocal, close_engine
from tournament_api.core.exceptions import AppException
from tournament_api.core.logging import configure_logging
from tournament_api.tasks.seed_data import seed_demo_data
import logging
from contextlib import asynccontextmanager


settings = get_settings()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup code
    configure_logging()
    logger.info("Starting up the %s API...", settings.PROJECT_NAME)
    if settings.SEED_DATA:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)
            await session.commit()
    yield
    # Shutdown code
    await close_engine()
    logger.info("Shutting down the %s API...", settings.PROJECT_NAME)


app = FastAPI(lifespan=lifespan, title=f"{settings.PROJECT_NAME} API", version="1.0.0")

# CORS setup

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Pagination", "Location"],
)

# Include API routers
app.include_router(tournament_router, prefix="/api/v1/tournaments", tags=["Tournaments"])
app.include_router(game_router, prefix="/api/v1/tournaments/{tournament_id}/games", tags=["Games"])
app.include_router(health_router, tags=["Health"])

# Global exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


@app.get("/")
def read_root():
    return {"status": "Green", "message": f"The {settings.PROJECT_NAME} API is alive!"}
