from typing import Annotated
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from tournament_api.api.deps import get_health_service
from tournament_api.services.health_service import HealthService

router = APIRouter()

health_service = Annotated[HealthService, Depends(get_health_service)]


@router.get("/health")
async def liveness() -> dict[str, str]:
    return {"status": "ok"}

@router.get("/ready")
async def readiness(service: health_service):
    ready, report = await service.readiness()
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=report)
