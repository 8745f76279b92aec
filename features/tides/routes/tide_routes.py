from fastapi import APIRouter, Depends, Request
from features.tides.models.tide_types import TideSnapshot
from features.tides.services.tide_service import TideService
from core.cache import cached

router = APIRouter(
    prefix="/tides",
    tags=["Tides"]
)

def get_service(request: Request) -> TideService:
    """Dependency to get the TideService instance."""
    return request.app.state.tide_service

@router.get(
    "/cook-inlet",
    response_model=TideSnapshot,
    summary="Get the Cook Inlet tide snapshot",
    description="Returns current tide height and trend, the next four tide events and water conditions"
)
@cached(namespace="tide_snapshot")
async def get_cook_inlet_tides(
    service: TideService = Depends(get_service)
) -> TideSnapshot:
    """Get the current tide snapshot."""
    return service.compute_snapshot()
