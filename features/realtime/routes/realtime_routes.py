import logging
from fastapi import APIRouter, Depends, Request

from features.realtime.models.notification_types import ChangeNotification, InvalidationResult
from features.realtime.services.invalidation_service import InvalidationService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/realtime",
    tags=["Realtime"]
)

def get_service(request: Request) -> InvalidationService:
    """Dependency to get the InvalidationService instance."""
    return request.app.state.invalidation_service

@router.post(
    "/notify",
    response_model=InvalidationResult,
    summary="Receive a table change notification",
    description="Clears cached views derived from the changed table"
)
async def notify_change(
    notification: ChangeNotification,
    service: InvalidationService = Depends(get_service)
) -> InvalidationResult:
    logger.info(f"{notification.type} on {notification.schema_name}.{notification.table}")
    cleared = await service.notify(notification.table)
    return InvalidationResult(table=notification.table, invalidated=cleared)
