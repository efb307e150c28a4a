"""Host status API routes."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from common.logging_config import get_logger
from hub.schemas.system import HealthResponse, SystemInfoResponse
from hub.service_locator import get_system_info_service
from hub.services.system_service import SystemInfoService
from hub.utils import utc_now_iso

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["System"])


@router.get(
    "/system-info",
    response_model=SystemInfoResponse,
    response_model_exclude_none=True
)
def get_system_info(service: SystemInfoService = Depends(get_system_info_service)):
    """
    Host vitals: address, CPU, memory, disk, temperature, uptime.

    Snapshots are cached for 2 seconds. When the OS query fails the payload
    holds simulated values and an "error" field.
    """
    try:
        return service.get_system_info()
    except Exception as e:
        logger.error(f"API Error: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to get system information"}
        )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.
    Returns 200 if service is alive.
    """
    return HealthResponse(status="ok", timestamp=utc_now_iso())
