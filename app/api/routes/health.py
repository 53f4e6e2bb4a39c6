"""Health check endpoint with optional data store connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.store import StoreHandle, check_store_connected, get_store
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(store: Annotated[StoreHandle, Depends(get_store)]) -> HealthResponse:
    """
    Return service health status and data store connectivity.
    Used by load balancers and monitoring.
    """
    store_status = "connected" if check_store_connected(store) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        store=store_status,
    )
