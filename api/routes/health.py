"""
Health check endpoint with database status and industry count
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from api.dependencies import get_repository
from core.exceptions import StorageError
from repositories import SymbiosisRepository
from schemas.api import HealthCheckResponse
from datetime import datetime
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(repository: SymbiosisRepository = Depends(get_repository)):
    """
    Health check endpoint.

    Returns:
    - Database connectivity status
    - Number of registered industries
    """
    try:
        industries_count = await repository.count_industries()
    except StorageError as e:
        logger.error(f"Health check failed: {e.detail}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": e.detail}
        )

    return HealthCheckResponse(
        status="ok",
        database="connected",
        industriesCount=industries_count,
        timestamp=datetime.utcnow()
    )
