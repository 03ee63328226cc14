"""
Circulation analytics
"""

from typing import List
from fastapi import APIRouter, Depends, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import CirculationMetricResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Analytics"])


@router.get("/analytics/circulation", response_model=List[CirculationMetricResponse])
async def get_circulation_metrics(
    request: Request,
    repository: SymbiosisRepository = Depends(get_repository)
):
    request_id = getattr(request.state, "request_id", "-")

    metrics = await repository.list_circulation_metrics()

    logger.info(f"[{request_id}] GET /analytics/circulation - returned {len(metrics)} rows")
    return metrics
