"""
Dashboard statistics endpoint
"""

from fastapi import APIRouter, Depends, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import DashboardStatsResponse
from datetime import datetime
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    request: Request,
    repository: SymbiosisRepository = Depends(get_repository)
):
    """
    Aggregate registry statistics.

    Returns:
    - Industry, material and transaction counts
    - Total material quantity on record
    - Mean feasibility and the number of opportunities above 0.5

    Any failing query fails the whole response.
    """
    request_id = getattr(request.state, "request_id", "-")

    summary = await repository.dashboard_summary()

    logger.info(
        f"[{request_id}] Stats: {summary['total_industries']} industries, "
        f"{summary['available_materials']} materials, "
        f"{summary['active_connections']} active connections"
    )

    return DashboardStatsResponse(timestamp=datetime.utcnow(), **summary)
