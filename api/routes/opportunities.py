"""
Reuse opportunity registration and ranked listing
"""

from typing import List
from fastapi import APIRouter, Depends, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import CREATE_ERROR_RESPONSES, CreateResponse, ReuseOpportunityResponse
from schemas.records import ReuseOpportunityCreate
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Reuse Opportunities"])


@router.get("/reuse-opportunities", response_model=List[ReuseOpportunityResponse])
async def list_reuse_opportunities(
    request: Request,
    repository: SymbiosisRepository = Depends(get_repository)
):
    """Opportunities ranked by feasibility index, best first."""
    request_id = getattr(request.state, "request_id", "-")

    opportunities = await repository.list_reuse_opportunities()

    logger.info(f"[{request_id}] GET /reuse-opportunities - returned {len(opportunities)} rows")
    return opportunities


@router.post("/reuse-opportunities", response_model=CreateResponse, status_code=201, responses=CREATE_ERROR_RESPONSES)
async def create_reuse_opportunity(
    request: Request,
    payload: ReuseOpportunityCreate,
    repository: SymbiosisRepository = Depends(get_repository)
):
    request_id = getattr(request.state, "request_id", "-")

    opportunity_id = await repository.create_reuse_opportunity(payload)

    logger.info(f"[{request_id}] POST /reuse-opportunities - created id={opportunity_id}")
    return CreateResponse(id=opportunity_id, message="Opportunity created")
