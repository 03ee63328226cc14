"""
Industry registration and listing
"""

from typing import List
from fastapi import APIRouter, Depends, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import CREATE_ERROR_RESPONSES, CreateResponse, IndustryResponse
from schemas.records import IndustryCreate
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Industries"])


@router.get("/industries", response_model=List[IndustryResponse])
async def list_industries(
    request: Request,
    repository: SymbiosisRepository = Depends(get_repository)
):
    """All industries, newest first."""
    request_id = getattr(request.state, "request_id", "-")

    industries = await repository.list_industries()

    logger.info(f"[{request_id}] GET /industries - returned {len(industries)} rows")
    return industries


@router.post("/industries", response_model=CreateResponse, status_code=201, responses=CREATE_ERROR_RESPONSES)
async def create_industry(
    request: Request,
    payload: IndustryCreate,
    repository: SymbiosisRepository = Depends(get_repository)
):
    """Register an industry. ``name`` and ``sector`` are required; names are unique."""
    request_id = getattr(request.state, "request_id", "-")

    industry_id = await repository.create_industry(payload)

    logger.info(f"[{request_id}] POST /industries - created id={industry_id}")
    return CreateResponse(id=industry_id, message="Industry created")
