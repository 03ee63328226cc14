"""
Material registration and listing
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import CREATE_ERROR_RESPONSES, CreateResponse, MaterialResponse
from schemas.records import MaterialCreate
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Materials"])


@router.get("/materials", response_model=List[MaterialResponse])
async def list_materials(
    request: Request,
    status: Optional[str] = Query(None, description="Filter by availability status"),
    repository: SymbiosisRepository = Depends(get_repository)
):
    """
    Materials joined with their owning industry, newest first.

    ``status`` is an exact match on availability_status; a value no
    material carries returns an empty list.
    """
    request_id = getattr(request.state, "request_id", "-")

    materials = await repository.list_materials(status=status)

    logger.info(f"[{request_id}] GET /materials - status={status}, returned {len(materials)} rows")
    return materials


@router.post("/materials", response_model=CreateResponse, status_code=201, responses=CREATE_ERROR_RESPONSES)
async def create_material(
    request: Request,
    payload: MaterialCreate,
    repository: SymbiosisRepository = Depends(get_repository)
):
    request_id = getattr(request.state, "request_id", "-")

    material_id = await repository.create_material(payload)

    logger.info(f"[{request_id}] POST /materials - created id={material_id}")
    return CreateResponse(id=material_id, message="Material registered")
