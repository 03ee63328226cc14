"""
Material transfer records
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import CREATE_ERROR_RESPONSES, CreateResponse, TransactionResponse
from schemas.records import TransactionCreate
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Transactions"])


@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    request: Request,
    status: Optional[str] = Query(None, description="Filter by transaction status"),
    repository: SymbiosisRepository = Depends(get_repository)
):
    """Transactions with material and industry names, most recent first."""
    request_id = getattr(request.state, "request_id", "-")

    transactions = await repository.list_transactions(status=status)

    logger.info(f"[{request_id}] GET /transactions - status={status}, returned {len(transactions)} rows")
    return transactions


@router.post("/transactions", response_model=CreateResponse, status_code=201, responses=CREATE_ERROR_RESPONSES)
async def create_transaction(
    request: Request,
    payload: TransactionCreate,
    repository: SymbiosisRepository = Depends(get_repository)
):
    request_id = getattr(request.state, "request_id", "-")

    transaction_id = await repository.create_transaction(payload)

    logger.info(f"[{request_id}] POST /transactions - created id={transaction_id}")
    return CreateResponse(id=transaction_id, message="Transaction recorded")
