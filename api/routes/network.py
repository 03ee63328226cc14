"""
Symbiosis network view derived from reuse opportunities
"""

from fastapi import APIRouter, Depends, Request
from api.dependencies import get_repository
from repositories import SymbiosisRepository
from schemas.api import NetworkResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Network"])


@router.get("/symbiosis/network", response_model=NetworkResponse)
async def get_network(
    request: Request,
    repository: SymbiosisRepository = Depends(get_repository)
):
    """
    Graph of industries connected by reuse opportunities.

    Returns:
    - nodes: every industry (id, name, sector)
    - edges: one per opportunity, from the material owner to the target
      industry, weighted by feasibility index
    """
    request_id = getattr(request.state, "request_id", "-")

    graph = await repository.network_graph()

    logger.info(
        f"[{request_id}] GET /symbiosis/network - "
        f"{len(graph['nodes'])} nodes, {len(graph['edges'])} edges"
    )
    return graph
