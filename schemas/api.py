"""
Pydantic schemas for API responses
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime


def to_percent(fraction: Optional[float]) -> float:
    """Render a stored [0, 1] fraction as a percentage with one decimal."""
    if fraction is None:
        return 0.0
    return round(fraction * 100, 1)


# ============================================================================
# Write Responses
# ============================================================================

class CreateResponse(BaseModel):
    """Returned by every create endpoint with HTTP 201"""
    id: int
    message: str
    success: bool = True

    class Config:
        json_schema_extra = {
            "example": {
                "id": 12,
                "message": "Industry created",
                "success": True
            }
        }


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = "ok"
    database: str = "connected"
    industriesCount: int = 0
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "ok",
                "database": "connected",
                "industriesCount": 4,
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


# ============================================================================
# Record Schemas
# ============================================================================

class IndustryResponse(BaseModel):
    id: int
    name: str
    sector: str
    location: Optional[str] = None
    description: Optional[str] = None
    annual_output: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Acme Steel",
                "sector": "Steel",
                "location": "Pittsburgh",
                "description": "Integrated steel mill",
                "annual_output": 120000.0,
                "created_at": "2024-01-15T10:30:00Z"
            }
        }


class MaterialResponse(BaseModel):
    """Material joined with its owning industry"""
    id: int
    industry_id: int
    name: str
    material_type: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    chemical_composition: Optional[str] = None
    mechanical_tolerance: Optional[float] = None
    thermodynamic_stability: Optional[float] = None
    regulatory_status: Optional[str] = None
    availability_status: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    # Joined from industries
    industry_name: str
    sector: str

    class Config:
        from_attributes = True


class ReuseOpportunityResponse(BaseModel):
    """Reuse opportunity joined with its material and both industries"""
    id: int
    source_material_id: int
    target_industry_id: int
    compatibility_score: Optional[float] = None
    feasibility_index: Optional[float] = None
    preprocessing_required: Optional[str] = None
    estimated_cost_savings: Optional[float] = None
    environmental_impact_reduction: Optional[float] = None
    reliability_rating: Optional[float] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    # Joined
    material_name: str
    material_type: Optional[str] = None
    source_industry: str
    source_sector: str
    target_industry_name: str
    target_sector: str

    # Derived
    feasibility_percent: float = 0.0

    @validator("feasibility_percent", pre=True, always=True)
    def derive_feasibility_percent(cls, v, values):
        return to_percent(values.get("feasibility_index"))

    class Config:
        from_attributes = True


class TransactionResponse(BaseModel):
    """Transaction joined with its material and both industries"""
    id: int
    source_industry_id: int
    target_industry_id: int
    material_id: int
    quantity_transferred: Optional[float] = None
    unit: Optional[str] = None
    transaction_date: Optional[datetime] = None
    status: Optional[str] = None
    cost_savings: Optional[float] = None
    environmental_benefit: Optional[float] = None

    # Joined
    material_name: str
    source_industry: str
    target_industry: str

    class Config:
        from_attributes = True


class CirculationMetricResponse(BaseModel):
    id: int
    industry_id: int
    material_name: Optional[str] = None
    days_to_reabsorption: Optional[float] = None
    circulation_cycles: Optional[int] = None
    reabsorption_rate: Optional[float] = None
    measured_at: Optional[datetime] = None

    industry_name: str

    reabsorption_percent: float = 0.0

    @validator("reabsorption_percent", pre=True, always=True)
    def derive_reabsorption_percent(cls, v, values):
        return to_percent(values.get("reabsorption_rate"))

    class Config:
        from_attributes = True


# ============================================================================
# Network Schemas
# ============================================================================

class NetworkNode(BaseModel):
    id: int
    name: str
    sector: str


class NetworkEdge(BaseModel):
    """One edge per reuse opportunity; parallel edges are expected"""
    id: int
    source: int
    target: int
    strength: Optional[float] = None


class NetworkResponse(BaseModel):
    nodes: List[NetworkNode] = Field(default_factory=list)
    edges: List[NetworkEdge] = Field(default_factory=list)


# ============================================================================
# Dashboard Schemas
# ============================================================================

class DashboardStatsResponse(BaseModel):
    """Aggregate summary computed on every request"""
    total_industries: int = 0
    available_materials: int = 0
    total_transactions: int = 0
    completed_transactions: int = 0
    total_material_quantity: float = 0
    avg_feasibility: float = 0
    active_connections: int = 0
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "total_industries": 1,
                "available_materials": 1,
                "total_transactions": 0,
                "completed_transactions": 0,
                "total_material_quantity": 50,
                "avg_feasibility": 0,
                "active_connections": 0,
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    message: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Failed to create industry",
                "message": "UNIQUE constraint failed: industries.name"
            }
        }


# Documented error bodies for create endpoints
CREATE_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing required fields or malformed body"},
    409: {"model": ErrorResponse, "description": "Duplicate name or unknown referenced record"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}
