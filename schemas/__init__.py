"""
Pydantic schemas for request validation and response serialization.

Schemas:
    records: Create payloads with required-field checks and defaults
    api: Response models (records joined with names, network, dashboard, errors)

Usage:
    from schemas.records import IndustryCreate, MaterialCreate
    from schemas.api import DashboardStatsResponse, NetworkResponse

Example:
    payload = IndustryCreate(name="Acme Steel", sector="Steel")
    payload.ensure_required()  # raises core.exceptions.ValidationError when incomplete

Validation:
    - Blank strings are treated as missing
    - Omitted numeric fields default to 0
    - Status fields default to "available" / "pending"
    - feasibility_index and reabsorption_rate must be fractions in [0, 1]
"""

__all__ = [
    "IndustryCreate",
    "MaterialCreate",
    "ReuseOpportunityCreate",
    "TransactionCreate",
    "CirculationMetricCreate",
    "CreateResponse",
    "HealthCheckResponse",
    "IndustryResponse",
    "MaterialResponse",
    "ReuseOpportunityResponse",
    "TransactionResponse",
    "CirculationMetricResponse",
    "NetworkResponse",
    "DashboardStatsResponse",
    "ErrorResponse",
]
