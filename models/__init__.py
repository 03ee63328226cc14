"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class and shared status enums
    industry: Industries (root entity)
    material: Byproduct materials owned by an industry
    reuse_opportunity: Proposed material -> industry matches
    transaction: Realized material transfers between industries
    circulation_metric: Reabsorption measurements per industry

Relationships:
    - Industry → Material (one-to-many, cascade)
    - Material → ReuseOpportunity (one-to-many, cascade)
    - Industry → ReuseOpportunity (target, one-to-many, cascade)
    - Industry/Material → Transaction (cascade on any side)
    - Industry → CirculationMetric (one-to-many, cascade)

Usage:
    from models import Industry, Material
    from models.base import AvailabilityStatus
"""

from models.base import Base, AvailabilityStatus, OpportunityStatus, TransactionStatus
from models.industry import Industry
from models.material import Material
from models.reuse_opportunity import ReuseOpportunity
from models.transaction import Transaction
from models.circulation_metric import CirculationMetric

__all__ = [
    "Base",
    "AvailabilityStatus",
    "OpportunityStatus",
    "TransactionStatus",
    "Industry",
    "Material",
    "ReuseOpportunity",
    "Transaction",
    "CirculationMetric",
]
