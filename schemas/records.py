"""
Pydantic schemas for create requests

Required fields are typed Optional and checked by ``ensure_required``,
which reports one aggregate message for the whole payload.
"""

from pydantic import BaseModel, validator
from typing import ClassVar, Optional, Tuple
from datetime import datetime
from core.exceptions import ValidationError
from models.base import AvailabilityStatus, TransactionStatus

# Largest key SQLite and PostgreSQL BIGINT can hold
MAX_ID = 2 ** 63 - 1


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def _none_to_zero(v):
    if v is None or (isinstance(v, str) and not v.strip()):
        return 0
    return v


def _check_id(v):
    # 0 is never a generated key, so it counts as missing
    if v is None or v == 0:
        return None
    if v < 0 or v > MAX_ID:
        raise ValueError(f"id must be between 1 and {MAX_ID}")
    return v


class RecordCreate(BaseModel):
    """Base class for create payloads with required-field checking"""

    required_fields: ClassVar[Tuple[str, ...]] = ()
    required_message: ClassVar[str] = "Required fields are missing"

    def missing_fields(self):
        return [name for name in self.required_fields if getattr(self, name) is None]

    def ensure_required(self) -> None:
        """Raise ValidationError if any required field is absent or empty."""
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                self.required_message,
                context={"missing_fields": missing}
            )

    class Config:
        extra = "ignore"
        use_enum_values = True


class IndustryCreate(RecordCreate):
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "sector")
    required_message: ClassVar[str] = "Name and sector are required"

    name: Optional[str] = None
    sector: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    annual_output: Optional[float] = 0

    @validator("name", "sector", "location", "description", pre=True)
    def clean_text(cls, v):
        return _blank_to_none(v)

    @validator("annual_output", pre=True)
    def clean_numbers(cls, v):
        return _none_to_zero(v)


class MaterialCreate(RecordCreate):
    required_fields: ClassVar[Tuple[str, ...]] = ("industry_id", "name")
    required_message: ClassVar[str] = "Industry ID and name required"

    industry_id: Optional[int] = None
    name: Optional[str] = None
    material_type: Optional[str] = None
    quantity: Optional[float] = 0
    unit: Optional[str] = "kg"
    chemical_composition: Optional[str] = None
    mechanical_tolerance: Optional[float] = None
    thermodynamic_stability: Optional[float] = None
    regulatory_status: Optional[str] = "unknown"
    availability_status: Optional[AvailabilityStatus] = AvailabilityStatus.AVAILABLE.value
    description: Optional[str] = None

    @validator("industry_id", pre=True)
    def clean_ids(cls, v):
        return _blank_to_none(v)

    @validator("industry_id")
    def check_ids(cls, v):
        return _check_id(v)

    @validator("name", "material_type", "chemical_composition", "description", pre=True)
    def clean_text(cls, v):
        return _blank_to_none(v)

    @validator("quantity", pre=True)
    def clean_numbers(cls, v):
        return _none_to_zero(v)

    @validator("unit", pre=True, always=True)
    def default_unit(cls, v):
        return _blank_to_none(v) or "kg"

    @validator("regulatory_status", pre=True, always=True)
    def default_regulatory_status(cls, v):
        return _blank_to_none(v) or "unknown"

    @validator("availability_status", pre=True, always=True)
    def default_availability(cls, v):
        return _blank_to_none(v) or AvailabilityStatus.AVAILABLE.value


class ReuseOpportunityCreate(RecordCreate):
    required_fields: ClassVar[Tuple[str, ...]] = ("source_material_id", "target_industry_id")
    required_message: ClassVar[str] = "Source material and target industry are required"

    source_material_id: Optional[int] = None
    target_industry_id: Optional[int] = None
    compatibility_score: Optional[float] = 0
    feasibility_index: Optional[float] = 0
    preprocessing_required: Optional[str] = None
    estimated_cost_savings: Optional[float] = 0
    environmental_impact_reduction: Optional[float] = 0
    reliability_rating: Optional[float] = 0
    notes: Optional[str] = None

    @validator("source_material_id", "target_industry_id", pre=True)
    def clean_ids(cls, v):
        return _blank_to_none(v)

    @validator("source_material_id", "target_industry_id")
    def check_ids(cls, v):
        return _check_id(v)

    @validator("preprocessing_required", "notes", pre=True)
    def clean_text(cls, v):
        return _blank_to_none(v)

    @validator(
        "compatibility_score", "feasibility_index", "estimated_cost_savings",
        "environmental_impact_reduction", "reliability_rating",
        pre=True
    )
    def clean_numbers(cls, v):
        return _none_to_zero(v)

    @validator("feasibility_index")
    def validate_fraction(cls, v):
        if v < 0 or v > 1:
            raise ValueError("feasibility_index must be a fraction between 0 and 1")
        return v


class TransactionCreate(RecordCreate):
    required_fields: ClassVar[Tuple[str, ...]] = ("source_industry_id", "target_industry_id", "material_id")
    required_message: ClassVar[str] = "Source industry, target industry and material are required"

    source_industry_id: Optional[int] = None
    target_industry_id: Optional[int] = None
    material_id: Optional[int] = None
    quantity_transferred: Optional[float] = 0
    unit: Optional[str] = "kg"
    transaction_date: Optional[datetime] = None
    status: Optional[TransactionStatus] = TransactionStatus.PENDING.value
    cost_savings: Optional[float] = 0
    environmental_benefit: Optional[float] = 0

    @validator("source_industry_id", "target_industry_id", "material_id", "transaction_date", pre=True)
    def clean_optional(cls, v):
        return _blank_to_none(v)

    @validator("source_industry_id", "target_industry_id", "material_id")
    def check_ids(cls, v):
        return _check_id(v)

    @validator("quantity_transferred", "cost_savings", "environmental_benefit", pre=True)
    def clean_numbers(cls, v):
        return _none_to_zero(v)

    @validator("unit", pre=True, always=True)
    def default_unit(cls, v):
        return _blank_to_none(v) or "kg"

    @validator("status", pre=True, always=True)
    def default_status(cls, v):
        return _blank_to_none(v) or TransactionStatus.PENDING.value


class CirculationMetricCreate(RecordCreate):
    """Used by seeding; there is no HTTP create endpoint for metrics."""

    required_fields: ClassVar[Tuple[str, ...]] = ("industry_id",)
    required_message: ClassVar[str] = "Industry ID required"

    industry_id: Optional[int] = None
    material_name: Optional[str] = None
    days_to_reabsorption: Optional[float] = 0
    circulation_cycles: Optional[int] = 0
    reabsorption_rate: Optional[float] = 0
    measured_at: Optional[datetime] = None

    @validator("industry_id", pre=True)
    def clean_ids(cls, v):
        return _blank_to_none(v)

    @validator("industry_id")
    def check_ids(cls, v):
        return _check_id(v)

    @validator("days_to_reabsorption", "circulation_cycles", "reabsorption_rate", pre=True)
    def clean_numbers(cls, v):
        return _none_to_zero(v)

    @validator("reabsorption_rate")
    def validate_fraction(cls, v):
        if v < 0 or v > 1:
            raise ValueError("reabsorption_rate must be a fraction between 0 and 1")
        return v
