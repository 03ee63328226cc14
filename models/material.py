from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base, AvailabilityStatus


class Material(Base):
    """
    A byproduct or resource owned by an industry and offered for reuse.

    Deleted by the database when the owning industry is deleted.
    """
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    industry_id = Column(
        Integer,
        ForeignKey("industries.id", ondelete="CASCADE"),
        nullable=False
    )

    name = Column(String(255), nullable=False)
    material_type = Column(String(100), nullable=True)
    quantity = Column(Float, nullable=True, default=0)
    unit = Column(String(20), nullable=True, default="kg")

    # Technical properties
    chemical_composition = Column(Text, nullable=True)
    mechanical_tolerance = Column(Float, nullable=True)
    thermodynamic_stability = Column(Float, nullable=True)
    regulatory_status = Column(String(50), nullable=True, default="unknown")

    availability_status = Column(
        String(20),
        nullable=False,
        default=AvailabilityStatus.AVAILABLE.value,
        index=True
    )
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    industry = relationship("Industry", back_populates="materials")

    __table_args__ = (
        Index("idx_materials_industry", "industry_id"),
    )
