from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base, OpportunityStatus


class ReuseOpportunity(Base):
    """
    A proposed match between a material and a candidate target industry.

    The source industry is not stored: it is always the current owner of
    ``source_material``. ``feasibility_index`` is a fraction in [0, 1].
    """
    __tablename__ = "reuse_opportunities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_material_id = Column(
        Integer,
        ForeignKey("materials.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    target_industry_id = Column(
        Integer,
        ForeignKey("industries.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Scoring
    compatibility_score = Column(Float, nullable=True, default=0)
    feasibility_index = Column(Float, nullable=True, default=0, index=True)
    reliability_rating = Column(Float, nullable=True, default=0)

    preprocessing_required = Column(Text, nullable=True)
    estimated_cost_savings = Column(Float, nullable=True, default=0)
    environmental_impact_reduction = Column(Float, nullable=True, default=0)

    status = Column(String(20), nullable=False, default=OpportunityStatus.DISCOVERED.value)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    source_material = relationship("Material")
    target_industry = relationship("Industry")
