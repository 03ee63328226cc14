from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base


class CirculationMetric(Base):
    """
    Periodic measurement of how fast a material is reabsorbed into use.

    ``material_name`` is free text, not a foreign key to materials.
    """
    __tablename__ = "circulation_metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    industry_id = Column(
        Integer,
        ForeignKey("industries.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    material_name = Column(String(255), nullable=True)
    days_to_reabsorption = Column(Float, nullable=True, default=0)
    circulation_cycles = Column(Integer, nullable=True, default=0)
    reabsorption_rate = Column(Float, nullable=True, default=0)  # fraction, 0..1

    measured_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    industry = relationship("Industry", back_populates="circulation_metrics")
