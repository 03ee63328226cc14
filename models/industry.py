from sqlalchemy import Column, Integer, String, Text, Float, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base


class Industry(Base):
    """
    An organization that produces or consumes material byproducts.

    Root of the schema: materials, circulation metrics, and both sides of
    opportunities and transactions hang off an industry and are removed
    with it.
    """
    __tablename__ = "industries"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), unique=True, nullable=False)
    sector = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    annual_output = Column(Float, nullable=True, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    materials = relationship(
        "Material",
        back_populates="industry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    circulation_metrics = relationship(
        "CirculationMetric",
        back_populates="industry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
