from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base, TransactionStatus


class Transaction(Base):
    """Recorded transfer of a material from one industry to another."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_industry_id = Column(
        Integer,
        ForeignKey("industries.id", ondelete="CASCADE"),
        nullable=False
    )
    target_industry_id = Column(
        Integer,
        ForeignKey("industries.id", ondelete="CASCADE"),
        nullable=False
    )
    material_id = Column(
        Integer,
        ForeignKey("materials.id", ondelete="CASCADE"),
        nullable=False
    )

    quantity_transferred = Column(Float, nullable=True, default=0)
    unit = Column(String(20), nullable=True, default="kg")
    transaction_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    status = Column(String(20), nullable=False, default=TransactionStatus.PENDING.value, index=True)

    # Outcomes
    cost_savings = Column(Float, nullable=True, default=0)
    environmental_benefit = Column(Float, nullable=True, default=0)

    # Relationships
    source_industry = relationship("Industry", foreign_keys=[source_industry_id])
    target_industry = relationship("Industry", foreign_keys=[target_industry_id])
    material = relationship("Material")

    __table_args__ = (
        Index("idx_transactions_date", "transaction_date"),
    )
