from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================
# Status columns are plain strings; these enums list the known values.

class AvailabilityStatus(str, enum.Enum):
    """Material availability"""
    AVAILABLE = "available"
    IN_USE = "in_use"
    ARCHIVED = "archived"


class OpportunityStatus(str, enum.Enum):
    """Reuse opportunity status"""
    DISCOVERED = "discovered"


class TransactionStatus(str, enum.Enum):
    """Material transfer status"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
