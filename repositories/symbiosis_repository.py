"""
Data access for the symbiosis registry: inserts, joined listings and
dashboard aggregates over a single AsyncSession
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import aliased
from sqlalchemy import select, func, delete
from core.exceptions import ConstraintViolationError, StorageError
from models import (
    Industry,
    Material,
    ReuseOpportunity,
    Transaction,
    CirculationMetric,
    TransactionStatus,
)
from schemas.records import (
    RecordCreate,
    IndustryCreate,
    MaterialCreate,
    ReuseOpportunityCreate,
    TransactionCreate,
    CirculationMetricCreate,
)
import logging

logger = logging.getLogger(__name__)

# Opportunities above this feasibility count as active connections
ACTIVE_CONNECTION_THRESHOLD = 0.5


class SymbiosisRepository:
    """
    Repository over the five registry tables.

    Every public method is a single request's worth of work: one insert,
    or a set of SELECTs. Storage failures are rolled back and re-raised as
    StorageError (ConstraintViolationError for unique/foreign key
    violations) so a failed request never leaves a half-written row.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    # ========================================================================
    # Create
    # ========================================================================

    async def _insert(self, model, payload: RecordCreate) -> int:
        payload.ensure_required()

        values = payload.model_dump(exclude_none=True)
        record = model(**values)
        table_name = model.__tablename__

        try:
            self.db.add(record)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Constraint violation on INSERT into {table_name}: {e.orig}")
            raise ConstraintViolationError(
                f"Failed to create {table_name} record",
                context={"operation": "INSERT", "table_name": table_name},
                original_exception=e
            ) from e
        except (SQLAlchemyError, OverflowError) as e:
            # OverflowError: the driver refused to bind a value before SQL ran
            await self.db.rollback()
            logger.error(f"INSERT into {table_name} failed: {e}")
            raise StorageError(
                f"Failed to create {table_name} record",
                context={"operation": "INSERT", "table_name": table_name},
                original_exception=e
            ) from e

        logger.info(f"Inserted {table_name} id={record.id}")
        return record.id

    async def create_industry(self, payload: IndustryCreate) -> int:
        return await self._insert(Industry, payload)

    async def create_material(self, payload: MaterialCreate) -> int:
        return await self._insert(Material, payload)

    async def create_reuse_opportunity(self, payload: ReuseOpportunityCreate) -> int:
        return await self._insert(ReuseOpportunity, payload)

    async def create_transaction(self, payload: TransactionCreate) -> int:
        return await self._insert(Transaction, payload)

    async def create_circulation_metric(self, payload: CirculationMetricCreate) -> int:
        return await self._insert(CirculationMetric, payload)

    # ========================================================================
    # Delete
    # ========================================================================

    async def delete_industry(self, industry_id: int) -> int:
        """
        Delete an industry and, through ON DELETE CASCADE, everything that
        references it or its materials. Returns the number of industries
        removed (0 or 1).
        """
        try:
            result = await self.db.execute(
                delete(Industry).where(Industry.id == industry_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"DELETE from industries failed: {e}")
            raise StorageError(
                "Failed to delete industry",
                context={"operation": "DELETE", "table_name": "industries", "industry_id": industry_id},
                original_exception=e
            ) from e

        logger.info(f"Deleted industry id={industry_id} (rows={result.rowcount})")
        return result.rowcount

    # ========================================================================
    # Listing
    # ========================================================================

    async def _fetch_rows(self, query, table_name: str) -> List[Dict[str, Any]]:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"SELECT from {table_name} failed: {e}")
            raise StorageError(
                f"Failed to fetch {table_name}",
                context={"operation": "SELECT", "table_name": table_name},
                original_exception=e
            ) from e
        return [dict(row) for row in result.mappings().all()]

    async def _scalar(self, query, table_name: str):
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Aggregate over {table_name} failed: {e}")
            raise StorageError(
                f"Failed to aggregate {table_name}",
                context={"operation": "SELECT", "table_name": table_name},
                original_exception=e
            ) from e
        return result.scalar()

    async def list_industries(self) -> List[Industry]:
        try:
            result = await self.db.execute(
                select(Industry).order_by(Industry.created_at.desc(), Industry.id.desc())
            )
        except SQLAlchemyError as e:
            logger.error(f"SELECT from industries failed: {e}")
            raise StorageError(
                "Failed to fetch industries",
                context={"operation": "SELECT", "table_name": "industries"},
                original_exception=e
            ) from e
        return list(result.scalars().all())

    async def list_materials(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Materials with owning industry name and sector, newest first."""
        query = (
            select(
                *Material.__table__.columns,
                Industry.name.label("industry_name"),
                Industry.sector.label("sector"),
            )
            .join(Industry, Material.industry_id == Industry.id)
        )

        if status:
            query = query.where(Material.availability_status == status)

        query = query.order_by(Material.created_at.desc(), Material.id.desc())
        return await self._fetch_rows(query, "materials")

    async def list_reuse_opportunities(self) -> List[Dict[str, Any]]:
        """
        Opportunities ranked by feasibility_index, best first.

        The source industry is resolved through the material's current
        owner; the target industry is joined directly.
        """
        source_industry = aliased(Industry, name="si")
        target_industry = aliased(Industry, name="ti")

        query = (
            select(
                *ReuseOpportunity.__table__.columns,
                Material.name.label("material_name"),
                Material.material_type.label("material_type"),
                source_industry.name.label("source_industry"),
                source_industry.sector.label("source_sector"),
                target_industry.name.label("target_industry_name"),
                target_industry.sector.label("target_sector"),
            )
            .join(Material, ReuseOpportunity.source_material_id == Material.id)
            .join(source_industry, Material.industry_id == source_industry.id)
            .join(target_industry, ReuseOpportunity.target_industry_id == target_industry.id)
            .order_by(ReuseOpportunity.feasibility_index.desc(), ReuseOpportunity.id)
        )
        return await self._fetch_rows(query, "reuse_opportunities")

    async def list_transactions(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        source_industry = aliased(Industry, name="si")
        target_industry = aliased(Industry, name="ti")

        query = (
            select(
                *Transaction.__table__.columns,
                Material.name.label("material_name"),
                source_industry.name.label("source_industry"),
                target_industry.name.label("target_industry"),
            )
            .join(Material, Transaction.material_id == Material.id)
            .join(source_industry, Transaction.source_industry_id == source_industry.id)
            .join(target_industry, Transaction.target_industry_id == target_industry.id)
        )

        if status:
            query = query.where(Transaction.status == status)

        query = query.order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
        return await self._fetch_rows(query, "transactions")

    async def list_circulation_metrics(self) -> List[Dict[str, Any]]:
        query = (
            select(
                *CirculationMetric.__table__.columns,
                Industry.name.label("industry_name"),
            )
            .join(Industry, CirculationMetric.industry_id == Industry.id)
            .order_by(CirculationMetric.measured_at.desc(), CirculationMetric.id.desc())
        )
        return await self._fetch_rows(query, "circulation_metrics")

    # ========================================================================
    # Aggregates
    # ========================================================================

    async def count_industries(self) -> int:
        count = await self._scalar(
            select(func.count()).select_from(Industry), "industries"
        )
        return count or 0

    async def network_graph(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Industries as nodes, one edge per reuse opportunity.

        Edge source is the industry owning the opportunity's material at
        query time, never a stored copy.
        """
        nodes = await self._fetch_rows(
            select(Industry.id, Industry.name, Industry.sector).order_by(Industry.id),
            "industries"
        )
        edges = await self._fetch_rows(
            select(
                ReuseOpportunity.id,
                Material.industry_id.label("source"),
                ReuseOpportunity.target_industry_id.label("target"),
                ReuseOpportunity.feasibility_index.label("strength"),
            )
            .join(Material, ReuseOpportunity.source_material_id == Material.id)
            .order_by(ReuseOpportunity.id),
            "reuse_opportunities"
        )
        return {"nodes": nodes, "edges": edges}

    async def dashboard_summary(self) -> Dict[str, Any]:
        """All dashboard aggregates, recomputed from the tables."""
        total_industries = await self.count_industries()

        total_materials = await self._scalar(
            select(func.count()).select_from(Material), "materials"
        )
        total_quantity = await self._scalar(
            select(func.coalesce(func.sum(Material.quantity), 0)), "materials"
        )

        total_transactions = await self._scalar(
            select(func.count()).select_from(Transaction), "transactions"
        )
        completed_transactions = await self._scalar(
            select(func.count()).select_from(Transaction).where(
                Transaction.status == TransactionStatus.COMPLETED.value
            ),
            "transactions"
        )

        avg_feasibility = await self._scalar(
            select(func.avg(ReuseOpportunity.feasibility_index)), "reuse_opportunities"
        )
        active_connections = await self._scalar(
            select(func.count()).select_from(ReuseOpportunity).where(
                ReuseOpportunity.feasibility_index > ACTIVE_CONNECTION_THRESHOLD
            ),
            "reuse_opportunities"
        )

        return {
            "total_industries": total_industries,
            "available_materials": total_materials or 0,
            "total_transactions": total_transactions or 0,
            "completed_transactions": completed_transactions or 0,
            "total_material_quantity": float(total_quantity or 0),
            "avg_feasibility": float(avg_feasibility or 0),
            "active_connections": active_connections or 0,
        }
