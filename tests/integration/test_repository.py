"""
Repository tests against an in-memory SQLite database
"""

import pytest
from sqlalchemy import select, func
from core.exceptions import ConstraintViolationError, StorageError, ValidationError
from models import Industry, Material, ReuseOpportunity, Transaction, CirculationMetric
from schemas.records import (
    IndustryCreate,
    MaterialCreate,
    ReuseOpportunityCreate,
    TransactionCreate,
    CirculationMetricCreate,
)


async def _count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar()


# ============================================================================
# Creation
# ============================================================================

@pytest.mark.asyncio
async def test_created_industry_listed_once(repository):
    industry_id = await repository.create_industry(
        IndustryCreate(name="Acme Steel", sector="Steel", location="Pittsburgh", annual_output=1200)
    )

    industries = await repository.list_industries()
    matching = [i for i in industries if i.name == "Acme Steel"]

    assert len(matching) == 1
    assert matching[0].id == industry_id
    assert matching[0].sector == "Steel"
    assert matching[0].location == "Pittsburgh"
    assert matching[0].annual_output == 1200


@pytest.mark.asyncio
async def test_duplicate_industry_name_rejected(repository, db_session, acme_steel):
    with pytest.raises(ConstraintViolationError):
        await repository.create_industry(IndustryCreate(name="Acme Steel", sector="Metals"))

    assert await _count(db_session, Industry) == 1


@pytest.mark.asyncio
async def test_missing_required_field_never_touches_storage(repository, db_session):
    with pytest.raises(ValidationError):
        await repository.create_industry(IndustryCreate(name="No Sector Inc"))

    assert await _count(db_session, Industry) == 0


@pytest.mark.asyncio
async def test_material_for_unknown_industry_rejected(repository, db_session):
    with pytest.raises(ConstraintViolationError):
        await repository.create_material(MaterialCreate(industry_id=999, name="Orphan slag"))

    assert await _count(db_session, Material) == 0


@pytest.mark.asyncio
async def test_opportunity_for_unknown_material_rejected(repository, db_session, acme_steel):
    with pytest.raises(ConstraintViolationError):
        await repository.create_reuse_opportunity(
            ReuseOpportunityCreate(source_material_id=999, target_industry_id=acme_steel)
        )

    assert await _count(db_session, ReuseOpportunity) == 0


@pytest.mark.asyncio
async def test_value_beyond_driver_range_rolled_back(repository, db_session, acme_steel):
    with pytest.raises(StorageError) as exc_info:
        await repository.create_circulation_metric(
            CirculationMetricCreate(industry_id=acme_steel, circulation_cycles=2 ** 63)
        )

    assert exc_info.value.message == "Failed to create circulation_metrics record"
    assert "too large" in exc_info.value.detail
    assert await _count(db_session, CirculationMetric) == 0
    assert len(await repository.list_industries()) == 1


@pytest.mark.asyncio
async def test_defaults_applied_on_insert(repository, db_session, acme_steel, slag):
    target = await repository.create_industry(IndustryCreate(name="Portland Cement", sector="Construction"))
    opportunity_id = await repository.create_reuse_opportunity(
        ReuseOpportunityCreate(source_material_id=slag, target_industry_id=target)
    )
    transaction_id = await repository.create_transaction(
        TransactionCreate(source_industry_id=acme_steel, target_industry_id=target, material_id=slag)
    )

    opportunity = await db_session.get(ReuseOpportunity, opportunity_id)
    transaction = await db_session.get(Transaction, transaction_id)
    material = await db_session.get(Material, slag)

    assert opportunity.status == "discovered"
    assert opportunity.feasibility_index == 0
    assert transaction.status == "pending"
    assert transaction.transaction_date is not None
    assert material.availability_status == "available"
    assert material.unit == "kg"


# ============================================================================
# Cascade
# ============================================================================

@pytest.mark.asyncio
async def test_deleting_industry_cascades(repository, db_session, acme_steel, slag):
    cement = await repository.create_industry(IndustryCreate(name="Portland Cement", sector="Construction"))
    brewery = await repository.create_industry(IndustryCreate(name="Riverside Brewery", sector="Food"))
    grain = await repository.create_material(MaterialCreate(industry_id=brewery, name="Spent grain", quantity=10))

    # References into acme_steel, directly or through its material
    await repository.create_reuse_opportunity(
        ReuseOpportunityCreate(source_material_id=slag, target_industry_id=cement, feasibility_index=0.8)
    )
    await repository.create_reuse_opportunity(
        ReuseOpportunityCreate(source_material_id=grain, target_industry_id=acme_steel, feasibility_index=0.3)
    )
    await repository.create_transaction(
        TransactionCreate(source_industry_id=acme_steel, target_industry_id=cement, material_id=slag)
    )
    await repository.create_transaction(
        TransactionCreate(source_industry_id=brewery, target_industry_id=acme_steel, material_id=grain)
    )
    await repository.create_circulation_metric(
        CirculationMetricCreate(industry_id=acme_steel, material_name="Slag", reabsorption_rate=0.5)
    )

    # Unrelated to acme_steel; must survive
    await repository.create_reuse_opportunity(
        ReuseOpportunityCreate(source_material_id=grain, target_industry_id=cement, feasibility_index=0.6)
    )

    deleted = await repository.delete_industry(acme_steel)

    assert deleted == 1
    assert await _count(db_session, Industry) == 2
    assert await _count(db_session, Material) == 1
    assert await _count(db_session, ReuseOpportunity) == 1
    assert await _count(db_session, Transaction) == 0
    assert await _count(db_session, CirculationMetric) == 0

    network = await repository.network_graph()
    assert [edge["source"] for edge in network["edges"]] == [brewery]


@pytest.mark.asyncio
async def test_delete_unknown_industry_is_noop(repository, acme_steel):
    assert await repository.delete_industry(999) == 0
    assert len(await repository.list_industries()) == 1


# ============================================================================
# Listing
# ============================================================================

@pytest.mark.asyncio
async def test_industries_newest_first(repository):
    for name in ("First", "Second", "Third"):
        await repository.create_industry(IndustryCreate(name=name, sector="Misc"))

    names = [i.name for i in await repository.list_industries()]

    assert names == ["Third", "Second", "First"]


@pytest.mark.asyncio
async def test_materials_joined_and_filtered(repository, acme_steel, slag):
    await repository.create_material(
        MaterialCreate(industry_id=acme_steel, name="Mill scale", availability_status="in_use")
    )

    everything = await repository.list_materials()
    in_use = await repository.list_materials(status="in_use")
    archived = await repository.list_materials(status="archived")
    unknown = await repository.list_materials(status="no-such-status")

    assert [m["name"] for m in everything] == ["Mill scale", "Blast furnace slag"]
    assert everything[0]["industry_name"] == "Acme Steel"
    assert everything[0]["sector"] == "Steel"
    assert [m["name"] for m in in_use] == ["Mill scale"]
    assert archived == []
    assert unknown == []


@pytest.mark.asyncio
async def test_opportunities_ranked_by_feasibility(repository, acme_steel, slag):
    cement = await repository.create_industry(IndustryCreate(name="Portland Cement", sector="Construction"))

    for feasibility in (0.2, 0.9, 0.5, 0.9, 0.0):
        await repository.create_reuse_opportunity(
            ReuseOpportunityCreate(source_material_id=slag, target_industry_id=cement, feasibility_index=feasibility)
        )

    opportunities = await repository.list_reuse_opportunities()
    scores = [o["feasibility_index"] for o in opportunities]

    assert scores == sorted(scores, reverse=True)
    assert opportunities[0]["material_name"] == "Blast furnace slag"
    assert opportunities[0]["material_type"] == "Slag"
    assert opportunities[0]["source_industry"] == "Acme Steel"
    assert opportunities[0]["source_sector"] == "Steel"
    assert opportunities[0]["target_industry_name"] == "Portland Cement"
    assert opportunities[0]["target_sector"] == "Construction"


@pytest.mark.asyncio
async def test_transactions_joined_and_filtered(repository, acme_steel, slag):
    cement = await repository.create_industry(IndustryCreate(name="Portland Cement", sector="Construction"))
    await repository.create_transaction(
        TransactionCreate(source_industry_id=acme_steel, target_industry_id=cement, material_id=slag)
    )
    await repository.create_transaction(
        TransactionCreate(
            source_industry_id=acme_steel, target_industry_id=cement, material_id=slag, status="completed"
        )
    )

    everything = await repository.list_transactions()
    completed = await repository.list_transactions(status="completed")

    assert len(everything) == 2
    assert everything[0]["status"] == "completed"
    assert everything[0]["material_name"] == "Blast furnace slag"
    assert everything[0]["source_industry"] == "Acme Steel"
    assert everything[0]["target_industry"] == "Portland Cement"
    assert len(completed) == 1


@pytest.mark.asyncio
async def test_circulation_metrics_newest_first(repository, acme_steel):
    await repository.create_circulation_metric(
        CirculationMetricCreate(industry_id=acme_steel, material_name="Slag", reabsorption_rate=0.4)
    )
    await repository.create_circulation_metric(
        CirculationMetricCreate(industry_id=acme_steel, material_name="Scale", reabsorption_rate=0.6)
    )

    metrics = await repository.list_circulation_metrics()

    assert [m["material_name"] for m in metrics] == ["Scale", "Slag"]
    assert metrics[0]["industry_name"] == "Acme Steel"


# ============================================================================
# Aggregates
# ============================================================================

@pytest.mark.asyncio
async def test_dashboard_summary_single_material(repository, acme_steel, slag):
    summary = await repository.dashboard_summary()

    assert summary["total_industries"] == 1
    assert summary["available_materials"] == 1
    assert summary["total_material_quantity"] == 50
    assert summary["avg_feasibility"] == 0
    assert summary["active_connections"] == 0


@pytest.mark.asyncio
async def test_dashboard_summary_empty_registry(repository):
    summary = await repository.dashboard_summary()

    assert summary == {
        "total_industries": 0,
        "available_materials": 0,
        "total_transactions": 0,
        "completed_transactions": 0,
        "total_material_quantity": 0,
        "avg_feasibility": 0,
        "active_connections": 0,
    }


@pytest.mark.asyncio
async def test_dashboard_summary_aggregates(repository, acme_steel, slag):
    cement = await repository.create_industry(IndustryCreate(name="Portland Cement", sector="Construction"))
    await repository.create_material(MaterialCreate(industry_id=cement, name="Kiln dust", quantity=12.5))
    await repository.create_material(MaterialCreate(industry_id=cement, name="Gypsum offcuts"))

    for feasibility in (0.2, 0.6, 0.7):
        await repository.create_reuse_opportunity(
            ReuseOpportunityCreate(source_material_id=slag, target_industry_id=cement, feasibility_index=feasibility)
        )

    await repository.create_transaction(
        TransactionCreate(source_industry_id=acme_steel, target_industry_id=cement, material_id=slag)
    )
    await repository.create_transaction(
        TransactionCreate(
            source_industry_id=acme_steel, target_industry_id=cement, material_id=slag, status="completed"
        )
    )

    summary = await repository.dashboard_summary()

    assert summary["total_industries"] == 2
    assert summary["available_materials"] == 3
    assert summary["total_material_quantity"] == pytest.approx(62.5)
    assert summary["avg_feasibility"] == pytest.approx(0.5)
    assert summary["active_connections"] == 2
    assert summary["total_transactions"] == 2
    assert summary["completed_transactions"] == 1


@pytest.mark.asyncio
async def test_network_graph_keeps_parallel_edges(repository, acme_steel, slag):
    cement = await repository.create_industry(IndustryCreate(name="Portland Cement", sector="Construction"))
    first = await repository.create_reuse_opportunity(
        ReuseOpportunityCreate(source_material_id=slag, target_industry_id=cement, feasibility_index=0.8)
    )
    second = await repository.create_reuse_opportunity(
        ReuseOpportunityCreate(source_material_id=slag, target_industry_id=cement, feasibility_index=0.4)
    )

    graph = await repository.network_graph()

    assert graph["nodes"] == [
        {"id": acme_steel, "name": "Acme Steel", "sector": "Steel"},
        {"id": cement, "name": "Portland Cement", "sector": "Construction"},
    ]
    assert graph["edges"] == [
        {"id": first, "source": acme_steel, "target": cement, "strength": 0.8},
        {"id": second, "source": acme_steel, "target": cement, "strength": 0.4},
    ]
