"""
Populate the registry with a small demo network.

Inserts go through SymbiosisRepository, so the same required-field and
constraint checks apply as over HTTP. Circulation metrics have no HTTP
create endpoint and are only ever written from here.

Usage:
    python scripts/seed_demo.py
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import engine, async_session_maker, init_schema
from repositories import SymbiosisRepository
from schemas.records import (
    IndustryCreate,
    MaterialCreate,
    ReuseOpportunityCreate,
    TransactionCreate,
    CirculationMetricCreate,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


DEMO_INDUSTRIES = [
    {"name": "Acme Steel", "sector": "Steel", "location": "Pittsburgh", "annual_output": 120000},
    {"name": "Portland Cement Works", "sector": "Construction", "location": "Lehigh Valley", "annual_output": 450000},
    {"name": "Riverside Brewery", "sector": "Food & Beverage", "location": "Milwaukee", "annual_output": 8000},
    {"name": "GreenLeaf Farms", "sector": "Agriculture", "location": "Central Valley", "annual_output": 30000},
]

# (owner, name, material_type, quantity, unit)
DEMO_MATERIALS = [
    ("Acme Steel", "Blast furnace slag", "Slag", 1500, "tonnes"),
    ("Acme Steel", "Waste heat", "Energy", 320, "MWh"),
    ("Riverside Brewery", "Spent grain", "Organic", 75, "tonnes"),
]

# (material, target, compatibility, feasibility)
DEMO_OPPORTUNITIES = [
    ("Blast furnace slag", "Portland Cement Works", 0.92, 0.85),
    ("Spent grain", "GreenLeaf Farms", 0.80, 0.72),
    ("Waste heat", "Riverside Brewery", 0.55, 0.40),
]


async def seed_demo_data(repository: SymbiosisRepository) -> dict:
    """Insert the demo records and return the generated ids by name."""
    industry_ids = {}
    for industry in DEMO_INDUSTRIES:
        industry_ids[industry["name"]] = await repository.create_industry(IndustryCreate(**industry))

    material_ids = {}
    for owner, name, material_type, quantity, unit in DEMO_MATERIALS:
        material_ids[name] = await repository.create_material(MaterialCreate(
            industry_id=industry_ids[owner],
            name=name,
            material_type=material_type,
            quantity=quantity,
            unit=unit,
        ))

    for material, target, compatibility, feasibility in DEMO_OPPORTUNITIES:
        await repository.create_reuse_opportunity(ReuseOpportunityCreate(
            source_material_id=material_ids[material],
            target_industry_id=industry_ids[target],
            compatibility_score=compatibility,
            feasibility_index=feasibility,
        ))

    await repository.create_transaction(TransactionCreate(
        source_industry_id=industry_ids["Acme Steel"],
        target_industry_id=industry_ids["Portland Cement Works"],
        material_id=material_ids["Blast furnace slag"],
        quantity_transferred=400,
        unit="tonnes",
        status="completed",
        cost_savings=18000,
        environmental_benefit=120,
    ))

    await repository.create_circulation_metric(CirculationMetricCreate(
        industry_id=industry_ids["Portland Cement Works"],
        material_name="Blast furnace slag",
        days_to_reabsorption=21,
        circulation_cycles=3,
        reabsorption_rate=0.78,
    ))

    logger.info(
        f"Seeded {len(industry_ids)} industries, {len(material_ids)} materials, "
        f"{len(DEMO_OPPORTUNITIES)} opportunities"
    )
    return {"industries": industry_ids, "materials": material_ids}


async def main():
    await init_schema(engine)
    try:
        async with async_session_maker() as session:
            await seed_demo_data(SymbiosisRepository(session))
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
