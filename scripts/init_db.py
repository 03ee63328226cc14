import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import engine, init_schema
from core.exceptions import SchemaInitializationError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def init_database():
    logger.info("Connecting to database...")
    try:
        await init_schema(engine)
        logger.info("Tables created successfully.")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(init_database())
    except SchemaInitializationError as e:
        logger.error(str(e))
        sys.exit(1)
