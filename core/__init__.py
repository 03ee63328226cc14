"""
Core utilities and configuration for the Symbiosis Registry service.

Modules:
    config: Application configuration and environment variable management
    database: Engine, session factory and schema initialization
    exceptions: Exception hierarchy mapped to HTTP responses
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import async_session_maker, init_schema
    from core.exceptions import ValidationError, StorageError
    from core.logging import setup_logging

Example:
    setup_logging()
    await init_schema()

    async with async_session_maker() as session:
        repository = SymbiosisRepository(session)
"""

__all__ = [
    "settings",
    "async_session_maker",
    "init_schema",
    "setup_logging",
    # Exceptions
    "RegistryException",
    "ValidationError",
    "StorageError",
    "ConstraintViolationError",
    "SchemaInitializationError",
]
