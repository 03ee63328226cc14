"""
Data-access layer.

Routes never build SQL themselves; they receive a SymbiosisRepository
bound to the request's session (see ``api.dependencies``), which lets
tests swap in an in-memory database.

Usage:
    from repositories import SymbiosisRepository

    repository = SymbiosisRepository(session)
    industry_id = await repository.create_industry(IndustryCreate(name="Acme Steel", sector="Steel"))
"""

from repositories.symbiosis_repository import SymbiosisRepository

__all__ = ["SymbiosisRepository"]
