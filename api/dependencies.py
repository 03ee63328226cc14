"""
FastAPI dependency providers
"""

from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import async_session_maker
from repositories import SymbiosisRepository


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the request finishes"""
    async with async_session_maker() as session:
        yield session


def get_repository(db: AsyncSession = Depends(get_db)) -> SymbiosisRepository:
    return SymbiosisRepository(db)
