"""
Base service class for the playgroup statistics package.

Statistics are read-only: services load snapshots through a session that is
never committed. Writes go through Database.transaction() instead.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession


class BaseService:
    """Base class for read-only services over an async session factory."""
    
    def __init__(self, session_factory):
        """
        Initialize base service with session factory.
        
        Args:
            session_factory: Async session factory from Database class
        """
        self.session_factory = session_factory
    
    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a read-only session; its transaction is rolled back on exit."""
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.rollback()
