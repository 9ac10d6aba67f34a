"""
Health repository.
Checks the database the request session is bound to.
"""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger

logger = get_logger(__name__)


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """True when a trivial query round-trips; connection errors count as down."""
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database health check failed", extra={"error": str(e)})
            return False
