"""
Database bootstrapping: table creation for local setups and the seed script.
Production schemas are expected to be managed by migrations.
"""

from app.db.base import Base
from app.db import session as db_session
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all database tables registered on Base."""
    # Registers every model on Base.metadata
    import app.models  # noqa: F401

    await db_session.init_db()
    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created", extra={"tables": len(Base.metadata.tables)})
