"""
Health check endpoint.
Returns system status and uptime information.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.health import HealthResponse
from app.deps.di_container import get_container

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def get_health(
    db: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """
    Health check endpoint.
    Returns system status, uptime, and health checks.
    """
    container = get_container()
    controller = container.health_controller()
    return await controller.get_health(db)
