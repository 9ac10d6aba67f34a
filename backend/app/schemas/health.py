"""
Health check response schemas.
"""

from pydantic import BaseModel
from typing import Dict


class HealthResponse(BaseModel):
    """Service status; checks maps each dependency to ok, error or skipped."""
    status: str
    version: str
    uptime: str
    checks: Dict[str, str] = {}
