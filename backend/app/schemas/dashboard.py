"""
Dashboard analytics schemas.
"""

from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime
from uuid import UUID

from app.models.project import ProjectStatus


class NamedValue(BaseModel):
    name: str
    value: float


class NamedCount(BaseModel):
    name: str
    count: int


class MaterialAnalytics(BaseModel):
    total: int = 0
    total_value: float = 0
    top_expensive: List[NamedValue] = []
    recent_count: int = 0
    with_prices: int = 0
    without_prices: int = 0
    manufacturers_count: int = 0
    unit_types_count: int = 0


class AssemblyAnalytics(BaseModel):
    total: int = 0
    # Sum of price x quantity over every assembly material line
    total_value: float = 0
    # Material lines per assembly
    avg_complexity: float = 0
    # Assemblies by number of template lines using them
    top_used: List[NamedCount] = []


class TemplateAnalytics(BaseModel):
    total: int = 0
    active_projects: int = 0
    avg_assemblies: float = 0
    most_popular: List[NamedCount] = []


class MonthlyGrowth(BaseModel):
    month: str
    count: int = 0
    value: float = 0


class RecentProject(BaseModel):
    id: UUID
    name: str
    status: ProjectStatus
    total_price: float
    created_at: datetime


class ProjectAnalytics(BaseModel):
    total: int = 0
    total_value: float = 0
    avg_value: float = 0
    status_breakdown: Dict[str, int] = {}
    monthly_growth: List[MonthlyGrowth] = []
    recent_projects: List[RecentProject] = []


class UserAnalytics(BaseModel):
    total: int = 0
    active: int = 0
    by_role: Dict[str, int] = {}


class DashboardAnalytics(BaseModel):
    """Catalog, project and user figures for the dashboard."""
    materials: MaterialAnalytics
    assemblies: AssemblyAnalytics
    templates: TemplateAnalytics
    projects: ProjectAnalytics
    users: UserAnalytics
    generated_at: datetime
