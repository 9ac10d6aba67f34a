"""
Dashboard analytics service.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.db.repositories.dashboard_repository import DashboardRepository
from app.models.assembly import Assembly
from app.models.project import CLOSED_PROJECT_STATUSES, ProjectStatus
from app.models.template import Template, TemplateAssembly
from app.models.user import User
from app.schemas.dashboard import (
    AssemblyAnalytics,
    DashboardAnalytics,
    MaterialAnalytics,
    MonthlyGrowth,
    NamedCount,
    NamedValue,
    ProjectAnalytics,
    RecentProject,
    TemplateAnalytics,
    UserAnalytics,
)
from app.services.base_service import BaseService

logger = get_logger(__name__)

TOP_LIMIT = 5
RECENT_MATERIAL_DAYS = 30
GROWTH_MONTHS = 6


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _month_key(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def _last_months(now: datetime, count: int):
    """Month keys ending with now's month, oldest first."""
    keys = []
    for back in range(count - 1, -1, -1):
        year, month = divmod(now.month - 1 - back, 12)
        keys.append(f"{now.year + year:04d}-{month + 1:02d}")
    return keys


def _ratio(part: float, whole: int) -> float:
    return part / whole if whole else 0.0


class DashboardService(BaseService):
    """Service computing dashboard analytics."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = DashboardRepository(session)

    async def _materials(self, now: datetime) -> MaterialAnalytics:
        totals = await self.repo.material_totals()
        cutoff = now - timedelta(days=RECENT_MATERIAL_DAYS)
        created = await self.repo.material_created_at()
        return MaterialAnalytics(
            total=totals["total"],
            total_value=totals["total_value"],
            top_expensive=[
                NamedValue(name=name, value=price)
                for name, price in await self.repo.top_expensive_materials(TOP_LIMIT)
            ],
            recent_count=sum(1 for value in created if _as_utc(value) > cutoff),
            with_prices=totals["with_prices"],
            without_prices=totals["total"] - totals["with_prices"],
            manufacturers_count=totals["manufacturers_count"],
            unit_types_count=totals["unit_types_count"],
        )

    async def _assemblies(self) -> AssemblyAnalytics:
        total = await self.repo.count(Assembly)
        lines, value = await self.repo.assembly_material_totals()
        return AssemblyAnalytics(
            total=total,
            total_value=value,
            avg_complexity=_ratio(lines, total),
            top_used=[
                NamedCount(name=name, count=count)
                for name, count in await self.repo.top_used_assemblies(TOP_LIMIT)
            ],
        )

    async def _templates(self, projects) -> TemplateAnalytics:
        total = await self.repo.count(Template)
        lines = await self.repo.count(TemplateAssembly)
        return TemplateAnalytics(
            total=total,
            active_projects=sum(
                1 for p in projects
                if p.from_template_id is not None and p.status not in CLOSED_PROJECT_STATUSES
            ),
            avg_assemblies=_ratio(lines, total),
            most_popular=[
                NamedCount(name=name, count=count)
                for name, count in await self.repo.most_popular_templates(TOP_LIMIT)
            ],
        )

    @staticmethod
    def _projects(projects, now: datetime) -> ProjectAnalytics:
        total_value = sum(p.total_price or 0 for p in projects)

        breakdown = {s.value: 0 for s in ProjectStatus}
        for p in projects:
            breakdown[p.status.value] += 1

        growth = {key: MonthlyGrowth(month=key) for key in _last_months(now, GROWTH_MONTHS)}
        for p in projects:
            bucket = growth.get(_month_key(_as_utc(p.created_at)))
            if bucket is not None:
                bucket.count += 1
                bucket.value += p.total_price or 0

        return ProjectAnalytics(
            total=len(projects),
            total_value=total_value,
            avg_value=_ratio(total_value, len(projects)),
            status_breakdown=breakdown,
            monthly_growth=list(growth.values()),
            recent_projects=[
                RecentProject(
                    id=p.id,
                    name=p.name,
                    status=p.status,
                    total_price=p.total_price or 0,
                    created_at=p.created_at,
                )
                for p in projects[:TOP_LIMIT]
            ],
        )

    async def _users(self) -> UserAnalytics:
        return UserAnalytics(
            total=await self.repo.count(User),
            active=await self.repo.active_users(),
            by_role=await self.repo.users_by_role(),
        )

    async def get_analytics(self, now: Optional[datetime] = None) -> DashboardAnalytics:
        """
        Compute dashboard analytics.

        Args:
            now: Reference time for the recent and monthly windows; defaults to the current UTC time
        """
        now = _as_utc(now) if now else datetime.now(timezone.utc)
        projects = await self.repo.projects()
        analytics = DashboardAnalytics(
            materials=await self._materials(now),
            assemblies=await self._assemblies(),
            templates=await self._templates(projects),
            projects=self._projects(projects, now),
            users=await self._users(),
            generated_at=now,
        )
        logger.info(
            "Dashboard analytics computed",
            extra={"projects": analytics.projects.total, "materials": analytics.materials.total},
        )
        return analytics
