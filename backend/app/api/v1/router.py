"""
API router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    materials,
    assembly_categories,
    assemblies,
    assembly_groups,
    clients,
    users,
    projects,
    timeline,
    gantt,
    templates,
    dashboard,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(materials.router, prefix="/materials", tags=["materials"])
api_router.include_router(assembly_categories.router, prefix="/assembly-categories", tags=["assembly-categories"])
api_router.include_router(assemblies.router, prefix="/assemblies", tags=["assemblies"])
api_router.include_router(assembly_groups.router, prefix="/assembly-groups", tags=["assembly-groups"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(timeline.router, prefix="/timeline", tags=["timeline"])
api_router.include_router(gantt.router, prefix="/gantt", tags=["gantt"])
api_router.include_router(dashboard.router, prefix="/dashboard-analytics", tags=["dashboard"])
