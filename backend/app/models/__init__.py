"""
Database models package.
Importing this package registers every model on Base.metadata.
"""

from app.models.material import Material
from app.models.assembly_category import AssemblyCategory
from app.models.assembly import Assembly, AssemblyMaterial, AssemblyModule
from app.models.assembly_group import AssemblyGroup, AssemblyGroupItem, GroupType
from app.models.client import Client, ClientType, ClientCategory, ClientStatus
from app.models.user import User, UserRole, UserStatus
from app.models.timeline import Timeline, Milestone, Task, ScheduleStatus, TaskType, Priority
from app.models.project import Project, ProjectStatus
from app.models.template import Template, TemplateAssembly

__all__ = [
    "Material",
    "AssemblyCategory",
    "Assembly",
    "AssemblyMaterial",
    "AssemblyModule",
    "AssemblyGroup",
    "AssemblyGroupItem",
    "GroupType",
    "Client",
    "ClientType",
    "ClientCategory",
    "ClientStatus",
    "User",
    "UserRole",
    "UserStatus",
    "Timeline",
    "Milestone",
    "Task",
    "ScheduleStatus",
    "TaskType",
    "Priority",
    "Project",
    "ProjectStatus",
    "Template",
    "TemplateAssembly",
]
