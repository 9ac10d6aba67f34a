"""
Schemas shared by every resource: bulk operations.
"""

from pydantic import BaseModel, Field
from typing import List
from uuid import UUID


class BulkDeleteRequest(BaseModel):
    """Ids selected on a list page."""
    ids: List[UUID] = Field(..., min_length=1)


class BulkDeleteFailure(BaseModel):
    """One id that could not be deleted and why."""
    id: UUID
    message: str


class BulkDeleteResponse(BaseModel):
    """Outcome of a bulk delete, partitioned by failure kind."""
    deleted: List[UUID] = []
    constraint_errors: List[BulkDeleteFailure] = []
    other_errors: List[BulkDeleteFailure] = []
