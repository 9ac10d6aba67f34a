"""
Base service class.
Services contain business logic and coordinate repositories.
"""

from abc import ABC
from typing import Awaitable, Callable, Iterable
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import AppException, ConflictException
from app.core.logging import get_logger
from app.schemas.common import BulkDeleteFailure, BulkDeleteResponse

logger = get_logger(__name__)


class BaseService(ABC):
    """Base service class for all services."""

    session = None

    async def bulk_delete(
        self,
        ids: Iterable[UUID],
        delete_one: Callable[[UUID], Awaitable[bool]],
    ) -> BulkDeleteResponse:
        """
        Delete records one at a time, each in its own commit.

        Args:
            ids: Records to delete
            delete_one: Single-record delete that commits and returns False when missing

        Returns:
            BulkDeleteResponse splitting referential conflicts from other failures
        """
        outcome = BulkDeleteResponse()
        for record_id in ids:
            try:
                deleted = await delete_one(record_id)
            except (ConflictException, IntegrityError) as e:
                await self.session.rollback()
                message = e.error if isinstance(e, AppException) else "Record is still referenced"
                outcome.constraint_errors.append(BulkDeleteFailure(id=record_id, message=message))
            except (AppException, SQLAlchemyError) as e:
                await self.session.rollback()
                logger.warning(
                    "Bulk delete failed for record",
                    extra={"record_id": str(record_id), "error": str(e)},
                )
                message = e.error if isinstance(e, AppException) else "Delete failed"
                outcome.other_errors.append(BulkDeleteFailure(id=record_id, message=message))
            else:
                if deleted:
                    outcome.deleted.append(record_id)
                else:
                    outcome.other_errors.append(BulkDeleteFailure(id=record_id, message="Not found"))

        logger.info(
            "Bulk delete finished",
            extra={
                "deleted": len(outcome.deleted),
                "constraint_errors": len(outcome.constraint_errors),
                "other_errors": len(outcome.other_errors),
            },
        )
        return outcome
