"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Any, Generic, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, inspect, or_

from app.core.exceptions import ValidationException
from app.db.base import Base
from app.utils.list_view import ListViewState

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    # Columns searched by the list view's free-text query
    search_fields: Sequence[str] = ("name",)
    # Columns a list view may sort on; the first one is the default
    sortable_fields: Sequence[str] = ("name", "created_at", "updated_at")

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    def load_options(self) -> Iterable[Any]:
        """Eager-load options applied to every read; override per aggregate."""
        return ()

    def _reject_cleared(self, values: dict) -> None:
        """Raise a 400 when a NOT NULL column is explicitly set to None."""
        columns = inspect(self.model).columns
        for key, value in values.items():
            if value is None and key in columns and not columns[key].nullable:
                raise ValidationException(
                    f"{key} cannot be empty",
                    f"{self.model.__name__}.{key} is required",
                    {"field": key},
                )

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        self._reject_cleared(kwargs)
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, id: UUID) -> Optional[ModelType]:
        """
        Get a record by ID with the repository's eager loads.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        result = await self.session.execute(
            select(self.model)
            .options(*self.load_options())
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by(self, **criteria) -> Optional[ModelType]:
        """Get the first record matching all column criteria."""
        query = select(self.model).options(*self.load_options())
        for key, value in criteria.items():
            query = query.where(getattr(self.model, key) == value)
        result = await self.session.execute(query.limit(1))
        return result.scalars().first()

    async def exists(self, id: UUID) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(self.model.id == id)
        )
        return result.scalar_one() > 0

    async def count_where(self, column, value) -> int:
        """Count rows of the column's model whose column equals value."""
        result = await self.session.execute(
            select(func.count()).select_from(column.class_).where(column == value)
        )
        return result.scalar_one()

    def _apply_list_view_filters(self, query, state: ListViewState):
        for key, value in state.active_filters.items():
            if not hasattr(self.model, key):
                raise ValidationException(f"Unknown filter: {key}")
            query = query.where(getattr(self.model, key) == value)

        text = state.search_text
        if text and self.search_fields:
            pattern = f"%{text}%"
            query = query.where(
                or_(*[getattr(self.model, name).ilike(pattern) for name in self.search_fields])
            )
        return query

    def _order_by(self, state: ListViewState):
        sort_key = state.sort_key or self.sortable_fields[0]
        if sort_key not in self.sortable_fields:
            raise ValidationException(
                f"Cannot sort by {sort_key}",
                f"Sortable fields: {', '.join(self.sortable_fields)}",
            )
        column = getattr(self.model, sort_key)
        primary = column.desc() if state.sort_dir == "desc" else column.asc()
        # Stable order across pages
        return primary, self.model.id.asc()

    async def list_view(self, state: ListViewState) -> Tuple[List[ModelType], int]:
        """
        Apply a list-view state: filters, free-text search, sort and page.

        Returns:
            (records on the requested page, total matching records)
        """
        filtered = self._apply_list_view_filters(select(self.model), state)

        count_result = await self.session.execute(
            select(func.count()).select_from(filtered.subquery())
        )
        total = count_result.scalar_one()

        query = filtered.options(*self.load_options()).order_by(*self._order_by(state))
        if state.page_size is not None:
            query = query.offset(state.offset).limit(state.page_size)

        result = await self.session.execute(query)
        return list(result.scalars().unique().all()), total

    async def update(self, id: UUID, **kwargs) -> Optional[ModelType]:
        """
        Update a record.

        Args:
            id: Record ID
            **kwargs: Attributes to update

        Returns:
            Updated model instance or None
        """
        self._reject_cleared(kwargs)
        if kwargs:
            await self.session.execute(
                update(self.model)
                .where(self.model.id == id)
                .values(**kwargs)
                .execution_options(synchronize_session=False)
            )
            await self.session.flush()
        return await self.get(id)

    async def delete(self, id: UUID) -> bool:
        """
        Delete a record.

        Args:
            id: Record ID

        Returns:
            True if deleted, False if not found
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id == id)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount > 0
