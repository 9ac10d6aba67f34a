"""
Generic list-view state shared by every resource listing and export.
One state object carries the search text, filters, sort and page so that
lists, exports and bulk operations all see the same rows.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Type

from fastapi import Query

from app.core.config import settings
from app.core.exceptions import ValidationException

SORT_DIRECTIONS = ("asc", "desc")

# Filter value that means "no filter"; sent by the list pages' select boxes
ALL = "all"


@dataclass(frozen=True)
class ListViewState:
    """Search/filter/sort/pagination for one list request."""

    query: Optional[str] = None
    sort_key: Optional[str] = None
    sort_dir: str = "asc"
    page: int = 1
    page_size: Optional[int] = None
    filters: Dict[str, Any] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        if self.page_size is None:
            return 0
        return (max(self.page, 1) - 1) * self.page_size

    @property
    def active_filters(self) -> Dict[str, Any]:
        """Filters with blank and "all" values dropped."""
        return {
            key: value
            for key, value in self.filters.items()
            if value is not None and value != "" and value != ALL
        }

    @property
    def search_text(self) -> Optional[str]:
        if self.query is None:
            return None
        text = self.query.strip()
        return text or None

    def with_filters(self, **filters: Any) -> "ListViewState":
        return replace(self, filters={**self.filters, **filters})

    def unpaginated(self) -> "ListViewState":
        """Same rows, all pages; used by exports and bulk selection."""
        return replace(self, page=1, page_size=None)


def list_view_params(
    search: Optional[str] = Query(None, description="Case-insensitive text search"),
    sort_by: Optional[str] = Query(None),
    sort_dir: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> ListViewState:
    """FastAPI dependency building the list state from query parameters."""
    return ListViewState(
        query=search,
        sort_key=sort_by,
        sort_dir=sort_dir,
        page=page,
        page_size=page_size,
    )


def parse_enum_filters(state: ListViewState, enums: Dict[str, Type[Enum]]) -> ListViewState:
    """Turn string filter values into enum members; unknown values are a 400."""
    parsed = {}
    for key, value in state.active_filters.items():
        enum_type = enums.get(key)
        if enum_type is None or isinstance(value, enum_type):
            continue
        try:
            parsed[key] = enum_type(str(value).upper())
        except ValueError:
            raise ValidationException(
                f"Invalid {key}: {value}",
                f"Allowed values: {', '.join(e.value for e in enum_type)}",
            )
    return state.with_filters(**parsed)
