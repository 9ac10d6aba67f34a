"""
List view state tests.
"""

import pytest

from app.core.exceptions import ValidationException
from app.models.client import ClientStatus
from app.utils.list_view import ListViewState, parse_enum_filters


def test_offset_follows_page_and_size():
    assert ListViewState(page=3, page_size=20).offset == 40
    assert ListViewState(page=0, page_size=20).offset == 0
    assert ListViewState(page=3).offset == 0


def test_blank_and_all_filters_are_inactive():
    state = ListViewState(filters={"status": "all", "city": "", "province": None, "unit": "PCS"})

    assert state.active_filters == {"unit": "PCS"}


def test_search_text_is_trimmed():
    assert ListViewState(query="  cable ").search_text == "cable"
    assert ListViewState(query="   ").search_text is None


def test_unpaginated_keeps_filters_and_search():
    state = ListViewState(query="x", page=4, page_size=10, filters={"unit": "PCS"})

    full = state.unpaginated()

    assert full.page == 1
    assert full.page_size is None
    assert full.query == "x"
    assert full.filters == {"unit": "PCS"}


def test_parse_enum_filters_is_case_insensitive():
    state = ListViewState(filters={"status": "inactive", "city": "Bandung"})

    parsed = parse_enum_filters(state, {"status": ClientStatus})

    assert parsed.filters == {"status": ClientStatus.INACTIVE, "city": "Bandung"}


def test_parse_enum_filters_rejects_unknown_values():
    with pytest.raises(ValidationException) as exc_info:
        parse_enum_filters(ListViewState(filters={"status": "dormant"}), {"status": ClientStatus})

    assert exc_info.value.status_code == 400
    assert "ACTIVE" in exc_info.value.message
