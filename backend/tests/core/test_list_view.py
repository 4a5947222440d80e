"""List view helpers — page bounds, pagination envelope, sort whitelist, LIKE escaping."""

import pytest

from argan_hr.core.errors import ValidationError
from argan_hr.core.list_view import PageRequest, build_pagination, like_pattern, resolve_sort


def test_page_request_offset():
    assert PageRequest(page=3, limit=10).offset == 20


@pytest.mark.parametrize("page, limit", [(0, 25), (1, 0), (1, 101)])
def test_page_request_bounds(page, limit):
    with pytest.raises(ValidationError):
        PageRequest(page=page, limit=limit)


def test_pagination_envelope():
    assert build_pagination(PageRequest(page=2, limit=10), 25) == {
        "page": 2, "limit": 10, "total_count": 25, "total_pages": 3,
        "has_next": True, "has_prev": True,
    }


def test_empty_result_has_zero_pages():
    p = build_pagination(PageRequest(), 0)
    assert p["total_pages"] == 0
    assert not p["has_next"]
    assert not p["has_prev"]


def test_resolve_sort_defaults_and_direction():
    allowed = {"name": "NAME", "created_at": "CREATED"}
    assert resolve_sort(None, None, allowed, "name") == ("NAME", False)
    assert resolve_sort("created_at", "DESC", allowed, "name") == ("CREATED", True)


def test_resolve_sort_rejects_unknown_column_and_direction():
    with pytest.raises(ValidationError):
        resolve_sort("password_hash", "asc", {"name": 1}, "name")
    with pytest.raises(ValidationError):
        resolve_sort("name", "sideways", {"name": 1}, "name")


def test_like_pattern_escapes_wildcards():
    assert like_pattern(" 50%_off ") == "%50\\%\\_off%"
