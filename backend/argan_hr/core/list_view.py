"""List View — pagination, sort whitelists and search patterns for list endpoints.

Invariants:
    - page >= 1, 1 <= limit <= 100 (ValidationError otherwise)
    - total_pages is 0 for an empty result
    - sort fields resolved only through an explicit whitelist (no arbitrary columns)

Design Decisions:
    - Pagination envelope {page, limit, total_count, total_pages, has_next, has_prev}
      shared by every paginated endpoint so table UIs need one adapter
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping

from argan_hr.core.errors import ValidationError

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError("Page must be at least 1", field="page")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"Limit must be between 1 and {MAX_PAGE_SIZE}", field="limit",
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_pagination(request: PageRequest, total_count: int) -> dict:
    total_pages = math.ceil(total_count / request.limit) if total_count else 0
    return {
        "page": request.page,
        "limit": request.limit,
        "total_count": total_count,
        "total_pages": total_pages,
        "has_next": request.page < total_pages,
        "has_prev": request.page > 1,
    }


def resolve_sort(
    sort_by: str | None, sort_dir: str | None,
    allowed: Mapping[str, Any], default: str,
) -> tuple[Any, bool]:
    """Return (column, descending) for a whitelisted sort key."""
    key = sort_by or default
    if key not in allowed:
        raise ValidationError(
            f"Cannot sort by '{key}'. Allowed: {', '.join(sorted(allowed))}",
            field="sort_by",
        )
    direction = (sort_dir or "asc").lower()
    if direction not in ("asc", "desc"):
        raise ValidationError("sort_dir must be 'asc' or 'desc'", field="sort_dir")
    return allowed[key], direction == "desc"


def like_pattern(term: str) -> str:
    """Case-insensitive LIKE pattern with wildcards escaped (use escape='\\\\')."""
    escaped = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
