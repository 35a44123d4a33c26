"""Shared listing helper for products and orders.

Three mutually exclusive modes, picked from the request:

- cursor given  -> forward walk by ascending id, ``limit + 1`` rows are read
  to learn whether another page exists;
- page given    -> offset window plus a total count;
- neither       -> the full, unpaginated scan.

A cursor wins when both a cursor and a page are supplied.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, TypeVar

from ims.application.dto import CursorPagination, OffsetPagination, PageDTO
from ims.domain.exceptions import ValidationError
from ims.domain.repository.listing import ListableRepository

T = TypeVar("T")
F = TypeVar("F")
D = TypeVar("D")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class ListParams:
    """Pagination request. A cursor of 0 starts a cursor walk."""

    cursor: int | None = None
    page: int | None = None
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_LIMIT}")
        if self.cursor is not None and self.cursor < 0:
            raise ValidationError("Cursor must not be negative")
        if self.page is not None and self.page < 1:
            raise ValidationError("Page must be at least 1")


def paginate(
    repo: ListableRepository[T, F],
    criteria: F,
    params: ListParams,
    to_dto: Callable[[T], D],
) -> PageDTO[D]:
    if params.cursor is not None:
        rows = repo.list_after(criteria, params.cursor, params.limit + 1)
        has_more = len(rows) > params.limit
        rows = rows[: params.limit]
        next_cursor = rows[-1].id if has_more and rows else None  # type: ignore[attr-defined]
        return PageDTO(
            items=[to_dto(row) for row in rows],
            pagination=CursorPagination(next_cursor=next_cursor, has_more=has_more),
        )

    if params.page is not None:
        offset = (params.page - 1) * params.limit
        rows = repo.list_window(criteria, offset, params.limit)
        total = repo.count(criteria)
        total_pages = math.ceil(total / params.limit)
        return PageDTO(
            items=[to_dto(row) for row in rows],
            pagination=OffsetPagination(
                page=params.page,
                limit=params.limit,
                total=total,
                total_pages=total_pages,
                has_more=params.page < total_pages,
            ),
        )

    return PageDTO(items=[to_dto(row) for row in repo.list_all(criteria)])
