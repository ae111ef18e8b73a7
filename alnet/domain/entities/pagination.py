"""Generic container for paginated query results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """A slice of results together with the metadata needed by clients."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_pagination(
    page: int | None,
    limit: int | None,
    *,
    default_limit: int = 20,
    max_limit: int = 100,
) -> tuple[int, int]:
    """Clamp ``page`` and ``limit`` to positive values within ``max_limit``."""

    page_number = page if page and page > 0 else 1
    page_size = limit if limit and limit > 0 else default_limit
    return page_number, min(page_size, max_limit)


__all__ = ["Page", "normalize_pagination"]
