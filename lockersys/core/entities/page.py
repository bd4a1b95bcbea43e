from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    @classmethod
    def of(cls, page: int | None, limit: int | None) -> PageRequest:
        """Coerce missing or non-positive values to the nearest valid page request."""
        return cls(page=max(page or 1, 1), limit=max(limit or 10, 1))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)
