from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional
from urllib.parse import urlencode

from src.schemas.org_home import PageLink, PaginationRead


class Paginator:
    """
    Page-link descriptor for a listing of ``total`` items.

    The current page is clamped into range and the window holds up to
    ``window`` page numbers around it.
    """

    def __init__(self, total: int, page_size: int, current: int, window: int) -> None:
        self.total = max(total, 0)
        self.page_size = max(page_size, 1)
        self.window = max(window, 1)
        self.total_pages = math.ceil(self.total / self.page_size)
        self.current = min(max(current, 1), max(self.total_pages, 1))
        self._params: Dict[str, str] = {}

    def add_param(self, key: str, value: Optional[str]) -> None:
        """Carry a query parameter into page links; empty values are skipped."""
        if value:
            self._params[key] = value

    def set_default_params(self, params: Mapping[str, Optional[str]]) -> None:
        for key in ("sort", "q"):
            self.add_param(key, params.get(key))

    @property
    def previous(self) -> Optional[int]:
        return self.current - 1 if self.current > 1 else None

    @property
    def next(self) -> Optional[int]:
        return self.current + 1 if self.current < self.total_pages else None

    def page_numbers(self) -> List[int]:
        if self.total_pages <= self.window:
            return list(range(1, self.total_pages + 1))
        start = self.current - self.window // 2
        start = max(start, 1)
        end = start + self.window - 1
        if end > self.total_pages:
            end = self.total_pages
            start = end - self.window + 1
        return list(range(start, end + 1))

    def link(self, base: str, page: int) -> str:
        query = urlencode({"page": page, **self._params})
        return f"{base}?{query}"

    def to_read(self, base: str) -> PaginationRead:
        return PaginationRead(
            total=self.total,
            page_size=self.page_size,
            current=self.current,
            total_pages=self.total_pages,
            previous=self.previous,
            next=self.next,
            pages=[
                PageLink(num=n, is_current=n == self.current, link=self.link(base, n))
                for n in self.page_numbers()
            ],
            params=dict(self._params),
        )
