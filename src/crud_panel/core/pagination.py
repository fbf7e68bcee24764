"""Offset pagination primitives shared by every data adapter."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from crud_panel.core.errors import ConfigurationError


@dataclass(frozen=True)
class Page:
    items: tuple[Any, ...]
    total_count: int
    page_size: int
    current_page: int

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.page_count

    @property
    def previous_page(self) -> int | None:
        return self.current_page - 1 if self.has_previous else None

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.has_next else None


def resolve_page_window(page_number: int, page_size: int) -> tuple[int, int]:
    """Return ``(page_number, offset)`` with the page number clamped to >= 1.

    Raises ``ConfigurationError`` when ``page_size`` is not positive.
    """
    if page_size <= 0:
        raise ConfigurationError(f"Page size must be a positive integer, got {page_size!r}")
    page_number = max(1, page_number)
    return page_number, (page_number - 1) * page_size
