from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from crud_panel.core.config import EntityDescriptor
from crud_panel.core.pagination import Page, resolve_page_window
from crud_panel.core.records import field_value
from crud_panel.core.search import SearchRequest, SortOrder


@dataclass(frozen=True)
class InMemoryQuery:
    """A materialised, already filtered and ordered result set."""

    entity: str
    records: tuple[Any, ...]


def _matches(record: Any, terms: tuple[str, ...], search_fields: tuple[str, ...]) -> bool:
    haystacks = [str(field_value(record, name) or "").lower() for name in search_fields]
    return all(any(term.lower() in h for h in haystacks) for term in terms)


def _sort_key(value: Any) -> tuple[int, Any]:
    # None sorts first, mixed types fall back to their string form
    if value is None:
        return (0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    return (2, str(value))


class InMemoryEntityRepository:
    def __init__(self, records: dict[str, Iterable[Any]] | None = None) -> None:
        self.records: dict[str, list[Any]] = {name: list(rows) for name, rows in (records or {}).items()}

    def add(self, entity_name: str, record: Any) -> None:
        self.records.setdefault(entity_name, []).append(record)

    def all(self, entity_name: str) -> list[Any]:
        return list(self.records.get(entity_name, ()))

    def build_query(self, search: SearchRequest, entity: EntityDescriptor) -> InMemoryQuery:
        rows = self.all(entity.name)
        if search.is_search:
            rows = [r for r in rows if _matches(r, search.query_terms, search.search_fields)]
        # stable sort applied from the least to the most significant key
        for name, order in reversed(search.sort):
            rows.sort(key=lambda r, n=name: _sort_key(field_value(r, n)), reverse=order is SortOrder.DESC)
        return InMemoryQuery(entity=entity.name, records=tuple(rows))

    def find(self, entity: EntityDescriptor, entity_id: str) -> Any | None:
        for record in self.records.get(entity.name, ()):
            if str(field_value(record, entity.primary_key)) == str(entity_id):
                return record
        return None


class InMemoryEntityPaginator:
    def paginate(self, query: InMemoryQuery, page_number: int = 1, page_size: int = 20) -> Page:
        page_number, offset = resolve_page_window(page_number, page_size)
        return Page(
            items=query.records[offset : offset + page_size],
            total_count=len(query.records),
            page_size=page_size,
            current_page=page_number,
        )
