"""Normalisation of list requests into :class:`SearchRequest` values."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from crud_panel.models import Field

QUERY_PARAM = "query"
PAGE_PARAM = "page"

_SORT_KEY = re.compile(r"^sort\[(?P<field>[^\]]+)\]$")


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SearchRequest:
    query: str
    search_fields: tuple[str, ...]
    sort: tuple[tuple[str, SortOrder], ...]
    fields: tuple[Field, ...]

    @property
    def query_terms(self) -> tuple[str, ...]:
        return tuple(self.query.split())

    @property
    def is_search(self) -> bool:
        return bool(self.query_terms) and bool(self.search_fields)

    def sort_direction(self, field_name: str) -> SortOrder | None:
        for name, order in self.sort:
            if name == field_name:
                return order
        return None

    def to_query_params(self) -> dict[str, str]:
        """Query parameters that reproduce this search, for paging links."""
        params = {QUERY_PARAM: self.query} if self.query else {}
        params.update((f"sort[{name}]", order.value) for name, order in self.sort)
        return params


def _parse_order(raw: str) -> SortOrder | None:
    try:
        return SortOrder(raw.strip().upper())
    except ValueError:
        return None


def build_search_request(
    query_params: Mapping[str, str],
    default_sort: Mapping[str, SortOrder | str],
    fields: Sequence[Field],
    search_fields: Iterable[str] | None = None,
) -> SearchRequest:
    """Build the search request for one list action.

    Sorting comes from ``sort[<field>]=ASC|DESC`` query parameters followed by
    the page's default sort for fields the request did not mention. Only
    sortable visible fields are honoured. When ``search_fields`` is ``None``
    every visible field is searchable; otherwise only its visible names are kept.
    """
    visible = {f.name for f in fields}
    sortable = {f.name for f in fields if f.sortable}

    sort: list[tuple[str, SortOrder]] = []
    seen: set[str] = set()
    for key, value in query_params.items():
        match = _SORT_KEY.match(key)
        if match is None:
            continue
        name = match.group("field")
        order = _parse_order(value)
        if order is None or name not in sortable or name in seen:
            continue
        sort.append((name, order))
        seen.add(name)

    for name, value in default_sort.items():
        order = value if isinstance(value, SortOrder) else _parse_order(value)
        if order is None or name in seen or name not in sortable:
            continue
        sort.append((name, order))
        seen.add(name)

    if search_fields is None:
        resolved_search_fields = tuple(f.name for f in fields)
    else:
        resolved_search_fields = tuple(name for name in search_fields if name in visible)

    return SearchRequest(
        query=query_params.get(QUERY_PARAM, "").strip(),
        search_fields=resolved_search_fields,
        sort=tuple(sort),
        fields=tuple(fields),
    )


def parse_page_number(query_params: Mapping[str, str]) -> int:
    """Extract the 1-based ``page`` parameter, falling back to 1 when invalid."""
    raw = query_params.get(PAGE_PARAM, "1")
    try:
        return max(1, int(raw))
    except (ValueError, TypeError):
        return 1
