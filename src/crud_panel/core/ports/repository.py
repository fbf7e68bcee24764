from typing import Any, Protocol

from crud_panel.core.config import EntityDescriptor
from crud_panel.core.pagination import Page
from crud_panel.core.search import SearchRequest


class EntityRepository(Protocol):
    def build_query(self, search: SearchRequest, entity: EntityDescriptor) -> Any: ...

    def find(self, entity: EntityDescriptor, entity_id: str) -> Any | None: ...


class EntityPaginator(Protocol):
    def paginate(self, query: Any, page_number: int = 1, page_size: int = 20) -> Page: ...
