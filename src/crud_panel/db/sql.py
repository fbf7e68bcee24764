"""SQLAlchemy-backed repository and paginator."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, Select, String, and_, cast, func, inspect, or_, select
from sqlalchemy.orm import Session

from crud_panel.core.config import EntityDescriptor
from crud_panel.core.errors import ConfigurationError
from crud_panel.core.pagination import Page, resolve_page_window
from crud_panel.core.search import SearchRequest, SortOrder

logger = logging.getLogger(__name__)


def _mapped_model(entity: EntityDescriptor) -> Any:
    if entity.model is None:
        raise ConfigurationError(f"Entity {entity.name!r} has no mapped model")
    return entity.model


def _column(model: Any, name: str) -> Any:
    try:
        return inspect(model).columns[name]
    except KeyError as exc:
        raise ConfigurationError(f"{model.__name__} has no column {name!r}") from exc


class SqlAlchemyEntityRepository:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def build_query(self, search: SearchRequest, entity: EntityDescriptor) -> Select[Any]:
        model = _mapped_model(entity)
        stmt = select(model)

        if search.is_search:
            columns = [_column(model, name) for name in search.search_fields]
            stmt = stmt.where(
                and_(
                    *(
                        or_(*(cast(col, String).icontains(term, autoescape=True) for col in columns))
                        for term in search.query_terms
                    )
                )
            )

        for name, order in search.sort:
            col = _column(model, name)
            stmt = stmt.order_by(col.desc() if order is SortOrder.DESC else col.asc())

        return stmt

    def find(self, entity: EntityDescriptor, entity_id: str) -> Any | None:
        model = _mapped_model(entity)
        pk = _column(model, entity.primary_key)
        try:
            key = pk.type.python_type(entity_id)
        except (TypeError, ValueError, NotImplementedError):
            return None
        with Session(self.engine, expire_on_commit=False) as session:
            return session.scalars(select(model).where(pk == key)).first()


class SqlAlchemyEntityPaginator:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def paginate(self, query: Select[Any], page_number: int = 1, page_size: int = 20) -> Page:
        page_number, offset = resolve_page_window(page_number, page_size)
        count_stmt = select(func.count()).select_from(query.order_by(None).subquery())
        with Session(self.engine, expire_on_commit=False) as session:
            total = session.scalar(count_stmt) or 0
            items = tuple(session.scalars(query.limit(page_size).offset(offset)).all())
        logger.debug("Fetched %d of %d row(s) at offset %d", len(items), total, offset)
        return Page(items=items, total_count=total, page_size=page_size, current_page=page_number)
