from crud_panel.db.engine import get_engine
from crud_panel.db.memory import InMemoryEntityPaginator, InMemoryEntityRepository, InMemoryQuery
from crud_panel.db.sql import SqlAlchemyEntityPaginator, SqlAlchemyEntityRepository

__all__ = [
    "InMemoryEntityPaginator",
    "InMemoryEntityRepository",
    "InMemoryQuery",
    "SqlAlchemyEntityPaginator",
    "SqlAlchemyEntityRepository",
    "get_engine",
]
