"""Tests for the SQLAlchemy adapter against in-memory SQLite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine, Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column
from sqlalchemy.pool import StaticPool

from crud_panel.core.config import EntityDescriptor
from crud_panel.core.errors import ConfigurationError
from crud_panel.core.search import SearchRequest, SortOrder, build_search_request
from crud_panel.db import SqlAlchemyEntityPaginator, SqlAlchemyEntityRepository, get_engine
from crud_panel.models import Field


class Base(DeclarativeBase):
    pass


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    author: Mapped[str] = mapped_column(String(200))
    year: Mapped[int] = mapped_column(Integer)


BOOK = EntityDescriptor(name="Book", model=Book)
FIELDS = [Field(name="id"), Field(name="title"), Field(name="author"), Field(name="year")]


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(
            [
                Book(id=i, title=f"Volume {i:02d}", author="Knuth" if i % 2 else "Dijkstra", year=1960 + i)
                for i in range(1, 26)
            ]
        )
        session.commit()
    yield engine
    engine.dispose()


def test_paginates_25_rows(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    paginator = SqlAlchemyEntityPaginator(engine)
    query = repository.build_query(build_search_request({}, {"id": SortOrder.ASC}, FIELDS), BOOK)

    first = paginator.paginate(query, 1, 10)
    last = paginator.paginate(query, 3, 10)
    beyond = paginator.paginate(query, 4, 10)

    assert [b.id for b in first.items] == list(range(1, 11))
    assert first.total_count == 25
    assert len(last.items) == 5
    assert beyond.items == ()


def test_zero_page_size_raises(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    query = repository.build_query(build_search_request({}, {}, FIELDS), BOOK)
    with pytest.raises(ConfigurationError):
        SqlAlchemyEntityPaginator(engine).paginate(query, 1, 0)


def test_search_filters_rows(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    search = build_search_request({"query": "dijkstra"}, {}, FIELDS, ["title", "author"])
    page = SqlAlchemyEntityPaginator(engine).paginate(repository.build_query(search, BOOK), 1, 50)
    assert page.total_count == 12
    assert all(b.author == "Dijkstra" for b in page.items)


def test_search_terms_are_combined(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    search = build_search_request({"query": "knuth 07"}, {}, FIELDS, ["title", "author"])
    page = SqlAlchemyEntityPaginator(engine).paginate(repository.build_query(search, BOOK), 1, 50)
    assert [b.id for b in page.items] == [7]


def test_like_wildcards_in_terms_match_literally(engine: Engine) -> None:
    with Session(engine) as session:
        session.add(Book(id=100, title="snake_case", author="Guido", year=1991))
        session.add(Book(id=101, title="100% pure", author="Guido", year=1992))
        session.commit()
    repository = SqlAlchemyEntityRepository(engine)
    paginator = SqlAlchemyEntityPaginator(engine)

    underscore = build_search_request({"query": "_"}, {}, FIELDS, ["title"])
    percent = build_search_request({"query": "%"}, {}, FIELDS, ["title"])

    assert [b.id for b in paginator.paginate(repository.build_query(underscore, BOOK), 1, 50).items] == [100]
    assert [b.id for b in paginator.paginate(repository.build_query(percent, BOOK), 1, 50).items] == [101]


def test_sort_descending(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    search = build_search_request({"sort[year]": "DESC"}, {}, FIELDS)
    page = SqlAlchemyEntityPaginator(engine).paginate(repository.build_query(search, BOOK), 1, 3)
    assert [b.year for b in page.items] == [1985, 1984, 1983]


def test_unknown_search_field_is_a_configuration_error(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    search = SearchRequest(query="x", search_fields=("isbn",), sort=(), fields=tuple(FIELDS))
    with pytest.raises(ConfigurationError):
        repository.build_query(search, BOOK)


def test_entity_without_model_is_a_configuration_error(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    with pytest.raises(ConfigurationError):
        repository.build_query(build_search_request({}, {}, FIELDS), EntityDescriptor(name="Book"))


def test_find(engine: Engine) -> None:
    repository = SqlAlchemyEntityRepository(engine)
    book = repository.find(BOOK, "5")
    assert book is not None and book.title == "Volume 05"
    assert repository.find(BOOK, "500") is None
    assert repository.find(BOOK, "not-a-number") is None


def test_get_engine_reads_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    assert get_engine().url.drivername == "sqlite"
