from crud_panel.core.config import EntityDescriptor
from crud_panel.core.search import SortOrder, build_search_request
from crud_panel.db import InMemoryEntityRepository
from crud_panel.models import Field

USER = EntityDescriptor(name="User")
FIELDS = [Field(name="id"), Field(name="name"), Field(name="city"), Field(name="age")]


class _Row:
    def __init__(self, id: int, name: str, city: str, age: int | None) -> None:
        self.id = id
        self.name = name
        self.city = city
        self.age = age


def _repository() -> InMemoryEntityRepository:
    repository = InMemoryEntityRepository()
    repository.add("User", {"id": 1, "name": "Ada Lovelace", "city": "London", "age": 36})
    repository.add("User", {"id": 2, "name": "Alan Turing", "city": "London", "age": 41})
    repository.add("User", {"id": 3, "name": "Grace Hopper", "city": "New York", "age": 85})
    repository.add("User", _Row(4, "Linus Torvalds", "Helsinki", None))
    return repository


def test_no_search_returns_everything_in_insertion_order() -> None:
    query = _repository().build_query(build_search_request({}, {}, FIELDS), USER)
    assert [r["id"] if isinstance(r, dict) else r.id for r in query.records] == [1, 2, 3, 4]


def test_search_is_case_insensitive_substring() -> None:
    query = _repository().build_query(build_search_request({"query": "LONDON"}, {}, FIELDS, ["city"]), USER)
    assert [r["id"] for r in query.records] == [1, 2]


def test_every_term_must_match_some_field() -> None:
    search = build_search_request({"query": "london alan"}, {}, FIELDS, ["name", "city"])
    query = _repository().build_query(search, USER)
    assert [r["id"] for r in query.records] == [2]


def test_search_reads_attribute_records() -> None:
    search = build_search_request({"query": "helsinki"}, {}, FIELDS, ["city"])
    query = _repository().build_query(search, USER)
    assert [r.id for r in query.records] == [4]


def test_multi_key_sort() -> None:
    search = build_search_request({"sort[city]": "ASC"}, {"age": SortOrder.DESC}, FIELDS)
    query = _repository().build_query(search, USER)
    ids = [r["id"] if isinstance(r, dict) else r.id for r in query.records]
    assert ids == [4, 2, 1, 3]


def test_none_values_sort_first() -> None:
    search = build_search_request({"sort[age]": "ASC"}, {}, FIELDS)
    query = _repository().build_query(search, USER)
    first = query.records[0]
    assert not isinstance(first, dict) and first.id == 4


def test_unknown_entity_yields_empty_query() -> None:
    query = _repository().build_query(build_search_request({}, {}, FIELDS), EntityDescriptor(name="Order"))
    assert query.records == ()


def test_find_by_primary_key_string() -> None:
    repository = _repository()
    assert repository.find(USER, "3")["name"] == "Grace Hopper"
    assert repository.find(USER, "4").name == "Linus Torvalds"
    assert repository.find(USER, "99") is None


def test_find_with_custom_primary_key() -> None:
    repository = InMemoryEntityRepository({"Country": [{"code": "FI", "name": "Finland"}]})
    assert repository.find(EntityDescriptor(name="Country", primary_key="code"), "FI")["name"] == "Finland"
