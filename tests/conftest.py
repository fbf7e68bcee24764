"""Shared fixtures and helpers for tests."""

from collections.abc import Iterable
from pathlib import Path

import pytest

from crud_panel.core.config import CrudConfig, EntityDescriptor, IndexPageConfig
from crud_panel.core.controller import AbstractCrudController
from crud_panel.core.search import SortOrder
from crud_panel.core.site import CrudSite
from crud_panel.db import InMemoryEntityPaginator, InMemoryEntityRepository
from crud_panel.models import DETAIL_PAGE, INDEX_PAGE, Field, MenuItem

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Sample entity: products
# ---------------------------------------------------------------------------

PRODUCT = EntityDescriptor(name="Product")

PRODUCT_FIELDS = [
    Field(name="id", field_type="integer"),
    Field(name="name"),
    Field(name="category"),
    Field(name="price", field_type="decimal"),
    Field(name="cost", field_type="decimal", permission="ROLE_ADMIN"),
    Field(name="description", pages=frozenset({DETAIL_PAGE})),
]


def make_products(count: int = 25) -> list[dict[str, object]]:
    categories = ["books", "games", "tools"]
    return [
        {
            "id": i,
            "name": f"Product {i:02d}",
            "category": categories[i % 3],
            "price": 10 + i,
            "cost": 5 + i,
            "description": f"Description of product {i}",
        }
        for i in range(1, count + 1)
    ]


class ProductCrudController(AbstractCrudController):
    def configure_crud(self) -> CrudConfig:
        return CrudConfig(entity=PRODUCT, entity_label="Products")

    def configure_fields(self, page: str) -> Iterable[Field]:
        return [f for f in PRODUCT_FIELDS if f.displays_on(page)]

    def configure_index_page(self) -> IndexPageConfig:
        return IndexPageConfig(
            max_results=10,
            search_fields=("name", "category"),
            default_sort={"id": SortOrder.ASC},
        )


def make_site(records: list[dict[str, object]] | None = None) -> CrudSite:
    repository = InMemoryEntityRepository({PRODUCT.name: make_products() if records is None else records})
    site = CrudSite(
        repository=repository,
        paginator=InMemoryEntityPaginator(),
        title="Shop admin",
        menu=[
            MenuItem.section("Catalog"),
            MenuItem.link_to_crud("Products", "products", icon="box"),
            MenuItem.submenu(
                "Reports",
                [
                    MenuItem.link_to_url("Sales", "https://example.com/sales"),
                    MenuItem.link_to_url("Margins", "https://example.com/margins", permission="ROLE_ADMIN"),
                ],
            ),
            MenuItem.link_to_url("Settings", "/settings", permission="ROLE_ADMIN"),
        ],
    )
    site.register("products", ProductCrudController)
    return site


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def products() -> list[dict[str, object]]:
    return make_products()


@pytest.fixture
def repository(products: list[dict[str, object]]) -> InMemoryEntityRepository:
    return InMemoryEntityRepository({PRODUCT.name: products})


@pytest.fixture
def paginator() -> InMemoryEntityPaginator:
    return InMemoryEntityPaginator()


@pytest.fixture
def site() -> CrudSite:
    return make_site()


@pytest.fixture
def index_fields() -> list[Field]:
    return [f for f in PRODUCT_FIELDS if f.displays_on(INDEX_PAGE)]
