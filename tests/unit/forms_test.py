"""Tests for URL generation and the default form factory."""

from __future__ import annotations

import pytest

from crud_panel.core.errors import ConfigurationError
from crud_panel.core.forms import DELETE_FLAG_FIELD, ENTITY_ID_PATTERN, DefaultFormFactory
from crud_panel.core.routing import RouteTableUrlGenerator


@pytest.fixture
def factory() -> DefaultFormFactory:
    return DefaultFormFactory(RouteTableUrlGenerator({"crud_panel": "/admin"}))


class TestRouteTableUrlGenerator:
    def test_path_without_parameters(self) -> None:
        assert RouteTableUrlGenerator({"home": "/"}).generate("home") == "/"

    def test_parameters_become_query_string(self) -> None:
        url = RouteTableUrlGenerator({"crud_panel": "/admin"}).generate("crud_panel", {"a": 1, "b": "x y"})
        assert url == "/admin?a=1&b=x+y"

    def test_none_parameters_are_dropped(self) -> None:
        url = RouteTableUrlGenerator({"crud_panel": "/admin"}).generate("crud_panel", {"page": None})
        assert url == "/admin"

    def test_unknown_route_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            RouteTableUrlGenerator({}).generate("missing")


class TestDeleteForm:
    def test_posts_delete_to_entity_url(self, factory: DefaultFormFactory) -> None:
        form = factory.create_delete_form("products", 42)
        assert form.name == "delete_form"
        assert form.method == "DELETE"
        assert form.action == "/admin?action=delete&controller=products&id=42"

    def test_carries_submit_and_flag(self, factory: DefaultFormFactory) -> None:
        form = factory.create_delete_form("products", 1)
        submit = form.field("submit")
        flag = form.field(DELETE_FLAG_FIELD)
        assert submit is not None and submit.label == "delete_modal.action"
        assert flag is not None and flag.value == "1"

    def test_pattern_id_for_reusable_template(self, factory: DefaultFormFactory) -> None:
        form = factory.create_delete_form("products", ENTITY_ID_PATTERN)
        assert form.action.endswith("id=__id__")

    def test_as_dict(self, factory: DefaultFormFactory) -> None:
        data = factory.create_delete_form("products", 1).as_dict()
        assert data["method"] == "DELETE"
        assert [f["name"] for f in data["fields"]] == ["submit", DELETE_FLAG_FIELD]


class TestBatchForm:
    def test_bound_to_entity_name(self, factory: DefaultFormFactory) -> None:
        form = factory.create_batch_form("products", "Product")
        assert form.name == "batch_form"
        assert form.method == "POST"
        assert form.action == "/admin?action=batch&controller=products&entity=Product"
        assert form.field("entity").value == "Product"  # type: ignore[union-attr]
