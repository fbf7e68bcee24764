from collections.abc import Mapping
from typing import Any, Protocol

from crud_panel.core.forms import FormView


class TemplateRenderer(Protocol):
    def render(self, template_id: str, parameters: Mapping[str, Any]) -> Any: ...


class UrlGenerator(Protocol):
    def generate(self, route_name: str, parameters: Mapping[str, Any] | None = None) -> str: ...


class FormFactory(Protocol):
    def create_delete_form(self, controller: str, entity_id: str | int) -> FormView: ...

    def create_batch_form(self, controller: str, entity_name: str) -> FormView: ...
