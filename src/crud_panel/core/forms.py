"""Delete and batch form descriptors handed to templates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from crud_panel.core.config import TRANSLATION_DOMAIN

if TYPE_CHECKING:
    from crud_panel.core.ports.rendering import UrlGenerator

CRUD_ROUTE = "crud_panel"
DELETE_FLAG_FIELD = "_crud_panel_delete_flag"
ENTITY_ID_PATTERN = "__id__"


@dataclass(frozen=True)
class FormFieldView:
    name: str
    type: str
    label: str | None = None
    value: Any = None
    translation_domain: str | None = None


@dataclass(frozen=True)
class FormView:
    name: str
    action: str
    method: str
    fields: tuple[FormFieldView, ...] = ()

    def field(self, name: str) -> FormFieldView | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "action": self.action,
            "method": self.method,
            "fields": [vars(f).copy() for f in self.fields],
        }


class DefaultFormFactory:
    def __init__(self, url_generator: UrlGenerator, route_name: str = CRUD_ROUTE) -> None:
        self.url_generator = url_generator
        self.route_name = route_name

    def _url(self, parameters: Mapping[str, Any]) -> str:
        return self.url_generator.generate(self.route_name, parameters)

    def create_delete_form(self, controller: str, entity_id: str | int) -> FormView:
        """Build the form that deletes one entity.

        Deletion always goes through the ``DELETE`` method, which browsers can
        only send from a form. When one form is reused for many rows, pass
        :data:`ENTITY_ID_PATTERN` and substitute it client side.
        """
        return FormView(
            name="delete_form",
            action=self._url({"action": "delete", "controller": controller, "id": entity_id}),
            method="DELETE",
            fields=(
                FormFieldView(
                    name="submit",
                    type="submit",
                    label="delete_modal.action",
                    translation_domain=TRANSLATION_DOMAIN,
                ),
                # keeps empty delete forms from being submitted
                FormFieldView(name=DELETE_FLAG_FIELD, type="hidden", value="1"),
            ),
        )

    def create_batch_form(self, controller: str, entity_name: str) -> FormView:
        return FormView(
            name="batch_form",
            action=self._url({"action": "batch", "controller": controller, "entity": entity_name}),
            method="POST",
            fields=(
                FormFieldView(name="entity", type="hidden", value=entity_name),
                FormFieldView(name="batch_action", type="hidden"),
                FormFieldView(name="ids", type="hidden"),
            ),
        )
