"""Template renderers producing Starlette responses."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from fastapi.encoders import jsonable_encoder
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, select_autoescape
from starlette.responses import HTMLResponse, JSONResponse

from crud_panel.core.context import ApplicationContext
from crud_panel.core.forms import FormView
from crud_panel.core.pagination import Page
from crud_panel.core.ports.rendering import UrlGenerator
from crud_panel.core.records import field_value
from crud_panel.models import SERVED_ACTIONS, Field

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class Jinja2TemplateRenderer:
    def __init__(
        self,
        url_generator: UrlGenerator,
        template_dirs: Iterable[str | Path] = (),
        title: str = "Admin",
    ) -> None:
        loaders = [FileSystemLoader(str(d)) for d in template_dirs]
        loaders.append(FileSystemLoader(str(TEMPLATES_DIR)))
        self.env = Environment(loader=ChoiceLoader(loaders), autoescape=select_autoescape())
        self.env.globals.update(
            field_value=field_value,
            url=lambda route, **params: url_generator.generate(route, params),
            title=title,
            served_actions=SERVED_ACTIONS,
        )

    def render(self, template_id: str, parameters: Mapping[str, Any]) -> HTMLResponse:
        template = self.env.get_template(template_id)
        return HTMLResponse(template.render(**parameters))


def _encode_record(record: Any, fields: Sequence[Field]) -> dict[str, Any]:
    return {f.name: jsonable_encoder(field_value(record, f.name)) for f in fields}


def _encode_context(context: ApplicationContext) -> dict[str, Any]:
    return {
        "controller": context.controller,
        "action": context.action,
        "entity": context.crud.entity.name if context.crud and context.crud.entity else None,
        "label": context.crud.label if context.crud else None,
    }


def encode_parameters(parameters: Mapping[str, Any]) -> dict[str, Any]:
    """Turn template parameters into JSON-compatible data.

    Records are projected onto the visible ``fields`` so that hidden
    attributes never leave the server.
    """
    fields: Sequence[Field] = [f for f in parameters.get("fields", ()) if isinstance(f, Field)]
    encoded: dict[str, Any] = {}
    for key, value in parameters.items():
        if isinstance(value, Page):
            encoded[key] = {
                "items": [_encode_record(r, fields) for r in value.items],
                "total_count": value.total_count,
                "page_size": value.page_size,
                "current_page": value.current_page,
                "page_count": value.page_count,
            }
        elif isinstance(value, FormView):
            encoded[key] = value.as_dict()
        elif isinstance(value, ApplicationContext):
            encoded[key] = _encode_context(value)
        elif key == "entity":
            encoded[key] = _encode_record(value, fields)
        else:
            encoded[key] = jsonable_encoder(value)
    return encoded


class JsonTemplateRenderer:
    def render(self, template_id: str, parameters: Mapping[str, Any]) -> JSONResponse:
        return JSONResponse({"template": template_id, "parameters": encode_parameters(parameters)})
