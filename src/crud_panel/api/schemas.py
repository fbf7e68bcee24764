from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"


class MenuItemSchema(BaseModel):
    type: str
    label: str
    index: int | None = None
    sub_index: int | None = None
    url: str | None = None
    icon: str | None = None
    css_class: str | None = None
    link_rel: str = ""
    link_target: str = "_self"
    translation_domain: str | None = None
    translation_parameters: dict[str, Any] = {}
    is_section: bool = False
    sub_items: list[MenuItemSchema] = []


class MenuResponse(BaseModel):
    title: str
    items: list[MenuItemSchema]
