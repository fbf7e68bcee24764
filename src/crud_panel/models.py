from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

INDEX_PAGE = "index"
DETAIL_PAGE = "detail"
EDIT_PAGE = "edit"
NEW_PAGE = "new"

# actions dispatched by CrudSite.handle
SERVED_ACTIONS = (INDEX_PAGE, DETAIL_PAGE)


class Field(BaseModel):
    """A named display unit declared once per entity type."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str | None = None
    field_type: str = "text"
    permission: str | None = None
    pages: frozenset[str] = frozenset({INDEX_PAGE, DETAIL_PAGE})
    sortable: bool = True

    @property
    def display_label(self) -> str:
        return self.label or self.name.replace("_", " ").title()

    def displays_on(self, page: str) -> bool:
        return page in self.pages


class Action(BaseModel):
    """A page-level action button (e.g. back-to-list, edit, delete)."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    icon: str | None = None
    linked_method: str | None = None
    css_class: str = ""
    permission: str | None = None
    translation_domain: str | None = None


class MenuItemType(str, Enum):
    ROUTE = "route"
    URL = "url"
    SECTION = "section"
    SUBMENU = "submenu"


class MenuItem(BaseModel):
    """Immutable description of one navigation entry.

    ``index`` and ``sub_index`` are positional ordinals assigned by the menu
    builder through :meth:`with_index`; everything else is fixed at
    construction.
    """

    model_config = ConfigDict(frozen=True)

    type: MenuItemType
    label: str
    icon: str | None = None
    css_class: str | None = None
    permission: str | None = None
    route_name: str | None = None
    route_parameters: dict[str, Any] | None = None
    link_url: str | None = None
    link_rel: str = ""
    link_target: str = "_self"
    translation_domain: str | None = None
    translation_parameters: dict[str, Any] = {}
    sub_items: tuple[MenuItem, ...] = ()
    index: int | None = None
    sub_index: int | None = None

    @model_validator(mode="after")
    def _check_link_target(self) -> MenuItem:
        if self.type is MenuItemType.ROUTE and not self.route_name:
            raise ValueError("route menu items require a route_name")
        if self.type is MenuItemType.URL and not self.link_url:
            raise ValueError("url menu items require a link_url")
        return self

    @classmethod
    def link_to_route(
        cls, label: str, route_name: str, route_parameters: dict[str, Any] | None = None, **kwargs: Any
    ) -> MenuItem:
        return cls(
            type=MenuItemType.ROUTE,
            label=label,
            route_name=route_name,
            route_parameters=route_parameters or {},
            **kwargs,
        )

    @classmethod
    def link_to_crud(cls, label: str, controller: str, route_name: str = "crud_panel", **kwargs: Any) -> MenuItem:
        return cls.link_to_route(label, route_name, {"controller": controller, "action": INDEX_PAGE}, **kwargs)

    @classmethod
    def link_to_url(cls, label: str, url: str, **kwargs: Any) -> MenuItem:
        return cls(type=MenuItemType.URL, label=label, link_url=url, **kwargs)

    @classmethod
    def section(cls, label: str = "", **kwargs: Any) -> MenuItem:
        return cls(type=MenuItemType.SECTION, label=label, **kwargs)

    @classmethod
    def submenu(cls, label: str, sub_items: list[MenuItem] | tuple[MenuItem, ...] = (), **kwargs: Any) -> MenuItem:
        return cls(type=MenuItemType.SUBMENU, label=label, sub_items=tuple(sub_items), **kwargs)

    def with_index(self, index: int, sub_index: int | None = None) -> MenuItem:
        return self.model_copy(update={"index": index, "sub_index": sub_index})

    def has_sub_items(self) -> bool:
        return self.type is MenuItemType.SUBMENU and len(self.sub_items) > 0

    def is_menu_section(self) -> bool:
        return self.type is MenuItemType.SECTION


MenuItem.model_rebuild()  # necessary for recursive types
