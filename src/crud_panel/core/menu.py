"""Menu building: permission filtering and positional ordinals."""

from __future__ import annotations

from collections.abc import Iterable

from crud_panel.core.fields import filter_visible_fields
from crud_panel.core.ports.rendering import UrlGenerator
from crud_panel.core.ports.security import AuthorizationChecker
from crud_panel.models import MenuItem, MenuItemType


def build_menu(items: Iterable[MenuItem], checker: AuthorizationChecker) -> list[MenuItem]:
    """Return the granted items with ``index``/``sub_index`` assigned.

    Children of a submenu are filtered with the same checker. A submenu whose
    children were all filtered out is kept; ``has_sub_items()`` reports it as
    empty.
    """
    menu: list[MenuItem] = []
    for index, item in enumerate(filter_visible_fields(items, checker.is_granted)):
        children = tuple(
            child.with_index(index, sub_index)
            for sub_index, child in enumerate(filter_visible_fields(item.sub_items, checker.is_granted))
        )
        menu.append(item.model_copy(update={"sub_items": children}).with_index(index))
    return menu


def menu_item_url(item: MenuItem, url_generator: UrlGenerator) -> str | None:
    if item.type is MenuItemType.ROUTE:
        assert item.route_name is not None
        return url_generator.generate(item.route_name, item.route_parameters)
    if item.type is MenuItemType.URL:
        return item.link_url
    return None
