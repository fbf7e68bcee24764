"""Declarative configuration returned by a controller's ``configure_*`` hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from crud_panel.core.search import SortOrder
from crud_panel.models import DETAIL_PAGE, INDEX_PAGE, Action

TRANSLATION_DOMAIN = "CrudPanel"

DEFAULT_TEMPLATES: dict[str, str] = {
    INDEX_PAGE: "crud/index.html",
    DETAIL_PAGE: "crud/detail.html",
}


@dataclass(frozen=True)
class EntityDescriptor:
    """Metadata for the entity type a controller manages.

    ``model`` is adapter specific: a mapped class for the SQLAlchemy adapter,
    unused by the in-memory adapter, which keys records by ``name``.
    """

    name: str
    primary_key: str = "id"
    model: Any = None


@dataclass(frozen=True)
class CrudConfig:
    entity: EntityDescriptor | None
    entity_label: str | None = None
    templates: dict[str, str] = field(default_factory=dict)

    @property
    def label(self) -> str:
        if self.entity_label:
            return self.entity_label
        return self.entity.name if self.entity else ""

    def template(self, page: str) -> str | None:
        return self.templates.get(page, DEFAULT_TEMPLATES.get(page))


@dataclass(frozen=True)
class IndexPageConfig:
    max_results: int = 20
    search_fields: tuple[str, ...] | None = None
    default_sort: dict[str, SortOrder] = field(default_factory=dict)


@dataclass(frozen=True)
class DetailPageConfig:
    actions: tuple[Action, ...] = ()

    def add_action(self, action: Action) -> DetailPageConfig:
        return DetailPageConfig(actions=(*self.actions, action))


@dataclass(frozen=True)
class AssetConfig:
    css: tuple[str, ...] = ()
    js: tuple[str, ...] = ()


def default_detail_actions() -> tuple[Action, ...]:
    return (
        Action(
            name="index",
            label="action.list",
            linked_method="index",
            css_class="btn btn-link pr-0",
            translation_domain=TRANSLATION_DOMAIN,
        ),
        Action(
            name="delete",
            label="action.delete",
            icon="trash-o",
            linked_method="delete",
            css_class="btn text-danger",
            translation_domain=TRANSLATION_DOMAIN,
        ),
        Action(
            name="edit",
            label="action.edit",
            linked_method="form",
            css_class="btn btn-primary",
            translation_domain=TRANSLATION_DOMAIN,
        ),
    )
