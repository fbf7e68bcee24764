from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from crud_panel.core.config import AssetConfig, CrudConfig, DetailPageConfig, EntityDescriptor, IndexPageConfig
from crud_panel.core.errors import ConfigurationError
from crud_panel.models import DETAIL_PAGE, INDEX_PAGE


@dataclass(frozen=True)
class CrudRequest:
    """Framework-neutral view of the inbound request."""

    query: Mapping[str, str] = field(default_factory=dict)
    method: str = "GET"
    path: str = "/"


@dataclass(frozen=True)
class ApplicationContext:
    """Everything an action needs to know about the current request."""

    request: CrudRequest
    controller: str
    crud: CrudConfig | None
    index_page: IndexPageConfig | None = None
    detail_page: DetailPageConfig | None = None
    assets: AssetConfig = field(default_factory=AssetConfig)
    user: Any = None
    action: str = ""

    @property
    def entity(self) -> EntityDescriptor:
        if self.crud is None or self.crud.entity is None:
            raise ConfigurationError(f"Controller {self.controller!r} does not declare an entity")
        return self.crud.entity

    def get_page(self, page: str) -> IndexPageConfig | DetailPageConfig:
        config: IndexPageConfig | DetailPageConfig | None
        if page == INDEX_PAGE:
            config = self.index_page
        elif page == DETAIL_PAGE:
            config = self.detail_page
        else:
            config = None
        if config is None:
            raise ConfigurationError(f"Controller {self.controller!r} has no configuration for page {page!r}")
        return config

    def get_template(self, page: str) -> str:
        template = self.crud.template(page) if self.crud is not None else None
        if not template:
            raise ConfigurationError(f"No template configured for page {page!r}")
        return template


class RequestContextProvider:
    """Holds the context of the request currently being served."""

    def __init__(self, context: ApplicationContext | None = None) -> None:
        self._context = context

    def set_context(self, context: ApplicationContext) -> None:
        self._context = context

    def get_context(self) -> ApplicationContext | None:
        return self._context
