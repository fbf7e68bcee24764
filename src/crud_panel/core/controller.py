"""Base class for the per-entity CRUD controllers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any

from crud_panel.core.config import (
    AssetConfig,
    CrudConfig,
    DetailPageConfig,
    EntityDescriptor,
    IndexPageConfig,
    default_detail_actions,
)
from crud_panel.core.context import ApplicationContext, CrudRequest
from crud_panel.core.errors import ConfigurationError, EntityNotFoundError, InvalidRequestError
from crud_panel.core.events import EventDispatcher
from crud_panel.core.fields import filter_visible_fields
from crud_panel.core.forms import ENTITY_ID_PATTERN, FormView
from crud_panel.core.pipeline import run_crud_action
from crud_panel.core.ports.context import ContextProvider
from crud_panel.core.ports.rendering import FormFactory, TemplateRenderer
from crud_panel.core.ports.repository import EntityPaginator, EntityRepository
from crud_panel.core.ports.security import AuthorizationChecker
from crud_panel.core.search import SearchRequest, build_search_request, parse_page_number
from crud_panel.models import DETAIL_PAGE, INDEX_PAGE, Field

logger = logging.getLogger(__name__)

ENTITY_ID_PARAM = "entityId"


class AbstractCrudController(ABC):
    def __init__(
        self,
        *,
        context_provider: ContextProvider,
        event_dispatcher: EventDispatcher,
        entity_repository: EntityRepository,
        entity_paginator: EntityPaginator,
        authorization_checker: AuthorizationChecker,
        form_factory: FormFactory,
        renderer: TemplateRenderer,
    ) -> None:
        self.context_provider = context_provider
        self.event_dispatcher = event_dispatcher
        self.entity_repository = entity_repository
        self.entity_paginator = entity_paginator
        self.authorization_checker = authorization_checker
        self.form_factory = form_factory
        self.renderer = renderer

    # ------------------------------------------------------------------
    # Configuration hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def configure_crud(self) -> CrudConfig: ...

    @abstractmethod
    def configure_fields(self, page: str) -> Iterable[Field]:
        """Return every field declared for ``page``, before permission filtering."""

    def configure_assets(self) -> AssetConfig:
        return AssetConfig()

    def configure_index_page(self) -> IndexPageConfig:
        return IndexPageConfig()

    def configure_detail_page(self) -> DetailPageConfig:
        return DetailPageConfig(actions=default_detail_actions())

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def index(self) -> Any:
        context = self.get_context()
        entity = context.entity
        page_config = context.get_page(INDEX_PAGE)
        assert isinstance(page_config, IndexPageConfig)
        if page_config.max_results <= 0:
            raise ConfigurationError(
                f"Index page of {context.controller!r} needs a positive max_results, got {page_config.max_results!r}"
            )
        template = context.get_template(INDEX_PAGE)

        def assemble() -> dict[str, Any]:
            fields = list(self.get_fields(INDEX_PAGE))
            query_params = context.request.query
            search = build_search_request(
                query_params, page_config.default_sort, fields, page_config.search_fields
            )
            query = self.create_index_query(search, entity)
            paginator = self.entity_paginator.paginate(
                query, parse_page_number(query_params), page_config.max_results
            )
            logger.debug(
                "Index of %s: page %d/%d, %d record(s)",
                entity.name,
                paginator.current_page,
                paginator.page_count,
                len(paginator.items),
            )
            return {
                "context": context,
                "paginator": paginator,
                "fields": fields,
                "search": search,
                "batch_form": self.create_batch_form(entity.name),
                "delete_form_template": self.create_delete_form(ENTITY_ID_PATTERN),
            }

        return run_crud_action(
            self.event_dispatcher,
            context,
            assemble,
            lambda parameters: self.renderer.render(template, parameters),
        )

    def detail(self, request: CrudRequest) -> Any:
        context = self.get_context()
        entity = context.entity
        page_config = context.get_page(DETAIL_PAGE)
        assert isinstance(page_config, DetailPageConfig)
        template = context.get_template(DETAIL_PAGE)

        def assemble() -> dict[str, Any]:
            fields = list(self.get_fields(DETAIL_PAGE))
            entity_id = request.query.get(ENTITY_ID_PARAM)
            if not entity_id:
                raise InvalidRequestError(f"Missing {ENTITY_ID_PARAM!r} query parameter")
            record = self.entity_repository.find(entity, entity_id)
            if record is None:
                raise EntityNotFoundError(f"{entity.name} {entity_id!r} not found")
            return {
                "context": context,
                "fields": fields,
                "entity": record,
                "entity_id": entity_id,
                "actions": list(filter_visible_fields(page_config.actions, self.authorization_checker.is_granted)),
                "delete_form": self.create_delete_form(entity_id),
            }

        return run_crud_action(
            self.event_dispatcher,
            context,
            assemble,
            lambda parameters: self.renderer.render(template, parameters),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def create_index_query(self, search: SearchRequest, entity: EntityDescriptor) -> Any:
        return self.entity_repository.build_query(search, entity)

    def get_context(self) -> ApplicationContext:
        context = self.context_provider.get_context()
        if context is None:
            raise ConfigurationError(f"No application context available for {type(self).__name__}")
        return context

    def create_delete_form(self, entity_id: str | int) -> FormView:
        """Form deleting ``entity_id``; pass ``__id__`` for a reusable row template."""
        return self.form_factory.create_delete_form(self.get_context().controller, entity_id)

    def create_batch_form(self, entity_name: str) -> FormView:
        return self.form_factory.create_batch_form(self.get_context().controller, entity_name)

    def get_fields(self, page: str) -> Iterator[Field]:
        """Lazily yield the fields of ``page`` the current actor may view."""
        return filter_visible_fields(self.configure_fields(page), self.authorization_checker.is_granted)
