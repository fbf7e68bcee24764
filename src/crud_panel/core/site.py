"""Registry tying controllers to their shared collaborators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from crud_panel.core.context import ApplicationContext, CrudRequest, RequestContextProvider
from crud_panel.core.controller import AbstractCrudController
from crud_panel.core.errors import ConfigurationError, InvalidRequestError
from crud_panel.core.events import EventDispatcher
from crud_panel.core.forms import CRUD_ROUTE, DefaultFormFactory
from crud_panel.core.menu import build_menu
from crud_panel.core.ports.rendering import FormFactory, TemplateRenderer, UrlGenerator
from crud_panel.core.ports.repository import EntityPaginator, EntityRepository
from crud_panel.core.ports.security import AuthorizationChecker
from crud_panel.core.routing import RouteTableUrlGenerator
from crud_panel.core.security import RoleAuthorizationChecker
from crud_panel.models import DETAIL_PAGE, SERVED_ACTIONS, MenuItem

logger = logging.getLogger(__name__)

ControllerFactory = Callable[..., AbstractCrudController]


class UnknownControllerError(ConfigurationError):
    """Raised when a request names a controller that was never registered."""


class CrudSite:
    def __init__(
        self,
        *,
        repository: EntityRepository,
        paginator: EntityPaginator,
        prefix: str = "/admin",
        title: str = "Admin",
        dispatcher: EventDispatcher | None = None,
        url_generator: UrlGenerator | None = None,
        form_factory: FormFactory | None = None,
        menu: Iterable[MenuItem] = (),
    ) -> None:
        self.repository = repository
        self.paginator = paginator
        self.prefix = prefix.rstrip("/") or "/"
        self.title = title
        self.dispatcher = dispatcher or EventDispatcher()
        self.url_generator = url_generator or RouteTableUrlGenerator({CRUD_ROUTE: self.prefix})
        self.form_factory = form_factory or DefaultFormFactory(self.url_generator)
        self.menu = list(menu)
        self._controllers: dict[str, ControllerFactory] = {}

    def register(self, name: str, controller: ControllerFactory) -> None:
        if name in self._controllers:
            raise ConfigurationError(f"Controller {name!r} is already registered")
        self._controllers[name] = controller
        logger.info("Registered CRUD controller %s", name)

    @property
    def controller_names(self) -> list[str]:
        return list(self._controllers)

    def build_menu(self, checker: AuthorizationChecker) -> list[MenuItem]:
        return build_menu(self.menu, checker)

    def create_controller(
        self,
        name: str,
        *,
        context_provider: RequestContextProvider,
        authorization_checker: AuthorizationChecker,
        renderer: TemplateRenderer,
    ) -> AbstractCrudController:
        try:
            factory = self._controllers[name]
        except KeyError as exc:
            raise UnknownControllerError(f"No CRUD controller registered as {name!r}") from exc
        return factory(
            context_provider=context_provider,
            event_dispatcher=self.dispatcher,
            entity_repository=self.repository,
            entity_paginator=self.paginator,
            authorization_checker=authorization_checker,
            form_factory=self.form_factory,
            renderer=renderer,
        )

    def create_context(
        self,
        name: str,
        action: str,
        controller: AbstractCrudController,
        request: CrudRequest,
        user: Any = None,
    ) -> ApplicationContext:
        return ApplicationContext(
            request=request,
            controller=name,
            crud=controller.configure_crud(),
            index_page=controller.configure_index_page(),
            detail_page=controller.configure_detail_page(),
            assets=controller.configure_assets(),
            user=user,
            action=action,
        )

    def handle(
        self,
        name: str,
        action: str,
        request: CrudRequest,
        *,
        renderer: TemplateRenderer,
        authorization_checker: AuthorizationChecker | None = None,
        user: Any = None,
    ) -> Any:
        """Build a request-scoped controller and run ``action`` on it."""
        if action not in SERVED_ACTIONS:
            raise InvalidRequestError(f"Unsupported action {action!r}")
        provider = RequestContextProvider()
        controller = self.create_controller(
            name,
            context_provider=provider,
            authorization_checker=authorization_checker or RoleAuthorizationChecker(),
            renderer=renderer,
        )
        provider.set_context(self.create_context(name, action, controller, request, user))
        logger.debug("Running %s.%s", name, action)
        if action == DETAIL_PAGE:
            return controller.detail(request)
        return controller.index()
