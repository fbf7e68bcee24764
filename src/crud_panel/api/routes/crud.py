from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from crud_panel.api.dependencies import get_authorization_checker, get_renderer, get_site
from crud_panel.api.schemas import MenuItemSchema, MenuResponse
from crud_panel.core.context import CrudRequest
from crud_panel.core.errors import ConfigurationError, EntityNotFoundError, InvalidRequestError
from crud_panel.core.menu import menu_item_url
from crud_panel.core.ports.rendering import TemplateRenderer, UrlGenerator
from crud_panel.core.ports.security import AuthorizationChecker
from crud_panel.core.site import CrudSite, UnknownControllerError
from crud_panel.models import INDEX_PAGE, MenuItem

logger = logging.getLogger(__name__)


def _menu_schema(item: MenuItem, url_generator: UrlGenerator) -> MenuItemSchema:
    return MenuItemSchema(
        type=item.type.value,
        label=item.label,
        index=item.index,
        sub_index=item.sub_index,
        url=menu_item_url(item, url_generator),
        icon=item.icon,
        css_class=item.css_class,
        link_rel=item.link_rel,
        link_target=item.link_target,
        translation_domain=item.translation_domain,
        translation_parameters=item.translation_parameters,
        is_section=item.is_menu_section(),
        sub_items=[_menu_schema(child, url_generator) for child in item.sub_items],
    )


def create_crud_router(prefix: str) -> APIRouter:
    router_prefix = "" if prefix == "/" else prefix
    router = APIRouter(prefix=router_prefix, tags=["crud"])

    @router.get("/menu", response_model=MenuResponse)
    def menu(
        site: CrudSite = Depends(get_site),
        checker: AuthorizationChecker = Depends(get_authorization_checker),
    ) -> MenuResponse:
        """Menu entries visible to the current actor, with their ordinals."""
        items = site.build_menu(checker)
        return MenuResponse(title=site.title, items=[_menu_schema(i, site.url_generator) for i in items])

    # an empty prefix needs a non-empty path
    @router.get("" if router_prefix else "/")
    def dispatch(
        request: Request,
        controller: str = Query(...),
        action: str = Query(INDEX_PAGE),
        site: CrudSite = Depends(get_site),
        renderer: TemplateRenderer = Depends(get_renderer),
        checker: AuthorizationChecker = Depends(get_authorization_checker),
    ) -> Any:
        """Run a CRUD action; ``controller`` and ``action`` select the handler."""
        crud_request = CrudRequest(
            query=dict(request.query_params),
            method=request.method,
            path=request.url.path,
        )
        try:
            return site.handle(
                controller,
                action,
                crud_request,
                renderer=renderer,
                authorization_checker=checker,
                user=getattr(request.state, "user", None),
            )
        except UnknownControllerError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except EntityNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except InvalidRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ConfigurationError as exc:
            logger.error("Configuration error in %s.%s: %s", controller, action, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return router
