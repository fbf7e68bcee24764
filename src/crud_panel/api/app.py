from __future__ import annotations

from collections.abc import Callable

from fastapi import FastAPI, Request

from crud_panel.api.rendering import Jinja2TemplateRenderer
from crud_panel.api.routes.crud import create_crud_router
from crud_panel.api.routes.health import router as health_router
from crud_panel.core.ports.rendering import TemplateRenderer
from crud_panel.core.ports.security import AuthorizationChecker
from crud_panel.core.security import RoleAuthorizationChecker
from crud_panel.core.site import CrudSite


def _anonymous(_request: Request) -> AuthorizationChecker:
    return RoleAuthorizationChecker()


def create_app(
    site: CrudSite,
    renderer: TemplateRenderer | None = None,
    authorization: Callable[[Request], AuthorizationChecker] | None = None,
) -> FastAPI:
    """Create the admin application for ``site``.

    ``authorization`` maps a request to the actor's checker; by default the
    actor holds no roles and only unprotected fields are shown.
    """
    app = FastAPI(
        title=site.title,
        description="CRUD admin panel.",
        version="0.1.0",
    )
    app.state.crud_site = site
    app.state.renderer = renderer or Jinja2TemplateRenderer(site.url_generator, title=site.title)
    app.state.authorization = authorization or _anonymous

    app.include_router(health_router, include_in_schema=False)
    app.include_router(create_crud_router(site.prefix))

    return app
