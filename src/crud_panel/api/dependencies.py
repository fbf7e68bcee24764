from __future__ import annotations

from fastapi import Request

from crud_panel.core.ports.rendering import TemplateRenderer
from crud_panel.core.ports.security import AuthorizationChecker
from crud_panel.core.site import CrudSite


def get_site(request: Request) -> CrudSite:
    site: CrudSite = request.app.state.crud_site
    return site


def get_renderer(request: Request) -> TemplateRenderer:
    renderer: TemplateRenderer = request.app.state.renderer
    return renderer


def get_authorization_checker(request: Request) -> AuthorizationChecker:
    """Resolve the checker for the current actor via the app's authorization hook."""
    checker: AuthorizationChecker = request.app.state.authorization(request)
    return checker
