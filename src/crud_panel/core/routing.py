from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from crud_panel.core.errors import ConfigurationError


class RouteTableUrlGenerator:
    """Resolve route names against a fixed name -> path table."""

    def __init__(self, routes: Mapping[str, str]) -> None:
        self.routes = dict(routes)

    def generate(self, route_name: str, parameters: Mapping[str, Any] | None = None) -> str:
        try:
            path = self.routes[route_name]
        except KeyError as exc:
            raise ConfigurationError(f"Unknown route {route_name!r}") from exc
        query = {k: v for k, v in (parameters or {}).items() if v is not None}
        if not query:
            return path
        return f"{path}?{urlencode(query)}"
