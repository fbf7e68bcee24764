from importlib import import_module

import typer

from crud_panel.core.site import CrudSite


def load_site(target: str) -> CrudSite:
    """Import a ``module:attribute`` reference to a :class:`CrudSite`.

    The attribute may also be a zero-argument factory returning the site.
    """
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise typer.BadParameter(f"Expected 'module:attribute', got {target!r}")
    obj = getattr(import_module(module_name), attr)
    site = obj() if callable(obj) and not isinstance(obj, CrudSite) else obj
    if not isinstance(site, CrudSite):
        raise typer.BadParameter(f"{target!r} does not resolve to a CrudSite")
    return site
