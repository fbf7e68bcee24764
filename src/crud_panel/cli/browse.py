"""Render CRUD pages in the terminal."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from crud_panel.cli.loader import load_site
from crud_panel.core.context import CrudRequest
from crud_panel.core.errors import CrudPanelError
from crud_panel.core.menu import menu_item_url
from crud_panel.core.records import field_value
from crud_panel.core.rendering import RenderedTemplate, TemplateResultRenderer
from crud_panel.core.security import RoleAuthorizationChecker
from crud_panel.models import DETAIL_PAGE, INDEX_PAGE, Field

browse_app = typer.Typer(help="Browse CRUD pages from the terminal.")
console = Console()

RoleOption = Annotated[list[str] | None, typer.Option("--role", help="Role granted to the actor (repeatable).")]


def _run(site_ref: str, controller: str, action: str, query: dict[str, str], roles: list[str] | None) -> Any:
    site = load_site(site_ref)
    try:
        return site.handle(
            controller,
            action,
            CrudRequest(query=query),
            renderer=TemplateResultRenderer(),
            authorization_checker=RoleAuthorizationChecker(roles or ()),
        )
    except CrudPanelError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc


def _render_records(fields: Sequence[Field], records: Sequence[Any]) -> Table:
    table = Table(show_lines=False)
    for f in fields:
        table.add_column(f.display_label)
    for record in records:
        table.add_row(*(str(field_value(record, f.name)) for f in fields))
    return table


@browse_app.command("index")
def index(
    site: Annotated[str, typer.Argument(help="CrudSite reference as 'module:attribute'.")],
    controller: Annotated[str, typer.Argument(help="Registered controller name.")],
    page: Annotated[int, typer.Option(help="1-based page number.")] = 1,
    query: Annotated[str | None, typer.Option(help="Free-text search.")] = None,
    role: RoleOption = None,
) -> None:
    """List one page of records."""
    params = {"action": INDEX_PAGE, "controller": controller, "page": str(page)}
    if query:
        params["query"] = query
    result = _run(site, controller, INDEX_PAGE, params, role)
    if not isinstance(result, RenderedTemplate):
        console.print("[yellow]Action was answered by a listener.[/yellow]")
        return
    paginator = result.parameters["paginator"]
    console.print(_render_records(result.parameters["fields"], paginator.items))
    console.print(f"(page {paginator.current_page} of {paginator.page_count}, {paginator.total_count} results)")


@browse_app.command("detail")
def detail(
    site: Annotated[str, typer.Argument(help="CrudSite reference as 'module:attribute'.")],
    controller: Annotated[str, typer.Argument(help="Registered controller name.")],
    entity_id: Annotated[str, typer.Argument(help="Primary key of the record.")],
    role: RoleOption = None,
) -> None:
    """Show a single record."""
    params = {"action": DETAIL_PAGE, "controller": controller, "entityId": entity_id}
    result = _run(site, controller, DETAIL_PAGE, params, role)
    if not isinstance(result, RenderedTemplate):
        console.print("[yellow]Action was answered by a listener.[/yellow]")
        return
    table = Table(show_header=False)
    table.add_column("field")
    table.add_column("value")
    entity = result.parameters["entity"]
    for f in result.parameters["fields"]:
        table.add_row(f.display_label, str(field_value(entity, f.name)))
    console.print(table)


@browse_app.command("menu")
def menu(
    site: Annotated[str, typer.Argument(help="CrudSite reference as 'module:attribute'.")],
    role: RoleOption = None,
) -> None:
    """Print the menu visible to the actor."""
    crud_site = load_site(site)
    tree = Tree(crud_site.title)
    for item in crud_site.build_menu(RoleAuthorizationChecker(role or ())):
        url = menu_item_url(item, crud_site.url_generator)
        label = f"[bold]{item.label}[/bold]" if item.is_menu_section() else item.label
        branch = tree.add(f"{item.index}. {label}" + (f"  [dim]{url}[/dim]" if url else ""))
        for child in item.sub_items:
            child_url = menu_item_url(child, crud_site.url_generator)
            suffix = f"  [dim]{child_url}[/dim]" if child_url else ""
            branch.add(f"{child.index}.{child.sub_index} {child.label}{suffix}")
    console.print(tree)
