from typing import Annotated

import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    site: Annotated[str, typer.Option(help="CrudSite reference as 'module:attribute'.")],
    renderer: Annotated[str, typer.Option(help="Response format: html or json.")] = "html",
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the admin panel HTTP server."""
    import uvicorn

    from crud_panel.api.app import create_app
    from crud_panel.api.rendering import JsonTemplateRenderer
    from crud_panel.cli.loader import load_site

    if renderer not in ("html", "json"):
        raise typer.BadParameter("renderer must be 'html' or 'json'")

    crud_site = load_site(site)
    app = create_app(crud_site, renderer=JsonTemplateRenderer() if renderer == "json" else None)
    console.print(f"[green]Starting admin panel on {host}:{port}{crud_site.prefix}[/green]")
    uvicorn.run(app, host=host, port=port)
