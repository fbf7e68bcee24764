import typer

from crud_panel.cli.browse import browse_app
from crud_panel.cli.serve import serve_app

app = typer.Typer(
    name="crud-panel",
    help="crud-panel CLI: serve and browse CRUD admin pages.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(browse_app, name="browse")
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
