"""Main CLI application module."""

import typer

from .server_commands import serve
from .stress_commands import stress_app

app = typer.Typer(
    help="🛒 Catalog Admin CLI - stress tests and local server",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(stress_app, name="stress")
app.command("serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
