"""Local server CLI command."""

import typer
from rich.panel import Panel

from src.catalog_admin.runtime.config.config_template import (
    load_env_files,
    validate_config_env_vars,
)

from .utils import console


def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Run the admin API with uvicorn.

    Configuration is read from config.yaml; the server refuses to start if
    Supabase credentials or ADMIN_EMAILS are missing.
    """
    load_env_files()
    missing = validate_config_env_vars()
    if missing:
        console.print("[red]❌ Missing required environment variables:[/red]")
        for name, description in missing.items():
            console.print(f"  • [bold]{name}[/bold]: {description}")
        raise typer.Exit(code=1)

    import uvicorn

    console.print(
        Panel.fit("[bold green]Starting Catalog Admin API[/bold green]", border_style="green")
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.catalog_admin.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        log_level=log_level,
        access_log=False,
    )
