"""Stress-test CLI commands."""

import asyncio

import httpx
import typer
from rich.panel import Panel

from src.catalog_admin.core.errors import AuthenticationError
from src.catalog_admin.core.services.supabase import (
    AnonClient,
    AuthService,
    DatabaseService,
    ServiceRoleClient,
)
from src.catalog_admin.runtime.settings import EnvironmentVariables
from src.cli.stress import StressRunner, run_api_suite, run_database_suite
from src.cli.utils import configure_cli_logging, console

stress_app = typer.Typer(help="🔥 Stress-test the products table and the admin API")


def _require(missing: list[str]) -> None:
    if missing:
        console.print(
            f"[red]❌ Missing Supabase environment variables: {', '.join(missing)}[/red]"
        )
        raise typer.Exit(code=1)


async def _run_database(settings: EnvironmentVariables, table: str) -> int:
    runner = StressRunner(console)
    async with ServiceRoleClient(
        settings.supabase_url,
        settings.supabase_service_role_key,
        timeout=settings.supabase_timeout_seconds,
    ) as client:
        await run_database_suite(DatabaseService(client), runner, table=table)

    console.print(runner.summary_table("Database stress test"))
    console.print("\n✨ Database stress test completed.")
    return runner.failed_count


async def _sign_in(settings: EnvironmentVariables, email: str, password: str) -> str:
    async with AnonClient(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.supabase_timeout_seconds,
    ) as client:
        session = await AuthService(client).sign_in_with_password(email, password)
    return session.access_token


async def _run_api(
    settings: EnvironmentVariables, api_url: str, email: str, password: str
) -> int:
    try:
        token = await _sign_in(settings, email, password)
    except AuthenticationError as exc:
        console.print(f"[red]❌ Failed to authenticate: {exc.message}[/red]")
        raise typer.Exit(code=1) from exc
    console.print("🔑 Authenticated successfully")

    runner = StressRunner(console)
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
    async with httpx.AsyncClient(
        base_url=api_url.rstrip("/"),
        headers=headers,
        timeout=settings.supabase_timeout_seconds,
    ) as http:
        await run_api_suite(http, runner)

    console.print(runner.summary_table("Admin API stress test"))
    console.print("\n✨ Stress test completed.")
    return runner.failed_count


@stress_app.command("db")
def stress_database(
    table: str | None = typer.Option(
        None, "--table", "-t", help="Products table (defaults to PRODUCTS_TABLE)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show service logs"),
) -> None:
    """
    🗄️  Exercise database constraints directly with the service-role client.

    Checks unique, not-null and type errors, partial updates and five
    parallel updates to the same row. The test row is deleted at the end.
    """
    configure_cli_logging(verbose)
    settings = EnvironmentVariables()
    _require(settings.missing_for_database())

    console.print(
        Panel.fit(
            "[bold]🚀 Starting Database Stress Test (Direct DB Access)...[/bold]",
            border_style="blue",
        )
    )
    failed = asyncio.run(_run_database(settings, table or settings.products_table))
    if failed:
        raise typer.Exit(code=1)


@stress_app.command("api")
def stress_api(
    api_url: str | None = typer.Option(
        None, "--api-url", "-u", help="Admin API base URL (defaults to API_URL)"
    ),
    email: str | None = typer.Option(
        None, "--email", "-e", help="Admin email (defaults to STRESS_ADMIN_EMAIL)"
    ),
    password: str | None = typer.Option(
        None, "--password", "-p", help="Admin password (defaults to STRESS_ADMIN_PASSWORD)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show service logs"),
) -> None:
    """
    🌐 Exercise the admin product API end to end.

    Signs in with the anonymous client, then creates, updates, renames and
    deletes a product through the HTTP API.
    """
    configure_cli_logging(verbose)
    settings = EnvironmentVariables()
    _require(settings.missing_for_api())

    email = email or settings.stress_admin_email
    if not email:
        console.print("[red]❌ No admin email; pass --email or set STRESS_ADMIN_EMAIL[/red]")
        raise typer.Exit(code=1)
    password = password or settings.stress_admin_password
    if not password:
        password = typer.prompt("Admin password", hide_input=True)

    console.print(
        Panel.fit("[bold]🚀 Starting Product Stress Test...[/bold]", border_style="blue")
    )
    failed = asyncio.run(_run_api(settings, api_url or settings.api_url, email, password))
    if failed:
        raise typer.Exit(code=1)
