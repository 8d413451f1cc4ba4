"""Unit tests for the ``stress`` CLI commands."""

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from src.catalog_admin.core.errors import AuthenticationError
from src.cli import app

SUPABASE_VARS = (
    "SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "STRESS_ADMIN_EMAIL",
    "STRESS_ADMIN_PASSWORD",
    "API_URL",
)


@pytest.fixture
def cli() -> CliRunner:
    return CliRunner()


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in SUPABASE_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.test")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    return monkeypatch


class TestStressDb:
    def test_missing_credentials(self, cli, env):
        """Test the database suite refuses to run without the service-role key."""
        env.delenv("SUPABASE_SERVICE_ROLE_KEY")

        result = cli.invoke(app, ["stress", "db"])

        assert result.exit_code == 1
        assert "SUPABASE_SERVICE_ROLE_KEY" in result.output

    def test_runs_against_configured_table(self, cli, env):
        """Test the table option is passed to the suite."""
        with patch(
            "src.cli.stress_commands._run_database", new=AsyncMock(return_value=0)
        ) as run:
            result = cli.invoke(app, ["stress", "db", "--table", "products_staging"])

        assert result.exit_code == 0, result.output
        assert run.await_args.args[1] == "products_staging"

    def test_failures_set_exit_code(self, cli, env):
        """Test failed cases produce a non-zero exit code."""
        with patch("src.cli.stress_commands._run_database", new=AsyncMock(return_value=2)):
            result = cli.invoke(app, ["stress", "db"])

        assert result.exit_code == 1


class TestStressApi:
    def test_requires_admin_email(self, cli, env):
        """Test the API suite needs an admin email."""
        result = cli.invoke(app, ["stress", "api"])

        assert result.exit_code == 1
        assert "No admin email" in result.output

    def test_missing_anon_key(self, cli, env):
        """Test the API suite refuses to run without the anonymous key."""
        env.delenv("SUPABASE_ANON_KEY")

        result = cli.invoke(app, ["stress", "api", "--email", "admin@example.com"])

        assert result.exit_code == 1
        assert "SUPABASE_ANON_KEY" in result.output

    def test_uses_environment_credentials(self, cli, env):
        """Test credentials and API URL are read from the environment."""
        env.setenv("STRESS_ADMIN_EMAIL", "admin@example.com")
        env.setenv("STRESS_ADMIN_PASSWORD", "secret")

        with patch("src.cli.stress_commands._run_api", new=AsyncMock(return_value=0)) as run:
            result = cli.invoke(app, ["stress", "api", "--api-url", "http://localhost:9000"])

        assert result.exit_code == 0, result.output
        assert run.await_args.args[1:] == ("http://localhost:9000", "admin@example.com", "secret")

    def test_prompts_for_password(self, cli, env):
        """Test the password is prompted for when not configured."""
        with patch("src.cli.stress_commands._run_api", new=AsyncMock(return_value=0)) as run:
            result = cli.invoke(
                app, ["stress", "api", "--email", "admin@example.com"], input="typed\n"
            )

        assert result.exit_code == 0, result.output
        assert run.await_args.args[3] == "typed"

    def test_sign_in_failure(self, cli, env):
        """Test a failed sign-in aborts with the provider message."""
        with patch(
            "src.cli.stress_commands._sign_in",
            new=AsyncMock(side_effect=AuthenticationError("Invalid login credentials")),
        ):
            result = cli.invoke(
                app, ["stress", "api", "--email", "admin@example.com", "--password", "bad"]
            )

        assert result.exit_code == 1
        assert "Failed to authenticate: Invalid login credentials" in result.output
