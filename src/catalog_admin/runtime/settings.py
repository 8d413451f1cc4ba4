"""Flat environment settings for the command-line tools.

The HTTP service reads the templated ``config.yaml`` (see ``runtime.context``);
the stress-test CLI only needs a handful of primitive values, read here from
the process environment and from ``.env`` / ``.env.local`` files.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        # Later files win, so .env.local overrides .env.
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
    )
    supabase_service_role_key: str | None = Field(
        default=None, validation_alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
    )
    supabase_timeout_seconds: float = Field(
        default=10.0, validation_alias="SUPABASE_TIMEOUT_SECONDS"
    )

    products_table: str = Field(default="products", validation_alias="PRODUCTS_TABLE")

    api_url: str = Field(default="http://localhost:8000", validation_alias="API_URL")

    # Credentials the API stress test signs in with.
    stress_admin_email: str | None = Field(
        default=None, validation_alias="STRESS_ADMIN_EMAIL"
    )
    stress_admin_password: str | None = Field(
        default=None, validation_alias="STRESS_ADMIN_PASSWORD"
    )

    def missing_for_database(self) -> list[str]:
        """Names of the variables the direct-database stress test still needs."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_service_role_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        return missing

    def missing_for_api(self) -> list[str]:
        """Names of the variables the HTTP API stress test still needs."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing
