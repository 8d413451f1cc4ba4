"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field, field_validator


def split_email_list(value: Any) -> list[str]:
    """Normalize a comma-separated string (or list) of emails.

    Entries are trimmed and lowercased; blanks are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise ValueError(f"Unsupported email list value: {type(value).__name__}")

    emails = []
    for item in items:
        if not isinstance(item, str):
            raise ValueError(f"Email entries must be strings, got {type(item).__name__}")
        email = item.strip().lower()
        if email:
            emails.append(email)
    return emails


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class SupabaseConfig(BaseModel):
    """Connection settings for the hosted Supabase project."""

    url: str = Field(default="", description="Project URL, e.g. https://xyz.supabase.co")
    service_role_key: str = Field(
        default="", description="Service-role key; bypasses row-level security"
    )
    anon_key: str = Field(default="", description="Anonymous (public) key")
    timeout_seconds: float = Field(
        default=10.0, description="Timeout applied to every call to the project"
    )

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @computed_field
    @property
    def is_configured(self) -> bool:
        """True when the URL and both keys are present."""
        return bool(self.url and self.service_role_key and self.anon_key)


class CatalogConfig(BaseModel):
    """Names of the managed resources the catalog writes to."""

    products_table: str = Field(default="products", description="Products table name")
    image_bucket: str = Field(
        default="product-images", description="Storage bucket for product images"
    )


class AdminConfig(BaseModel):
    """Admin allow-list configuration."""

    emails: list[str] = Field(
        default_factory=list,
        description="Emails allowed to use the admin API (comma-separated in env)",
    )

    @field_validator("emails", mode="before")
    @classmethod
    def normalize_emails(cls, v: Any) -> list[str]:
        return split_email_list(v)


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    supabase: SupabaseConfig = Field(
        default_factory=SupabaseConfig, description="Supabase project configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog resource names"
    )
    admin: AdminConfig = Field(
        default_factory=AdminConfig, description="Admin allow-list configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
