"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic_core import ValidationError

from src.catalog_admin.runtime.config.config_data import ConfigData

REQUIRED_ENV_VARS = {
    "SUPABASE_URL": "Supabase project URL",
    "SUPABASE_SERVICE_ROLE_KEY": "Supabase service-role key (elevated client)",
    "SUPABASE_ANON_KEY": "Supabase anonymous key (normal-privilege client)",
    "ADMIN_EMAILS": "Comma-separated list of admin emails",
}

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def load_env_files() -> None:
    """Load .env.local, then .env, without overriding the real environment."""
    load_dotenv(".env.local")
    load_dotenv(".env")


def _resolve(expression: str) -> str:
    name, sep, fallback = expression.partition(":-")
    if sep:
        return os.getenv(name, fallback)

    name, sep, message = expression.partition(":?")
    value = os.getenv(name)
    if sep:
        # Empty counts as missing.
        if not value:
            raise ValueError(f"Required environment variable {name}: {message}")
        return value

    if value is None:
        raise ValueError(f"Required environment variable {name} not set")
    return value


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required and non-empty, custom error message

    Full-line YAML comments are left as written.
    """
    return "".join(
        line
        if line.lstrip().startswith("#")
        else _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), line)
        for line in text.splitlines(keepends=True)
    )


def apply_environment_overrides(env_mode: str) -> None:
    """Copy ``<ENV>_NAME`` variables onto ``NAME`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix)
    }
    if overrides:
        logger.info(
            "Applying {} override(s) for {}: {}", len(overrides), env_mode, sorted(overrides)
        )
    os.environ.update(overrides)


def _check_required_sections(config: ConfigData) -> None:
    if not config.supabase.is_configured:
        raise ValueError(
            "Incomplete Supabase configuration: url, service_role_key and anon_key are required"
        )
    # No implicit admin: an empty allow-list is a startup error.
    if not config.admin.emails:
        raise ValueError("Admin allow-list is empty; set ADMIN_EMAILS")


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        The validated configuration

    Raises:
        ValueError: If required environment variables are missing or the
            resulting configuration is incomplete
        FileNotFoundError: If the YAML file doesn't exist
    """
    raw = Path(file_path).read_text()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)
    apply_environment_overrides(env_mode)

    try:
        document = yaml.safe_load(substitute_env_vars(raw))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError(f"Configuration file {file_path} is empty")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    _check_required_sections(config)
    logger.info("Loaded {} admin email(s) into the allow-list", len(config.admin.emails))
    return config


def validate_config_env_vars() -> dict[str, str]:
    """Return the required environment variables that are unset, with descriptions."""
    return {
        name: description
        for name, description in REQUIRED_ENV_VARS.items()
        if not os.getenv(name)
    }
