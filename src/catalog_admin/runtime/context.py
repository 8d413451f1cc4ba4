import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel

from src.catalog_admin.runtime.config.config_data import ConfigData
from src.catalog_admin.runtime.config.config_template import (
    load_env_files,
    load_templated_yaml,
)


@dataclass(frozen=True)
class AppContext:
    """Application context holding the immutable process configuration."""

    config: ConfigData


def config_path() -> Path:
    """Location of the YAML configuration, overridable with APP_CONFIG_FILE."""
    return Path(os.getenv("APP_CONFIG_FILE", "config.yaml"))


# Loaded once per process; a missing credential or an empty allow-list stops
# the import here. Real environment variables win over both files, and
# .env.local wins over .env.
load_env_files()
_default_config = load_templated_yaml(config_path())
_default_context = AppContext(config=_default_config)


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _dump_explicit(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, at every nesting level.

    A nested model is included whole when any of its own fields were set, so
    that partially-specified sections still override their parent.
    """
    result = {}
    for field_name in model.__class__.model_fields:
        value = getattr(model, field_name)
        if isinstance(value, BaseModel):
            if _dump_explicit(value) or field_name in model.model_fields_set:
                result[field_name] = _dump_explicit(value) or value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = value
    return result


def _deep_merge(base: dict, override: dict) -> dict:
    merged = base.copy()
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge explicitly-set values of ``override_config`` onto ``base_config``."""
    merged = _deep_merge(base_config.model_dump(), _dump_explicit(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only the fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited.

    Example:
        override = ConfigData(admin=AdminConfig(emails="ops@example.com"))
        with with_context(override):
            assert get_config().admin.emails == ["ops@example.com"]
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = merge_configs(get_config(), config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    """Convenience function to get the current configuration.

    Returns:
        ConfigData: The current configuration from the app context.
    """
    return get_context().config
