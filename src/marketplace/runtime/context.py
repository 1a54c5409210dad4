import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from src.marketplace.runtime.config.config_data import ConfigData
from src.marketplace.runtime.config.config_template import load_templated_yaml


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def _load_default_config() -> ConfigData:
    load_dotenv()
    config_path = Path(os.getenv("APP_CONFIG_FILE", "config.yaml"))
    if not config_path.exists():
        return ConfigData()
    return load_templated_yaml(config_path)


_default_context = AppContext(config=_load_default_config())

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context."""
    return _app_context.set(context)


def _explicit_fields(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, at every nesting level.

    A nested model counts as set when it, or anything below it, was set.
    """
    result = {}
    for field_name in model.__class__.model_fields:
        value = getattr(model, field_name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                result[field_name] = nested
            elif field_name in model.model_fields_set:
                result[field_name] = value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = value
    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    result = base_dict.copy()
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value
    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    merged = _recursive_dict_merge(
        base_config.model_dump(), _explicit_fields(override_config)
    )
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only the fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited from the enclosing context.

    Example:
        override = ConfigData()
        override.app.environment = "production"
        with with_context(override):
            assert get_config().app.environment == "production"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
