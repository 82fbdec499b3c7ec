"""polyprompt configuration.

This module provides the public API for configuration management:
loading, validation, typed access and the process-wide default settings.

Example:
    >>> from polyprompt.config import Config
    >>> config = Config.from_dict({"prompt": {"lang": "fr"}})
    >>> config.prompt.lang
    'fr'
"""

from polyprompt.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PromptConfig,
)
from ._discovery import (
    PROJECT_CONFIG_FILENAME,
    discover_sources,
    find_project_config,
    get_user_config_path,
)
from ._load import safe_load_config
from ._settings import get_settings, reset_settings, set_settings

__all__ = [
    "DEFAULT_CONFIG",
    "PROJECT_CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PromptConfig",
    "deep_merge",
    "discover_sources",
    "find_project_config",
    "get_settings",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "reset_settings",
    "safe_load_config",
    "set_nested_key",
]
