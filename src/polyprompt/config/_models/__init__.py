"""Configuration models."""

from ._common import ConfigSource, ConfigSourceName, LogFormat, LogLevel
from ._config import Config
from ._logging import LoggingConfig
from ._prompt import PromptConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PromptConfig",
]
