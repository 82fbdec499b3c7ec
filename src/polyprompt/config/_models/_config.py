# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing polyprompt configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from polyprompt.config._defaults import DEFAULT_CONFIG
from polyprompt.config._loader import deep_merge, read_toml_file
from polyprompt.exceptions import ConfigValidationError

from ._common import ConfigSource, ConfigSourceName
from ._logging import LoggingConfig
from ._prompt import PromptConfig

T = TypeVar("T")


def _to_validation_error(
    error: ValidationError, *, source: str | None
) -> ConfigValidationError:
    """Convert the first Pydantic error into a ConfigValidationError."""
    detail = error.errors()[0]
    key = ".".join(str(part) for part in detail["loc"])
    msg = f"Invalid configuration value for '{key}'"
    return ConfigValidationError(
        msg,
        key=key,
        value=detail.get("input"),
        expected=detail["msg"],
        source=source,
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Instances are immutable. Use the factory methods rather than the
    constructor so that defaults are merged and sources are tracked.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    prompt: PromptConfig = PromptConfig()
    logging: LoggingConfig = LoggingConfig()

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _build(
        cls,
        data: dict[str, Any],
        *,
        sources: tuple[ConfigSource, ...] = (),
        source: str | None = None,
    ) -> Self:
        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise _to_validation_error(e, source=source) from e
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return cls._build(deep_merge(DEFAULT_CONFIG, data))

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single TOML file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=path,
            exists=True,
            values=data,
        )
        return cls._build(
            deep_merge(DEFAULT_CONFIG, data),
            sources=(source,),
            source=str(path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        start: Path | None = None,
        include_env: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order
        (defaults -> user -> project -> env -> cli).

        Args:
            config_path: Explicit config file used instead of project discovery.
            start: Directory to start the project config search from.
            include_env: Include ``POLYPROMPT_*`` environment variables.
            overrides: Highest-precedence values, typically from CLI flags.

        Raises:
            FileNotFoundError: If an explicit config_path does not exist.
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        from polyprompt.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            config_path=config_path,
            start=start,
            include_env=include_env,
            overrides=overrides,
        )

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        # Discovered highest-to-lowest; merge lowest first
        for source in reversed(sources):
            values = source.values
            if source.path is not None and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        return cls._build(merged, sources=tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("prompt.engine")
            'mustache'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self.to_dict()

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary of JSON-compatible values."""
        return self.model_dump(mode="json")
