"""Config file discovery utilities.

This module locates the project config file by searching upward through the
directory tree for ``polyprompt.toml``, determines the platform-specific user
config path, and assembles the list of configuration sources.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._loader import parse_env_vars
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_FILENAME = "polyprompt.toml"


def find_project_config(start: Path | None = None) -> Path | None:
    """Find the nearest ``polyprompt.toml`` searching upward from start.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        Path to the config file, or None if the filesystem root is reached.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        candidate = current / PROJECT_CONFIG_FILENAME
        if _file_exists(candidate):
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/polyprompt/config.toml``
    - macOS: ``~/Library/Application Support/polyprompt/config.toml``
    - Windows: ``%APPDATA%\polyprompt\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path("polyprompt") / "config.toml"


def _file_exists(path: Path) -> bool:
    """Check if a file exists, treating permission errors as absent."""
    try:
        return path.is_file()
    except PermissionError:
        return False


def discover_sources(
    *,
    config_path: Path | None = None,
    start: Path | None = None,
    include_env: bool = True,
    overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover configuration sources, highest precedence first.

    File sources are returned with empty values; Config.load reads them.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
    """
    sources: list[ConfigSource] = []

    if overrides:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI, path=None, exists=True, values=overrides
            )
        )

    if include_env:
        env_values = parse_env_vars()
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=bool(env_values),
                values=env_values,
            )
        )

    if config_path is not None:
        if not _file_exists(config_path):
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
        project_path: Path | None = config_path
    else:
        project_path = find_project_config(start)

    if project_path is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=True,
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
