# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

- Standardized exit codes
- Output formatters (JSON, YAML, TOML)
- Console utilities for error handling
"""

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "format_json",
    "format_toml",
    "format_yaml",
    "get_error_console",
    "parse_assignments",
]


class ExitCode(IntEnum):
    """Standard exit codes for polyprompt CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: Any, *, indent: bool = True) -> str:
    """Format data as JSON."""
    import orjson  # noqa: PLC0415

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_yaml(data: Any) -> str:
    """Format data as YAML, keeping key order."""
    import yaml  # noqa: PLC0415

    return yaml.safe_dump(
        data, default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def format_toml(data: dict[str, Any]) -> str:
    """Format a dictionary as TOML."""
    import tomli_w  # noqa: PLC0415

    return tomli_w.dumps(data)


def parse_assignments(values: list[str] | None) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a dictionary.

    Raises:
        ValueError: If a value has no ``=`` or an empty key.
    """
    result: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            msg = f"Expected KEY=VALUE, got '{item}'"
            raise ValueError(msg)
        result[key] = value
    return result


def get_error_console() -> "Console":
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    from rich.markup import escape  # noqa: PLC0415

    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise SystemExit(code)
