"""polyprompt exceptions."""

from pathlib import Path
from typing import Any


class PolypromptError(Exception):
    """Base exception for polyprompt errors."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(PolypromptError):
    """Base exception for template resolution and rendering errors."""


class InvalidTemplateSectionError(TemplateError):
    """Raised when the selected section is neither text nor a message list."""

    def __init__(
        self,
        message: str = "Invalid template section",
        *,
        path: tuple[str, ...] = (),
    ) -> None:
        """Initialize with error message and the key path that was selected."""
        super().__init__(message)
        self.path: tuple[str, ...] = path


class TemplateRenderError(TemplateError):
    """Raised when the templating engine fails to render a template."""

    def __init__(self, message: str, *, engine: str) -> None:
        """Initialize with error message and the engine that failed."""
        super().__init__(message)
        self.engine: str = engine


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(PolypromptError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
