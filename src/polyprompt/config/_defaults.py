"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "prompt": {
        "lang": "",
        "llm": "",
        "engine": "mustache",
    },
    "logging": {
        "level": "warning",
        "format": "text",
        "file": "",
    },
}
