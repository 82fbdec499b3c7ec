"""Process-wide default settings.

Templates read these only when a caller does not pass an explicit Config.
The stored Config is immutable and replaced atomically.
"""

import threading

from ._load import safe_load_config
from ._models import Config

_lock = threading.Lock()
_settings: Config | None = None


def get_settings() -> Config:
    """Return the process-wide Config, loading it on first use."""
    global _settings  # noqa: PLW0603
    with _lock:
        if _settings is None:
            _settings, _ = safe_load_config()
        return _settings


def set_settings(config: Config) -> None:
    """Replace the process-wide Config."""
    global _settings  # noqa: PLW0603
    with _lock:
        _settings = config


def reset_settings() -> None:
    """Forget the process-wide Config so the next read reloads it."""
    global _settings  # noqa: PLW0603
    with _lock:
        _settings = None
