import os
import sys
from pathlib import Path

from polyprompt.exceptions import ConfigError

from ._models import Config


def safe_load_config(
    *,
    config_path: Path | None = None,
    overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Behaviour on failure depends on the POLYPROMPT_STRICT_CONFIG environment
    variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": re-raise the error

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("POLYPROMPT_STRICT_CONFIG", "0") == "1"

    try:
        config = Config.load(config_path=config_path, overrides=overrides)
    except (ConfigError, OSError) as e:
        if strict_mode:
            raise
        error_msg = f"Failed to load config: {e}"
        print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
        return Config.from_dict({}), error_msg
    else:
        return config, None
