"""Jinja2 Environment factory."""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jinja2 import Environment


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for Jinja2 Environment.

    Attributes:
        autoescape: Enable autoescaping (default: False for prompt text).
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
        keep_undefined: Render undefined variables back as ``{{ name }}``
            instead of an empty string.
    """

    autoescape: bool = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    keep_undefined: bool = False


@lru_cache(maxsize=8)
def create_environment(config: EnvironmentConfig | None = None) -> "Environment":
    """Create a Jinja2 Environment for string templates.

    Environments are cached per configuration. Rendering from a shared
    Environment is safe across threads.

    Example:
        env = create_environment(EnvironmentConfig(keep_undefined=True))
        env.from_string("{{ a }} {{ b }}").render(a="1")
        # Returns: "1 {{ b }}"
    """
    from jinja2 import DebugUndefined, Environment, Undefined  # noqa: PLC0415

    if config is None:
        config = EnvironmentConfig()

    return Environment(
        autoescape=config.autoescape,  # noqa: S701
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
        undefined=DebugUndefined if config.keep_undefined else Undefined,
    )
