"""Shared test fixtures for polyprompt tests."""

from pathlib import Path

import pytest
from rich.console import Console

from polyprompt.config import Config

GREETING = """\
lang-default: Hi {{name}}
lang-en:
  default: Hello {{name}}
  llm-gpt-4o:
    messages:
      - role: system
        content: You are talking to {{name}}.
      - role: user
        content: Say hello.
lang-fr: Bonjour {{name}}
"""


def write_template(directory: Path, name: str, content: str) -> Path:
    """Write a template document and return its path."""
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of files and environment."""
    return Config.from_dict({})


@pytest.fixture
def console() -> Console:
    return Console(
        width=100,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
