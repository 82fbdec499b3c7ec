import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from polyprompt.config import Config, reset_settings, set_settings


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from default settings and a clean environment."""
    for key in list(os.environ):
        if key.startswith("POLYPROMPT_"):
            monkeypatch.delenv(key)
    set_settings(Config.from_dict({}))
    yield
    reset_settings()
