import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from polyprompt.cli import CLIContext
from polyprompt.config import reset_settings


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def isolated_project(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Run each test from an empty project directory without user config.

    Creates:
        tmp_path/
            project/    # working directory
            user/       # user config directory (empty)
    """
    project_root = tmp_path / "project"
    project_root.mkdir()
    user_dir = tmp_path / "user"
    user_dir.mkdir()

    for key in list(os.environ):
        if key.startswith("POLYPROMPT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(project_root)
    monkeypatch.setattr(
        "polyprompt.config._discovery.get_user_config_path",
        lambda: user_dir / "config.toml",
    )
    reset_settings()

    yield project_root

    CLIContext.reset()
    reset_settings()
