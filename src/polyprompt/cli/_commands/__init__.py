"""polyprompt CLI commands."""

from typing import TYPE_CHECKING

from ._config import app as config_app
from ._prompt import partial, render, resolve

if TYPE_CHECKING:
    from cyclopts import App

__all__ = ["config_app", "register_commands"]


def register_commands(app: "App") -> None:
    """Register all commands on an app."""
    app.command(render, name="render")
    app.command(resolve, name="resolve")
    app.command(partial, name="partial")
    app.command(config_app)
