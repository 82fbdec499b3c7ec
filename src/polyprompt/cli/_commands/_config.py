# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: A002
"""Config command app for viewing polyprompt configuration."""

from typing import Annotated

from cyclopts import App, Parameter

from polyprompt.cli._context import CLIContext, OutputFormat
from polyprompt.cli._shared import ExitCode, format_json, format_toml, format_yaml

app = App(name="config", help="View polyprompt configuration.")


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (toml, json, yaml)"),
    ] = OutputFormat.TOML,
    show_sources: Annotated[
        bool,
        Parameter(name="--show-sources", help="List the sources that were merged"),
    ] = False,
) -> None:
    """Display merged configuration

    Args:
        format: Output format (toml, json, yaml).
        show_sources: List contributing sources before the configuration.
    """
    ctx = CLIContext.get_current()
    data = ctx.config.to_dict()

    if show_sources:
        for source in ctx.config.sources:
            if source.exists:
                location = f" ({source.path})" if source.path else ""
                print(f"# source: {source.name.value}{location}")  # noqa: T201

    match format:
        case OutputFormat.JSON:
            output = format_json(data)
        case OutputFormat.YAML:
            output = format_yaml(data)
        case _:
            output = format_toml(data)

    print(output.rstrip())  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)
