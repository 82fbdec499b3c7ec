# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: A002, TC003
"""Commands that resolve and render template documents."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any

import yaml
from cyclopts import Parameter

from polyprompt.cli._context import CLIContext, OutputFormat
from polyprompt.cli._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_yaml,
    parse_assignments,
)
from polyprompt.exceptions import TemplateError
from polyprompt.prompts import ChatMessage, PromptTemplate

VarOption = Annotated[
    list[str] | None,
    Parameter(name="--var", help="Template variable as KEY=VALUE (repeatable)"),
]


def _load_template(path: Path) -> PromptTemplate:
    try:
        return PromptTemplate.from_file(path)
    except FileNotFoundError:
        exit_with_error(f"Template file not found: {path}", ExitCode.NOT_FOUND)
    except OSError as e:
        exit_with_error(f"Failed to read template: {e}", ExitCode.IO_ERROR)


def _parse_vars(values: list[str] | None) -> dict[str, str]:
    try:
        return parse_assignments(values)
    except ValueError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)


@contextmanager
def _template_errors() -> Iterator[None]:
    """Map template failures to CLI exit codes."""
    try:
        yield
    except yaml.YAMLError as e:
        exit_with_error(f"Malformed template document: {e}", ExitCode.LOAD_ERROR)
    except TemplateError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)


def _check_format(format: OutputFormat, supported: tuple[OutputFormat, ...]) -> None:
    if format not in supported:
        names = ", ".join(f.value for f in supported)
        exit_with_error(
            f"Unsupported format: {format.value} (expected one of: {names})",
            ExitCode.VALIDATION_ERROR,
        )


def _structured(result: str | list[ChatMessage]) -> Any:  # pyright: ignore[reportExplicitAny]
    if isinstance(result, str):
        return result
    return [message.model_dump(mode="json") for message in result]


def render(
    path: Path,
    /,
    *,
    var: VarOption = None,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (text, json, yaml)"),
    ] = OutputFormat.TEXT,
) -> None:
    """Render a template document

    Selects the variant for the configured language and model and
    substitutes the given variables.

    Args:
        path: Template document (YAML).
        var: Variables as KEY=VALUE.
        format: Output format. TOML is rejected.
    """
    _check_format(format, (OutputFormat.TEXT, OutputFormat.JSON, OutputFormat.YAML))
    ctx = CLIContext.get_current()
    template = _load_template(path)
    inputs = _parse_vars(var)

    with _template_errors():
        result = template.format(inputs, config=ctx.config)

    if ctx.logger is not None:
        ctx.logger.info("command_render", path=str(path), variables=sorted(inputs))

    match format:
        case OutputFormat.JSON:
            output = format_json(_structured(result))
        case OutputFormat.YAML:
            output = format_yaml(_structured(result))
        case _:  # text
            if isinstance(result, str):
                output = result
            else:
                output = "\n".join(f"{m.role}: {m.content}" for m in result)

    print(output.rstrip("\n"))  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)


def resolve(
    path: Path,
    /,
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (yaml, json)"),
    ] = OutputFormat.YAML,
) -> None:
    """Show which section a template resolves to

    Args:
        path: Template document (YAML).
        format: Output format. Text and TOML are rejected.
    """
    _check_format(format, (OutputFormat.YAML, OutputFormat.JSON))
    ctx = CLIContext.get_current()
    template = _load_template(path)

    with _template_errors():
        resolution = template.resolve(config=ctx.config)

    data = {
        "path": list(resolution.path),
        "kind": resolution.kind.value,
        "section": resolution.section.model_dump(mode="json"),
    }
    output = format_json(data) if format == OutputFormat.JSON else format_yaml(data)

    print(output.rstrip("\n"))  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)


def partial(
    path: Path,
    /,
    *,
    var: VarOption = None,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Write to a file instead of stdout"),
    ] = None,
) -> None:
    """Bind variables into a template document

    Variables that are not given are left in place.

    Args:
        path: Template document (YAML).
        var: Variables as KEY=VALUE.
        output: Destination file.
    """
    ctx = CLIContext.get_current()
    template = _load_template(path)
    inputs = _parse_vars(var)

    with _template_errors():
        bound = template.partial(inputs, config=ctx.config)

    if output is None:
        print(bound.template, end="")  # noqa: T201
        raise SystemExit(ExitCode.SUCCESS)

    try:
        output.write_text(bound.template, encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Failed to write {output}: {e}", ExitCode.IO_ERROR)
    raise SystemExit(ExitCode.SUCCESS)
