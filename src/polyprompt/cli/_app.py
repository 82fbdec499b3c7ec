"""The command-line interface for polyprompt."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated, Any

from cyclopts import App, Parameter
from rich.console import Console

from polyprompt.config import safe_load_config
from polyprompt.enums import TemplateEngine
from polyprompt.utils import get_logger

from ._commands import register_commands
from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

HELP = "Resolve and render language- and model-specific prompt templates."


def _build_overrides(
    *,
    verbose: bool,
    lang: str | None,
    llm: str | None,
    engine: TemplateEngine | None,
) -> dict[str, Any] | None:  # pyright: ignore[reportExplicitAny]
    prompt: dict[str, str] = {}
    if lang:
        prompt["lang"] = lang
    if llm:
        prompt["llm"] = llm
    if engine is not None:
        prompt["engine"] = engine.value

    overrides: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    if prompt:
        overrides["prompt"] = prompt
    if verbose:
        overrides["logging"] = {"level": "debug"}
    return overrides or None


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="polyprompt",
        help=HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        lang: Annotated[
            str | None, Parameter(name="--lang", help="Target language")
        ] = None,
        llm: Annotated[str | None, Parameter(name="--llm", help="Target model")] = None,
        engine: Annotated[
            TemplateEngine | None,
            Parameter(name="--engine", help="Substitution engine (mustache, jinja)"),
        ] = None,
    ) -> None:
        """Launch polyprompt CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable debug logging.
            config: Explicit path to config file.
            lang: Target language, overriding prompt.lang.
            llm: Target model, overriding prompt.llm.
            engine: Substitution engine, overriding prompt.engine.
        """
        # An explicit config file must exist
        if config is not None and not config.is_file():
            exit_with_error(
                f"Config file not found: {config}",
                ExitCode.LOAD_ERROR,
                console=error_console,
            )

        loaded_config, config_error = safe_load_config(
            config_path=config,
            overrides=_build_overrides(
                verbose=verbose, lang=lang, llm=llm, engine=engine
            ),
        )
        cli_logger = get_logger(loaded_config.logging)
        cli_logger.debug(
            "config_loaded",
            sources=[s.name.value for s in loaded_config.sources if s.exists],
            error=config_error,
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            config_error=config_error,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `polyprompt` CLI."""
    app.meta()


if __name__ == "__main__":
    main()
