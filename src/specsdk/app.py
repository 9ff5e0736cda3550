"""Typer application and CLI entry point for specsdk.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``generate``, ``inspect``, ``languages``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It maps :class:`~specsdk.exceptions.SpecsdkError` to the
error's exit code, Ctrl-C to 130, and anything else to a generic failure.

See Also:
    :mod:`specsdk.config`: Configuration resolution used by the commands.
    :mod:`specsdk.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import sys
import traceback

import typer
from rich.logging import RichHandler

from specsdk import __version__
from specsdk.commands.generate import generate_command
from specsdk.commands.inspect import inspect_app
from specsdk.commands.languages import languages_command
from specsdk.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="specsdk",
    help="Generate typed API clients from OpenAPI 3.0/3.1 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("languages")(languages_command)
app.add_typer(inspect_app, name="inspect", help="Inspect the client model of a spec.")

_LOGGER_NAME = "specsdk"


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specsdk {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route ``specsdk.*`` log records to stderr through Rich when verbose."""
    from specsdk.output import get_output

    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    if verbose:
        handler = RichHandler(
            console=get_output().stderr_console,
            show_path=False,
            show_time=False,
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~specsdk.output.OutputManager` from CLI
    flags and, under ``--verbose``, attaches a Rich logging handler to the
    ``specsdk`` logger.
    """
    from specsdk.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def main() -> None:
    """CLI entry point invoked by the ``specsdk`` console script.

    Unhandled :class:`~specsdk.exceptions.SpecsdkError` instances cause a
    clean exit with the error's ``exit_code``. Other exceptions print a
    generic failure (with the traceback under ``--verbose``) and exit 1.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specsdk.exceptions import SpecsdkError
        from specsdk.output import error, get_output

        if isinstance(exc, SpecsdkError):
            error(str(exc))
            sys.exit(exc.exit_code)

        error(f"Unexpected error: {exc}")
        if get_output().is_verbose:
            sys.stderr.write(traceback.format_exc())
        sys.exit(EXIT_GENERIC_FAILURE)
