"""Inspect commands -- examine the client model a spec produces.

Provides the ``specsdk inspect`` sub-command group with read-only commands
that build the client model for a spec and print its methods or types as a
table (or JSON with ``--json``). Nothing is rendered or written.
"""

from __future__ import annotations

from typing import Optional

import typer

from specsdk.exceptions import SpecsdkError
from specsdk.models import ClientModel
from specsdk.output import error, print_table

inspect_app = typer.Typer(no_args_is_help=True)


def _load_model(spec: Optional[str], language: Optional[str]) -> ClientModel:
    """Resolve configuration and build the client model.

    Raises:
        typer.Exit: With the error's exit code when resolution, acquisition
            or parsing fails.
    """
    from specsdk.config import resolve_config
    from specsdk.generator.pipeline import build_model

    try:
        config = resolve_config(spec=spec, language=language, require_name=False)
        return build_model(config)
    except SpecsdkError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("methods")
def inspect_methods(
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help="Spec location."),
    language: Optional[str] = typer.Option(None, "--lang", "-l", help="Target language."),
) -> None:
    """List the client methods a spec produces.

    Example::

        specsdk inspect methods --spec petstore.yaml --lang python
    """
    model = _load_model(spec, language)

    headers = ["Method", "Verb", "Path", "Parameters", "Returns"]
    rows: list[list[str]] = []
    for method in model.methods:
        params = ", ".join(
            p.name if p.required else f"{p.name}?" for p in method.parameters
        )
        rows.append([
            method.name,
            method.http_method.value.upper(),
            method.raw_path,
            params or "-",
            method.response_type,
        ])

    print_table(headers, rows, title=f"Methods ({len(rows)})")


@inspect_app.command("types")
def inspect_types(
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help="Spec location."),
    language: Optional[str] = typer.Option(None, "--lang", "-l", help="Target language."),
) -> None:
    """List the named types a spec produces.

    Structural types show their property names (``?`` marks optional ones);
    aliases show the type expression they stand for.

    Example::

        specsdk inspect types --spec petstore.yaml
    """
    model = _load_model(spec, language)

    headers = ["Type", "Kind", "Definition"]
    rows: list[list[str]] = []
    for type_ in model.types:
        if type_.is_structure:
            definition = ", ".join(
                p.name if p.required else f"{p.name}?" for p in type_.properties
            )
        else:
            definition = type_.expression or ""
        rows.append([type_.name, type_.kind.value, definition])

    print_table(headers, rows, title=f"Types ({len(rows)})")
