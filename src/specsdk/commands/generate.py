"""The ``specsdk generate`` command -- write a typed client for a spec."""

from __future__ import annotations

from typing import Optional

import typer

from specsdk.exceptions import SpecsdkError
from specsdk.exit_codes import EXIT_CONFIGURATION_ERROR
from specsdk.output import (
    OutputFormat,
    debug,
    error,
    get_output,
    info,
    print_data,
    print_json,
    success,
    suggest,
)


def generate_command(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Spec file path, http(s) URL, or '-' for stdin."
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Project name (client class and package name)."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output directory [default: ./generated-client]."
    ),
    language: Optional[str] = typer.Option(
        None, "--lang", "-l", help="Target language [default: typescript]."
    ),
    templates_dir: Optional[str] = typer.Option(
        None, "--templates", "-t", help="Directory of <language>/<key>.j2 overrides."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed for fetching a spec URL."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Render everything but write nothing."
    ),
) -> None:
    """Generate a typed API client from an OpenAPI spec.

    Missing options fall back to ``SPECSDK_*`` environment variables and
    then to ``./specsdk.json``. The written (or, with ``--dry-run``, the
    would-be written) file paths are printed to stdout, one per line, or
    as a single JSON summary under ``--json``.

    Example::

        specsdk generate --spec petstore.yaml --name Petstore
        specsdk generate -s https://api.example.com/openapi.json -n Example -l python -o sdk/
    """
    from specsdk.config import resolve_config
    from specsdk.generator.pipeline import generate_client

    try:
        config = resolve_config(
            spec=spec,
            project_name=name,
            output_dir=output_dir,
            language=language,
            templates_dir=templates_dir,
            timeout=timeout,
        )
        debug(f"Resolved config: {config.model_dump()}")
        info(f"Generating {config.language} client for {config.project_name}...")
        result = generate_client(config, dry_run=dry_run)
    except SpecsdkError as exc:
        error(str(exc))
        if exc.exit_code == EXIT_CONFIGURATION_ERROR:
            suggest("Run: specsdk generate --help")
        raise typer.Exit(code=exc.exit_code) from None

    model = result.model
    if result.dry_run:
        paths = [f"{config.output_dir.rstrip('/')}/{rendered.path}" for rendered in result.files]
    else:
        paths = [str(path) for path in result.written]

    if get_output().format == OutputFormat.JSON:
        print_json(
            {
                "language": config.language,
                "output_dir": config.output_dir,
                "dry_run": result.dry_run,
                "methods": len(model.methods),
                "types": len(model.types),
                "files": paths,
            }
        )
    else:
        for path in paths:
            print_data(path)

    if result.dry_run:
        info(f"Dry run: {len(result.files)} files would be written to {config.output_dir}")
        return

    success(
        f"Generated {len(model.methods)} methods and {len(model.types)} types "
        f"in {len(result.written)} files under {config.output_dir}"
    )
