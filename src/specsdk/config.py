"""Configuration resolution for a generation run.

Generator inputs come from four layers, highest precedence first:

1. Explicit values (CLI flags).
2. Environment variables (``SPECSDK_SPEC``, ``SPECSDK_NAME``,
   ``SPECSDK_OUTPUT``, ``SPECSDK_LANGUAGE``, ``SPECSDK_TEMPLATES``).
3. The project file ``./specsdk.json``.
4. Defaults declared on :class:`~specsdk.models.GeneratorConfig`.

A project file pins the inputs for a repository so that a bare
``specsdk generate`` reproduces the same client::

    {
      "spec": "openapi.yaml",
      "project_name": "Petstore",
      "output_dir": "clients/ts",
      "language": "typescript"
    }
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specsdk.exceptions import ConfigurationError
from specsdk.models import GeneratorConfig

_PROJECT_CONFIG_FILENAME = "specsdk.json"

ENV_VARS: dict[str, str] = {
    "spec": "SPECSDK_SPEC",
    "project_name": "SPECSDK_NAME",
    "output_dir": "SPECSDK_OUTPUT",
    "language": "SPECSDK_LANGUAGE",
    "templates_dir": "SPECSDK_TEMPLATES",
}
"""Environment variable consulted for each :class:`GeneratorConfig` field."""

DEFAULT_PROJECT_NAME = "api"
"""Project name used when inspecting without one."""

_REQUIRED_FIELDS: dict[str, str] = {
    "spec": "--spec",
    "project_name": "--name",
}


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``specsdk.json``.

    Args:
        directory: Directory to look in. Defaults to the working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigurationError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    spec: Optional[str] = None,
    project_name: Optional[str] = None,
    output_dir: Optional[str] = None,
    language: Optional[str] = None,
    templates_dir: Optional[str] = None,
    timeout: Optional[float] = None,
    project_dir: Optional[Path] = None,
    require_name: bool = True,
) -> GeneratorConfig:
    """Resolve a :class:`GeneratorConfig` with the full precedence chain.

    Args:
        spec: Spec location from the command line.
        project_name: Project name from the command line.
        output_dir: Output directory from the command line.
        language: Target language from the command line.
        templates_dir: Template override root from the command line.
        timeout: URL fetch timeout from the command line.
        project_dir: Where to look for ``specsdk.json`` (default: cwd).
        require_name: When ``False`` a missing project name falls back to
            :data:`DEFAULT_PROJECT_NAME` (used by read-only commands).

    Returns:
        The resolved configuration.

    Raises:
        ConfigurationError: If ``spec`` or ``project_name`` is missing after
            resolution, or a value has the wrong shape.
    """
    # 4 + 3. Defaults come from the model; the project file layers on top
    values: dict[str, Any] = {}
    project = load_project_config(project_dir)
    if project is not None:
        values.update({k: v for k, v in project.items() if k in GeneratorConfig.model_fields})

    # 2. Environment variables
    for field_name, env_var in ENV_VARS.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[field_name] = env_value

    # 1. Explicit values (highest precedence)
    explicit = {
        "spec": spec,
        "project_name": project_name,
        "output_dir": output_dir,
        "language": language,
        "templates_dir": templates_dir,
        "timeout": timeout,
    }
    values.update({k: v for k, v in explicit.items() if v is not None})

    if not require_name:
        values.setdefault("project_name", DEFAULT_PROJECT_NAME)

    missing = [flag for field_name, flag in _REQUIRED_FIELDS.items() if not values.get(field_name)]
    if missing:
        raise ConfigurationError(f"Missing required input(s): {', '.join(missing)}")

    try:
        return GeneratorConfig.model_validate(values)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(f"Invalid configuration value for {location}: {first['msg']}") from exc
