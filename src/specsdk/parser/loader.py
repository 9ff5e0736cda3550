"""Load OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for acquiring raw OpenAPI documents and converting
them into Python dictionaries. It supports both JSON and YAML formats with
automatic format detection.

Failures are split into two categories:

* :class:`~specsdk.exceptions.SpecAcquisitionError` -- the source could not
  be read at all (missing file, network failure, non-2xx response, broken
  stdin).
* :class:`~specsdk.exceptions.SpecParseError` -- the bytes were read but do
  not form a JSON/YAML object.

After loading, the raw dict should be passed to
:func:`~specsdk.parser.extractor.parse_document`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specsdk.exceptions import SpecAcquisitionError, SpecParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
"""Seconds allowed for fetching a spec over HTTP."""

_STDIN_SOURCES = ("-", "stdin")


def load_spec(source: str, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Load an OpenAPI spec from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or ``-``/``stdin``.
        timeout: Timeout in seconds for URL sources.

    Returns:
        The parsed spec as a dictionary.

    Raises:
        SpecAcquisitionError: If the source cannot be read.
        SpecParseError: If the content cannot be parsed.
    """
    if source in _STDIN_SOURCES:
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read spec from stdin.

    Raises:
        SpecAcquisitionError: If stdin cannot be read.
        SpecParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except (OSError, ValueError) as exc:
        raise SpecAcquisitionError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    logger.debug("Read %d characters from stdin", len(content))
    return _parse_content(content)


def _load_from_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Fetch spec from URL. Supports JSON and YAML responses.

    Args:
        url: The HTTP(S) URL to fetch.
        timeout: Request timeout in seconds.

    Raises:
        SpecAcquisitionError: If the URL cannot be fetched.
        SpecParseError: If the response body cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecAcquisitionError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecAcquisitionError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    logger.debug("Fetched %s (%s)", url, content_type or "no content-type")
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load spec from local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        SpecAcquisitionError: If the file does not exist or cannot be read.
        SpecParseError: If the file is empty or cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecAcquisitionError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecAcquisitionError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format,
            or does not hold a top-level object.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            json_error = exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse spec as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecParseError(msg) from exc

    return _require_object(result)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return result
