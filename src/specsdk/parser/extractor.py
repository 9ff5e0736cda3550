"""Validate a raw OpenAPI dict into an :class:`~specsdk.models.ApiDocument`.

This module turns the dictionary returned by
:func:`~specsdk.parser.loader.load_spec` into the frozen document models of
:mod:`specsdk.models`. Only the fields the generator consumes are modeled;
everything else is ignored.

Schema ``$ref`` pointers are *not* inlined: component schemas are stored once
and referenced by name. Pointers standing in for whole parameter, request
body, or response objects (``#/components/parameters/...`` and friends) are
dereferenced before validation because those objects have no name of their
own to refer to.

The single public entry point is :func:`parse_document`.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from specsdk.exceptions import SpecParseError
from specsdk.models import ApiDocument, HTTPMethod

logger = logging.getLogger(__name__)

_HTTP_METHODS = tuple(m.value for m in HTTPMethod)


def parse_document(raw_spec: dict[str, Any]) -> ApiDocument:
    """Validate *raw_spec* into an :class:`~specsdk.models.ApiDocument`.

    Args:
        raw_spec: The raw OpenAPI dictionary.

    Returns:
        The parsed, read-only document.

    Raises:
        SpecParseError: If a modeled field has the wrong shape (for example
            a ``required`` marker that is neither a boolean nor a list of
            names) or a local ``$ref`` cannot be followed. The message names
            the dotted path of the offending field.

    Example::

        raw = load_spec("petstore.yaml")
        document = parse_document(raw)
        print(sorted(document.components.schemas))
    """
    prepared = dict(raw_spec)
    paths = raw_spec.get("paths")
    if isinstance(paths, dict):
        prepared["paths"] = {
            path: _dereference_path_item(path_item, raw_spec)
            for path, path_item in paths.items()
        }

    try:
        document = ApiDocument.model_validate(prepared)
    except ValidationError as exc:
        raise SpecParseError(_describe_validation_error(exc)) from exc

    logger.debug(
        "Parsed document: %d paths, %d component schemas",
        len(document.paths),
        len(document.components.schemas),
    )
    return document


def _dereference_path_item(path_item: Any, root: dict[str, Any]) -> Any:
    """Follow local ``$ref`` pointers on parameters, request bodies, and responses."""
    if not isinstance(path_item, dict):
        return path_item

    item = dict(path_item)
    if isinstance(item.get("parameters"), list):
        item["parameters"] = [_follow(p, root) for p in item["parameters"]]

    for method in _HTTP_METHODS:
        operation = item.get(method)
        if not isinstance(operation, dict):
            continue
        operation = dict(operation)
        if isinstance(operation.get("parameters"), list):
            operation["parameters"] = [_follow(p, root) for p in operation["parameters"]]
        if "requestBody" in operation:
            operation["requestBody"] = _follow(operation["requestBody"], root)
        if isinstance(operation.get("responses"), dict):
            operation["responses"] = {
                code: _follow(response, root)
                for code, response in operation["responses"].items()
            }
        item[method] = operation

    return item


def _follow(obj: Any, root: dict[str, Any]) -> Any:
    """Replace a ``{"$ref": ...}`` object by its target, following chains."""
    seen: set[str] = set()
    while isinstance(obj, dict) and "$ref" in obj:
        ref = obj["$ref"]
        if ref in seen:
            raise SpecParseError(f"Circular $ref '{ref}'")
        seen.add(ref)
        obj = _resolve_ref(ref, root)
    return obj


def _resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single local ``$ref`` string against the root spec.

    Handles RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Raises:
        SpecParseError: If the reference is external or any segment does
            not exist in the document.
    """
    if not isinstance(ref, str) or not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
            )
    return current


def _describe_validation_error(exc: ValidationError) -> str:
    """Render the first validation error as ``path: message``."""
    errors = exc.errors()
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<document>"
    message = f"Invalid spec at {location}: {first['msg']}"
    if len(errors) > 1:
        message += f" (and {len(errors) - 1} more error(s))"
    return message
