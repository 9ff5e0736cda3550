"""Identifier casing helpers shared by the language adapters.

Every helper first splits its input into words at separators (anything that
is not a letter or digit) and at CamelCase boundaries, so ``"petId"``,
``"pet-id"`` and ``"PET_ID"`` all split into ``["pet", "id"]`` (acronym runs
such as ``"XMLParser"`` split into ``["XML", "Parser"]``).

Example::

    >>> to_pascal_case("widget_list")
    'WidgetList'
    >>> to_camel_case("listWidgets")
    'listWidgets'
    >>> to_snake_case("X-Request-ID")
    'x_request_id'
    >>> python_identifier("class")
    'class_'
"""

from __future__ import annotations

import keyword
import re

_SEPARATOR_RE = re.compile(r"[^a-zA-Z0-9]+")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")


def split_words(text: str) -> list[str]:
    """Split *text* into words at separators and CamelCase boundaries."""
    result = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", text)
    result = _ACRONYM_BOUNDARY_RE.sub(r"\1 \2", result)
    return [word for word in _SEPARATOR_RE.split(result) if word]


def to_pascal_case(text: str) -> str:
    """Convert *text* to PascalCase (``"widget list"`` -> ``"WidgetList"``)."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def to_camel_case(text: str) -> str:
    """Convert *text* to camelCase (``"Widget List"`` -> ``"widgetList"``)."""
    pascal = to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def to_snake_case(text: str) -> str:
    """Convert *text* to snake_case (``"petId"`` -> ``"pet_id"``)."""
    return "_".join(word.lower() for word in split_words(text))


def guard_leading_digit(name: str) -> str:
    """Prefix *name* with ``_`` when it starts with a digit (``"2fa"`` -> ``"_2fa"``)."""
    if name[:1].isdigit():
        return f"_{name}"
    return name


def python_identifier(text: str, fallback: str = "param") -> str:
    """Convert *text* to a valid snake_case Python identifier.

    A leading digit gets an underscore prefix and Python keywords get a
    trailing underscore per PEP 8 convention.
    """
    result = guard_leading_digit(to_snake_case(text) or fallback)
    if keyword.iskeyword(result):
        result = f"{result}_"
    return result


def slugify(text: str) -> str:
    """Convert a title to a package/filename-safe slug.

    Lowercases, replaces non-alphanumeric characters with hyphens,
    and collapses consecutive hyphens.
    """
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")
