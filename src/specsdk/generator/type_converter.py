"""Convert schema nodes into target-language type expressions.

:func:`convert_type` is a pure, recursive, total function: every node maps to
*some* type expression, and shapes it does not understand degrade to the
adapter's untyped marker instead of failing. Resolution order, first match
wins:

1. no node -> untyped
2. ``$ref`` -> the formatted component name (resolved by name, never inlined)
3. ``oneOf`` -> union of the members
4. ``allOf`` -> intersection of the members
5. ``anyOf`` -> union of the members
6. dispatch on ``type`` (string/enum, integer, number, boolean, array, object)

Composition and primitive dispatch are exclusive tiers: once a composition
list matches, ``type`` on the same node is not consulted.

The spellings themselves come from the adapter's :class:`TypeSyntax`, so the
same algorithm serves every target language.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from specsdk.models import Schema

if TYPE_CHECKING:
    from specsdk.adapters.base import LanguageAdapter

COMPONENT_SCHEMA_PREFIX = "#/components/schemas/"


class TypeSyntax(ABC):
    """Language-specific spellings used by :func:`convert_type`.

    Subclasses set the primitive spellings as class attributes and implement
    the combinators.
    """

    untyped: str
    string: str
    integer: str
    number: str
    boolean: str
    open_map: str

    @abstractmethod
    def array_of(self, item: str) -> str:
        """Spell an array whose elements have type *item*."""

    @abstractmethod
    def union(self, members: list[str]) -> str:
        """Spell the logical "or" of *members*, keeping their order."""

    @abstractmethod
    def intersection(self, members: list[str]) -> str:
        """Spell the logical "and" of *members*, keeping their order."""

    @abstractmethod
    def literal_union(self, values: list[Any]) -> str:
        """Spell a union of literal values, keeping enum order."""

    @abstractmethod
    def inline_object(self, fields: list[tuple[str, str]]) -> str:
        """Spell an anonymous object type from ``(name, type)`` pairs."""


def ref_name(ref: str) -> str:
    """Return the bare component name a ``$ref`` points at.

    ``#/components/schemas/Widget`` yields ``Widget``; any other pointer
    yields its last segment.
    """
    if ref.startswith(COMPONENT_SCHEMA_PREFIX):
        return ref[len(COMPONENT_SCHEMA_PREFIX):]
    return ref.rsplit("/", 1)[-1]


def convert_type(schema: Optional[Schema], adapter: LanguageAdapter) -> str:
    """Convert *schema* to a type expression in the adapter's language.

    Args:
        schema: The schema node, or ``None`` when the document declares none.
        adapter: Supplies the :class:`TypeSyntax` and type-name casing.

    Returns:
        The type expression string.

    Example::

        >>> convert_type(Schema(type="string", enum=["a", "b"]), TypeScriptAdapter())
        "'a' | 'b'"
        >>> convert_type(Schema(**{"$ref": "#/components/schemas/pet"}), TypeScriptAdapter())
        'Pet'
    """
    syntax = adapter.syntax
    if schema is None:
        return syntax.untyped

    if schema.ref:
        return adapter.format_type_name(ref_name(schema.ref))

    if schema.one_of:
        return syntax.union([convert_type(member, adapter) for member in schema.one_of])
    if schema.all_of:
        return syntax.intersection(
            [convert_type(member, adapter) for member in schema.all_of]
        )
    if schema.any_of:
        return syntax.union([convert_type(member, adapter) for member in schema.any_of])

    return _convert_kind(schema, adapter)


def _convert_kind(schema: Schema, adapter: LanguageAdapter) -> str:
    """Dispatch on the primitive ``type`` tag of a non-reference node."""
    syntax = adapter.syntax
    kind = schema.type

    if kind == "string":
        if schema.enum:
            return syntax.literal_union(schema.enum)
        return syntax.string
    if kind == "integer":
        return syntax.integer
    if kind == "number":
        return syntax.number
    if kind == "boolean":
        return syntax.boolean

    if kind == "array":
        items = schema.items
        if items is None:
            return syntax.array_of(syntax.untyped)
        if items.ref:
            # Flat reference name, no second pass through convert_type
            return syntax.array_of(adapter.format_type_name(ref_name(items.ref)))
        return syntax.array_of(convert_type(items, adapter))

    if kind == "object":
        if not schema.properties:
            return syntax.open_map
        return syntax.inline_object(
            [
                (adapter.format_property_name(name), convert_type(prop, adapter))
                for name, prop in schema.properties.items()
            ]
        )

    return syntax.untyped
