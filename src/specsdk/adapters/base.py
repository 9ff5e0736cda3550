"""Abstract base class for specsdk language adapters.

A language adapter is the per-target-language implementation of the
capability contract the generator depends on. The model builder and the type
converter only ever talk to :class:`LanguageAdapter`; adding a new target
language means adding a new subclass (and its templates), nothing else.

Every adapter must implement:

* :attr:`~LanguageAdapter.name`, :attr:`~LanguageAdapter.file_extension`,
  :attr:`~LanguageAdapter.dependencies` and :attr:`~LanguageAdapter.manifest`
  -- static metadata.
* :attr:`~LanguageAdapter.syntax` -- the
  :class:`~specsdk.generator.type_converter.TypeSyntax` spelling primitive
  and composite types.
* :meth:`~LanguageAdapter.method_case`,
  :meth:`~LanguageAdapter.format_type_name` and
  :meth:`~LanguageAdapter.format_path` -- naming and path conventions.

:meth:`~LanguageAdapter.convert_type`,
:meth:`~LanguageAdapter.format_method_name`,
:meth:`~LanguageAdapter.format_property_name`,
:meth:`~LanguageAdapter.format_parameter_name` and
:meth:`~LanguageAdapter.get_template_data` have working defaults.

Adapters are registered as entry points in the ``specsdk.adapters`` group
and discovered at runtime by :mod:`specsdk.adapters.registry`.

Example:
    Minimal adapter implementation::

        class KotlinAdapter(LanguageAdapter):
            aliases = ("kt",)
            syntax = KotlinSyntax()

            @property
            def name(self) -> str:
                return "kotlin"
            ...
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from specsdk.generator.naming import guard_leading_digit, slugify, to_pascal_case
from specsdk.generator.type_converter import TypeSyntax, convert_type
from specsdk.models import ClientModel, HTTPMethod, Schema

_PATH_PARAM_RE = re.compile(r"\{([^{}]+)\}")


class LanguageAdapter(ABC):
    """Base class for all specsdk language adapters.

    Subclasses must implement the abstract members. Alternative names the
    adapter answers to on the command line go in :attr:`aliases`.

    See Also:
        :func:`~specsdk.adapters.registry.get_adapter` for how a language
        name is turned into an adapter instance.
    """

    aliases: tuple[str, ...] = ()
    """Additional lookup names (e.g. ``("ts",)``)."""

    method_suffix: str = "request"
    """Word appended to the verb when a method has no id and no tags."""

    syntax: TypeSyntax

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the canonical language name (e.g. ``"typescript"``)."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the source file extension without the dot (e.g. ``"ts"``)."""
        ...

    @property
    @abstractmethod
    def dependencies(self) -> list[str]:
        """Return the external libraries the generated client depends on."""
        ...

    @property
    def dependency_versions(self) -> dict[str, str]:
        """Return the version constraint of each entry in :attr:`dependencies`.

        Dependencies missing from the mapping are left unpinned.
        """
        return {}

    @property
    @abstractmethod
    def manifest(self) -> list[str]:
        """Return the output file keys, each rendered from ``<key>.j2``.

        Keys without a ``.`` get :attr:`file_extension` appended to form the
        output path.
        """
        ...

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def convert_type(self, schema: Optional[Schema]) -> str:
        """Convert a schema node to a type expression in this language."""
        return convert_type(schema, self)

    @abstractmethod
    def format_type_name(self, name: str) -> str:
        """Format a component schema name as a type name."""
        ...

    def format_property_name(self, name: str) -> str:
        """Format a property name of a structural type. Identity by default."""
        return name

    def format_parameter_name(self, name: str) -> str:
        """Format a call-site parameter name. Defaults to property formatting."""
        return self.format_property_name(name)

    # ------------------------------------------------------------------
    # Methods and paths
    # ------------------------------------------------------------------

    @abstractmethod
    def method_case(self, text: str) -> str:
        """Apply the language's method-name casing to *text*."""
        ...

    def format_method_name(
        self, operation_id: Optional[str], http_method: HTTPMethod, tags: list[str]
    ) -> str:
        """Build a method name for an operation.

        Uses the ``operationId`` when present; otherwise the first tag plus
        the verb (``widgets`` + ``get`` -> ``widgetsGet``); otherwise the verb
        plus :attr:`method_suffix` (``getRequest``).
        """
        if operation_id:
            return self.method_case(operation_id)
        if tags:
            return self.method_case(f"{tags[0]} {http_method.value}")
        return self.method_case(f"{http_method.value} {self.method_suffix}")

    @abstractmethod
    def format_path(self, path: str, http_method: HTTPMethod) -> str:
        """Rewrite ``{param}`` placeholders into the language's interpolation syntax."""
        ...

    def rewrite_placeholders(self, path: str, replace: Callable[[str], str]) -> str:
        """Replace every ``{name}`` placeholder in *path* with ``replace(name)``."""
        return _PATH_PARAM_RE.sub(lambda match: replace(match.group(1)), path)

    # ------------------------------------------------------------------
    # Template data
    # ------------------------------------------------------------------

    def client_class_name(self, model: ClientModel) -> str:
        """Name of the generated client class (``"Petstore"`` -> ``"PetstoreClient"``)."""
        return guard_leading_digit(f"{to_pascal_case(model.project_name)}Client")

    def package_name(self, model: ClientModel) -> str:
        """Distribution name of the generated client package."""
        return f"{slugify(model.project_name)}-client"

    def get_template_data(self, model: ClientModel) -> dict[str, Any]:
        """Build the variables available to every template of this language.

        Subclasses typically call ``super()`` and add language-specific views.
        """
        return {
            "model": model,
            "project_name": model.project_name,
            "description": model.description or "",
            "version": model.version,
            "base_url": model.base_url or "",
            "methods": model.methods,
            "types": model.types,
            "dependencies": model.dependencies,
            "dependency_versions": self.dependency_versions,
            "client_class_name": self.client_class_name(model),
            "package_name": self.package_name(model),
            "language": self.name,
        }
