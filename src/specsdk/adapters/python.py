"""Python language adapter.

Generates an httpx-based client package: ``client.py`` with a synchronous
client class, ``models.py`` with a ``TypedDict`` per structural component
schema and a ``TypeAlias`` per alias, ``__init__.py``, ``pyproject.toml`` and
a README.

Generated modules use ``from __future__ import annotations`` and alias values
are emitted as strings, so models may reference each other in any order.
"""

from __future__ import annotations

import keyword
from typing import Any

from specsdk.adapters.base import LanguageAdapter
from specsdk.generator.naming import (
    guard_leading_digit,
    python_identifier,
    to_pascal_case,
    to_snake_case,
)
from specsdk.generator.type_converter import TypeSyntax
from specsdk.models import ClientModel, HTTPMethod, MethodModel, ParameterLocation

BODY_ARGUMENT = "body"
"""Name of the request-body argument in generated method signatures."""

_DEPENDENCY_VERSIONS = {"httpx": ">=0.25"}

# Members of the generated client class that operations must not shadow
_CLIENT_MEMBERS = frozenset({"close", "set_auth_token", "remove_auth_token"})


def _is_plain_identifier(name: str) -> bool:
    """Whether *name* can be a class-syntax ``TypedDict`` field."""
    return name.isidentifier() and not keyword.iskeyword(name)


class PythonSyntax(TypeSyntax):
    """Python spellings for :func:`~specsdk.generator.type_converter.convert_type`.

    Python has no structural intersection type: an ``allOf`` with a single
    member collapses to that member and anything else becomes an open dict.
    Anonymous inline objects are open dicts too.
    """

    untyped = "Any"
    string = "str"
    integer = "int"
    number = "float"
    boolean = "bool"
    open_map = "dict[str, Any]"

    def array_of(self, item: str) -> str:
        return f"list[{item}]"

    def union(self, members: list[str]) -> str:
        return " | ".join(members)

    def intersection(self, members: list[str]) -> str:
        if len(members) == 1:
            return members[0]
        return self.open_map

    def literal_union(self, values: list[Any]) -> str:
        return f"Literal[{', '.join(repr(value) for value in values)}]"

    def inline_object(self, fields: list[tuple[str, str]]) -> str:
        return self.open_map


class PythonAdapter(LanguageAdapter):
    """Adapter producing an httpx-based Python client package."""

    aliases = ("py",)
    syntax = PythonSyntax()

    @property
    def name(self) -> str:
        return "python"

    @property
    def file_extension(self) -> str:
        return "py"

    @property
    def dependencies(self) -> list[str]:
        return list(_DEPENDENCY_VERSIONS)

    @property
    def dependency_versions(self) -> dict[str, str]:
        return dict(_DEPENDENCY_VERSIONS)

    @property
    def manifest(self) -> list[str]:
        return ["pyproject.toml", "client", "models", "__init__", "README.md"]

    def method_case(self, text: str) -> str:
        """snake_case *text*, renaming anything that would shadow a client member."""
        result = python_identifier(text, fallback=self.method_suffix)
        if result in _CLIENT_MEMBERS:
            result = f"{result}_"
        return result

    def format_type_name(self, name: str) -> str:
        return guard_leading_digit(to_pascal_case(name) or "Model")

    def format_parameter_name(self, name: str) -> str:
        result = python_identifier(name)
        if result in (BODY_ARGUMENT, "self"):
            result = f"{result}_"
        return result

    def format_path(self, path: str, http_method: HTTPMethod) -> str:
        """``/pets/{petId}`` -> ``/pets/{pet_id}`` for use in an f-string."""
        return self.rewrite_placeholders(
            path, lambda name: "{" + self.format_parameter_name(name) + "}"
        )

    def package_name(self, model: ClientModel) -> str:
        return guard_leading_digit(f"{to_snake_case(model.project_name) or 'api'}_client")

    def get_template_data(self, model: ClientModel) -> dict[str, Any]:
        data = super().get_template_data(model)
        data["distribution_name"] = data["package_name"].strip("_").replace("_", "-")
        data["method_views"] = [self._method_view(method) for method in model.methods]
        data["type_names"] = [type_.name for type_ in model.types]
        data["is_identifier"] = _is_plain_identifier
        data["py_repr"] = repr
        return data

    def _method_view(self, method: MethodModel) -> dict[str, Any]:
        """Flatten a method into the pieces ``client.py.j2`` renders."""
        required = [p for p in method.parameters if p.required]
        optional = [p for p in method.parameters if not p.required]
        body = method.request_body

        arguments = ["self"]
        arguments.extend(f"{p.name}: {p.type}" for p in required)
        if body is not None and body.required:
            arguments.append(f"{BODY_ARGUMENT}: {body.type}")
        arguments.extend(f"{p.name}: {p.type} | None = None" for p in optional)
        if body is not None and not body.required:
            arguments.append(f"{BODY_ARGUMENT}: {body.type} | None = None")

        return {
            "name": method.name,
            "http_method": method.http_method.value,
            "path": method.path,
            "summary": method.summary,
            "description": method.description,
            "signature": ", ".join(arguments),
            "query_params": [
                p for p in method.parameters if p.location == ParameterLocation.QUERY
            ],
            "header_params": [
                p for p in method.parameters if p.location == ParameterLocation.HEADER
            ],
            "has_body": body is not None,
            "body_argument": BODY_ARGUMENT,
            "content_type": body.content_type if body is not None else None,
            "response_type": method.response_type,
        }
