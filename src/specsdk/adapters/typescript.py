"""TypeScript language adapter.

Generates an axios-based client: a ``client.ts`` with one async method per
operation, a ``types.ts`` holding an ``export interface`` per structural
component schema and an ``export type`` per alias, plus ``index.ts``,
``package.json``, ``tsconfig.json`` and a README.
"""

from __future__ import annotations

import re
from typing import Any

from specsdk.adapters.base import LanguageAdapter
from specsdk.generator.naming import guard_leading_digit, to_camel_case, to_pascal_case
from specsdk.generator.type_converter import TypeSyntax
from specsdk.models import ClientModel, HTTPMethod, MethodModel, ParameterLocation

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends", "false",
        "finally", "for", "function", "if", "import", "in", "instanceof", "new",
        "null", "return", "super", "switch", "this", "throw", "true", "try",
        "typeof", "var", "void", "while", "with",
    }
)

BODY_ARGUMENT = "data"
"""Name of the request-body argument in generated method signatures."""

_DEPENDENCY_VERSIONS = {"axios": "^1.6.0"}

# Members of the generated client class that operations must not shadow
_CLIENT_MEMBERS = frozenset({"client", "constructor", "setAuthToken", "removeAuthToken"})


def _is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))


def _group(expression: str) -> str:
    """Parenthesise *expression* when it is itself a union or intersection."""
    if " | " in expression or " & " in expression:
        return f"({expression})"
    return expression


def _literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class TypeScriptSyntax(TypeSyntax):
    """TypeScript spellings for :func:`~specsdk.generator.type_converter.convert_type`."""

    untyped = "any"
    string = "string"
    integer = "number"
    number = "number"
    boolean = "boolean"
    open_map = "Record<string, any>"

    def array_of(self, item: str) -> str:
        return f"{_group(item)}[]"

    def union(self, members: list[str]) -> str:
        return " | ".join(members)

    def intersection(self, members: list[str]) -> str:
        return " & ".join(_group(member) for member in members)

    def literal_union(self, values: list[Any]) -> str:
        return " | ".join(_literal(value) for value in values)

    def inline_object(self, fields: list[tuple[str, str]]) -> str:
        rendered = "; ".join(
            f"{name if _is_identifier(name) else _literal(name)}: {type_}"
            for name, type_ in fields
        )
        return f"{{ {rendered} }}"


class TypeScriptAdapter(LanguageAdapter):
    """Adapter producing an axios-based TypeScript client."""

    aliases = ("ts",)
    syntax = TypeScriptSyntax()

    @property
    def name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return "ts"

    @property
    def dependencies(self) -> list[str]:
        return list(_DEPENDENCY_VERSIONS)

    @property
    def dependency_versions(self) -> dict[str, str]:
        return dict(_DEPENDENCY_VERSIONS)

    @property
    def manifest(self) -> list[str]:
        return ["package.json", "tsconfig.json", "client", "types", "index", "README.md"]

    def method_case(self, text: str) -> str:
        """camelCase *text*, renaming anything that would shadow a client member."""
        result = guard_leading_digit(to_camel_case(text) or self.method_suffix)
        if result in _CLIENT_MEMBERS:
            result = f"{result}_"
        return result

    def format_type_name(self, name: str) -> str:
        return guard_leading_digit(to_pascal_case(name) or "Model")

    def format_parameter_name(self, name: str) -> str:
        """Keep valid identifiers as-is; camelCase anything else."""
        result = name if _is_identifier(name) else to_camel_case(name) or "param"
        result = guard_leading_digit(result)
        if result in _RESERVED_WORDS or result == BODY_ARGUMENT:
            result = f"{result}_"
        return result

    def format_path(self, path: str, http_method: HTTPMethod) -> str:
        """``/pets/{petId}`` -> ``/pets/${petId}`` for use in a template literal."""
        return self.rewrite_placeholders(
            path, lambda name: "${" + self.format_parameter_name(name) + "}"
        )

    def get_template_data(self, model: ClientModel) -> dict[str, Any]:
        data = super().get_template_data(model)
        data["method_views"] = [self._method_view(method) for method in model.methods]
        data["type_names"] = [type_.name for type_ in model.types]
        data["property_key"] = lambda name: name if _is_identifier(name) else _literal(name)
        return data

    def _method_view(self, method: MethodModel) -> dict[str, Any]:
        """Flatten a method into the pieces ``client.ts.j2`` renders."""
        required = [p for p in method.parameters if p.required]
        optional = [p for p in method.parameters if not p.required]
        body = method.request_body

        arguments = [f"{p.name}: {p.type}" for p in required]
        if body is not None and body.required:
            arguments.append(f"{BODY_ARGUMENT}: {body.type}")
        arguments.extend(f"{p.name}?: {p.type}" for p in optional)
        if body is not None and not body.required:
            arguments.append(f"{BODY_ARGUMENT}?: {body.type}")

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
            "response_type": method.response_type,
        }
