"""Build the language-agnostic :class:`~specsdk.models.ClientModel`.

The model builder walks a parsed :class:`~specsdk.models.ApiDocument` once
and produces the client model the renderer consumes: one
:class:`~specsdk.models.MethodModel` per operation and one
:class:`~specsdk.models.TypeModel` per component schema. All naming and type
spelling is delegated to the active
:class:`~specsdk.adapters.base.LanguageAdapter`, so this module knows nothing
about any particular target language.

Every mapping-derived sequence is sorted explicitly -- paths by string, verbs
by :class:`~specsdk.models.HTTPMethod` declaration order, component names by
string, response codes by string -- so the same document always yields the
same model.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from specsdk.models import (
    ApiDocument,
    ClientModel,
    HTTPMethod,
    MediaType,
    MethodModel,
    Operation,
    Parameter,
    ParameterLocation,
    ParameterModel,
    PathItem,
    PropertyModel,
    RequestBodyModel,
    Response,
    Schema,
    TypeKind,
    TypeModel,
    is_property_required,
)

if TYPE_CHECKING:
    from specsdk.adapters.base import LanguageAdapter

logger = logging.getLogger(__name__)


def build_client_model(
    document: ApiDocument, adapter: LanguageAdapter, project_name: str
) -> ClientModel:
    """Build the complete client model for *document*.

    Args:
        document: The parsed API document.
        adapter: The target-language adapter.
        project_name: Name used for the generated client and package.

    Returns:
        The frozen client model.

    Example::

        document = parse_document(load_spec("petstore.yaml"))
        model = build_client_model(document, TypeScriptAdapter(), "Petstore")
        print([m.name for m in model.methods])
    """
    methods = build_methods(document, adapter)
    types = build_types(document, adapter)
    logger.debug("Built client model: %d methods, %d types", len(methods), len(types))
    return ClientModel(
        project_name=project_name,
        description=document.info.description,
        version=document.info.version,
        base_url=document.base_url,
        methods=methods,
        types=types,
        dependencies=list(adapter.dependencies),
    )


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


def build_methods(document: ApiDocument, adapter: LanguageAdapter) -> list[MethodModel]:
    """Build one method per (path, verb), sorted by path then verb priority.

    Method names that collide after formatting get a numeric suffix
    (``getWidget``, ``getWidget2``) in iteration order.
    """
    methods: list[MethodModel] = []
    for path in sorted(document.paths):
        path_item = document.paths[path]
        for http_method, operation in path_item.operations():
            methods.append(
                build_method_model(path, http_method, operation, adapter, path_item)
            )
    return _unique_method_names(methods)


def build_method_model(
    path: str,
    http_method: HTTPMethod,
    operation: Operation,
    adapter: LanguageAdapter,
    path_item: Optional[PathItem] = None,
) -> MethodModel:
    """Build the method record for a single operation.

    Args:
        path: The path template as declared (``/pets/{petId}``).
        http_method: The operation's verb.
        operation: The operation object.
        adapter: The target-language adapter.
        path_item: The enclosing path item, whose path-level parameters are
            merged into the operation's.

    Returns:
        The method record. Parameters are deduplicated by ``(name, in)``
        keeping the first occurrence and sorted required-first, then by
        name.
    """
    inherited = path_item.parameters if path_item is not None else []
    parameters = _unique_parameter_names(
        [
            _build_parameter(param, adapter)
            for param in _dedupe_parameters(_merge_parameters(inherited, operation.parameters))
        ],
        adapter,
    )
    parameters.sort(key=lambda p: (not p.required, p.name))

    return MethodModel(
        name=adapter.format_method_name(operation.operation_id, http_method, operation.tags),
        http_method=http_method,
        path=adapter.format_path(path, http_method),
        raw_path=path,
        summary=operation.summary,
        description=operation.description,
        parameters=parameters,
        request_body=_build_request_body(operation, adapter),
        response_type=_response_type(operation, adapter),
    )


def _merge_parameters(
    path_params: list[Parameter], op_params: list[Parameter]
) -> list[Parameter]:
    """Merge path-level parameters into the operation's.

    Operation-level parameters override path-level ones with the same name
    and location. Operation parameters come first, in declared order.
    """
    op_keys = {(p.name, p.location) for p in op_params}
    return list(op_params) + [p for p in path_params if (p.name, p.location) not in op_keys]


def _dedupe_parameters(params: list[Parameter]) -> list[Parameter]:
    """Keep the first parameter for each ``(name, location)`` pair."""
    seen: set[tuple[str, ParameterLocation]] = set()
    result: list[Parameter] = []
    for param in params:
        key = (param.name, param.location)
        if key in seen:
            logger.debug("Dropping duplicate parameter %s (in %s)", param.name, param.location.value)
            continue
        seen.add(key)
        result.append(param)
    return result


def _unique_parameter_names(
    params: list[ParameterModel], adapter: LanguageAdapter
) -> list[ParameterModel]:
    """Rename parameters whose formatted names clash within one method.

    Path parameters keep their names because the path template refers to
    them. Any other clashing parameter is renamed after its name and
    location (``id`` in query -> ``idQuery`` / ``id_query``), with a numeric
    suffix if that is taken too. ``wire_name`` is never changed.
    """
    ordered = sorted(params, key=lambda p: p.location != ParameterLocation.PATH)
    taken: set[str] = set()
    result: list[ParameterModel] = []
    for param in ordered:
        if param.name in taken:
            base = adapter.format_parameter_name(f"{param.wire_name} {param.location.value}")
            candidate, counter = base, 2
            while candidate in taken:
                candidate = f"{base}{counter}"
                counter += 1
            logger.debug("Parameter name %s already used, renaming to %s", param.name, candidate)
            param = param.model_copy(update={"name": candidate})
        taken.add(param.name)
        result.append(param)
    return result


def _build_parameter(param: Parameter, adapter: LanguageAdapter) -> ParameterModel:
    return ParameterModel(
        name=adapter.format_parameter_name(param.name),
        wire_name=param.name,
        type=adapter.convert_type(param.schema_),
        location=param.location,
        # Path parameters are always required
        required=param.required or param.location == ParameterLocation.PATH,
        description=param.description,
    )


def _first_schema(content: dict[str, MediaType]) -> Optional[tuple[str, Schema]]:
    """Return the first ``(media type, schema)`` pair that declares a schema."""
    for media_type, entry in content.items():
        if entry.schema_ is not None:
            return media_type, entry.schema_
    return None


def _build_request_body(
    operation: Operation, adapter: LanguageAdapter
) -> Optional[RequestBodyModel]:
    body = operation.request_body
    if body is None:
        return None
    found = _first_schema(body.content)
    if found is None:
        # Declared but untyped: keep the argument, typed with the untyped marker
        return RequestBodyModel(
            type=adapter.syntax.untyped,
            required=body.required,
            content_type=next(iter(body.content), None),
        )
    content_type, schema = found
    return RequestBodyModel(
        type=adapter.convert_type(schema),
        required=body.required,
        content_type=content_type,
    )


def _response_type(operation: Operation, adapter: LanguageAdapter) -> str:
    """Type of the first 2xx response (ascending code order) with a schema.

    Only the first 2xx code is consulted; when it has no schema-bearing
    media type the result is the untyped marker.
    """
    success_codes = sorted(code for code in operation.responses if code.startswith("2"))
    if not success_codes:
        return adapter.syntax.untyped
    response: Response = operation.responses[success_codes[0]]
    found = _first_schema(response.content)
    if found is None:
        return adapter.syntax.untyped
    return adapter.convert_type(found[1])


def _unique_method_names(methods: list[MethodModel]) -> list[MethodModel]:
    """Suffix repeated names with the lowest free counter, starting at 2.

    Candidates are checked against every name in the catalog, so a derived
    ``getWidget2`` never collides with an explicit one.
    """
    taken = {method.name for method in methods}
    emitted: set[str] = set()
    result: list[MethodModel] = []
    for method in methods:
        if method.name in emitted:
            counter = 2
            while f"{method.name}{counter}" in taken:
                counter += 1
            renamed = f"{method.name}{counter}"
            taken.add(renamed)
            logger.debug("Method name %s already used, renaming to %s", method.name, renamed)
            method = method.model_copy(update={"name": renamed})
        emitted.add(method.name)
        result.append(method)
    return result


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def build_types(document: ApiDocument, adapter: LanguageAdapter) -> list[TypeModel]:
    """Build one named type per component schema, sorted by component name.

    Objects with properties become structural types; everything else
    (including objects without properties) becomes an alias of the converted
    type expression.
    """
    schemas = document.components.schemas
    return [build_type_model(name, schemas[name], adapter) for name in sorted(schemas)]


def build_type_model(name: str, schema: Schema, adapter: LanguageAdapter) -> TypeModel:
    """Build the type record for one component schema."""
    type_name = adapter.format_type_name(name)
    if not schema.ref and schema.type == "object" and schema.properties:
        properties = [
            PropertyModel(
                name=adapter.format_property_name(prop_name),
                type=adapter.convert_type(prop_schema),
                required=is_property_required(schema.required, prop_name),
            )
            for prop_name, prop_schema in schema.properties.items()
        ]
        return TypeModel(name=type_name, kind=TypeKind.STRUCTURE, properties=properties)

    return TypeModel(
        name=type_name, kind=TypeKind.ALIAS, expression=adapter.convert_type(schema)
    )
