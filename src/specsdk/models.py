"""Canonical Pydantic models shared across all specsdk modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration model** -- the resolved inputs of one generation run:
    :class:`GeneratorConfig`.

**Document models** -- the subset of an OpenAPI 3.x document the generator
consumes, produced by :func:`~specsdk.parser.extractor.parse_document`:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`Schema`,
    :class:`Parameter`, :class:`MediaType`, :class:`RequestBody`,
    :class:`Response`, :class:`Operation`, :class:`PathItem`, :class:`Info`,
    :class:`Server`, :class:`Components`, and :class:`ApiDocument`.

**Client models** -- the language-agnostic intermediate representation built
by :mod:`specsdk.generator.model_builder` and consumed by the renderer:
    :class:`ParameterModel`, :class:`RequestBodyModel`, :class:`MethodModel`,
    :class:`PropertyModel`, :class:`TypeKind`, :class:`TypeModel`, and
    :class:`ClientModel`.

Unmodeled keywords in the source document are ignored (Pydantic's default
``extra="ignore"``). Document and client models are frozen: they are created
once and read-only thereafter.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from specsdk.exceptions import SpecParseError


# --- Generator Config ---


class GeneratorConfig(BaseModel):
    """Inputs of a single generation run.

    Built by :func:`~specsdk.config.resolve_config` from CLI flags,
    environment variables, the project file, and defaults.
    """

    spec: str = Field(description="File path, http(s) URL, or '-' for stdin")
    project_name: str = Field(description="Name used for the client class and package")
    output_dir: str = Field(
        default="./generated-client", description="Directory for generated files"
    )
    language: str = Field(default="typescript", description="Target language adapter")
    templates_dir: Optional[str] = Field(
        default=None, description="Root of <language>/<key>.j2 template overrides"
    )
    timeout: float = Field(default=30.0, description="URL fetch timeout in seconds")


# --- Required Marker ---


class AllRequired(BaseModel):
    """A ``required: true|false`` marker applying to every property."""

    model_config = ConfigDict(frozen=True)

    value: bool

    def is_required(self, name: str) -> bool:
        return self.value


class RequiredNames(BaseModel):
    """A ``required: [...]`` marker naming the required properties."""

    model_config = ConfigDict(frozen=True)

    names: frozenset[str] = Field(default_factory=frozenset)

    def is_required(self, name: str) -> bool:
        return name in self.names


RequiredMarker = Union[AllRequired, RequiredNames]


def _decode_required(value: Any) -> RequiredMarker:
    """Decode a raw marker as a boolean first, then as a list of names.

    Raises:
        ValueError: If *value* is neither.
    """
    if isinstance(value, (AllRequired, RequiredNames)):
        return value
    if isinstance(value, bool):
        return AllRequired(value=value)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return RequiredNames(names=frozenset(value))
    raise ValueError(
        "required must be a boolean or a list of property names "
        f"(got {type(value).__name__})"
    )


def decode_required(value: Any) -> RequiredMarker:
    """Decode a schema's raw ``required`` value into a tagged marker.

    A boolean decodes to :class:`AllRequired`; a sequence of strings decodes
    to :class:`RequiredNames`. Anything else (an object, a number, a bare
    string, a list holding non-strings) is a decode error.

    Args:
        value: The raw ``required`` value from the document.

    Returns:
        The decoded :class:`AllRequired` or :class:`RequiredNames` marker.

    Raises:
        SpecParseError: If *value* is neither a boolean nor a list of strings.

    Example::

        >>> decode_required(["id", "name"]).is_required("id")
        True
        >>> decode_required(False).is_required("id")
        False
    """
    try:
        return _decode_required(value)
    except ValueError as exc:
        raise SpecParseError(str(exc)) from exc


def is_property_required(marker: Optional[RequiredMarker], name: str) -> bool:
    """Return whether property *name* is required under *marker*.

    An absent marker means no property is required.
    """
    if marker is None:
        return False
    return marker.is_required(name)


# --- Document Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods the generator emits client methods for.

    Declaration order is the fixed priority used when several methods are
    declared on the same path.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class Schema(BaseModel):
    """One node of the document's type graph.

    When ``ref`` is set the node denotes "the named component schema" and
    every other structural field is ignored by the type converter. ``format``
    and ``additional_properties`` are carried through but not interpreted.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    properties: Optional[dict[str, Schema]] = None
    items: Optional[Schema] = None
    required: Optional[RequiredMarker] = None
    ref: Optional[str] = Field(default=None, alias="$ref")
    all_of: list[Schema] = Field(default_factory=list, alias="allOf")
    one_of: list[Schema] = Field(default_factory=list, alias="oneOf")
    any_of: list[Schema] = Field(default_factory=list, alias="anyOf")
    enum: Optional[list[Any]] = None
    additional_properties: Any = Field(default=None, alias="additionalProperties")

    @field_validator("type", mode="before")
    @classmethod
    def _first_non_null_type(cls, value: Any) -> Any:
        # OpenAPI 3.1 allows type arrays such as ["string", "null"]
        if isinstance(value, list):
            non_null = [t for t in value if t != "null"]
            return non_null[0] if non_null else None
        return value

    @field_validator("required", mode="before")
    @classmethod
    def _decode_required_marker(cls, value: Any) -> Any:
        if value is None:
            return None
        return _decode_required(value)


class Parameter(BaseModel):
    """An OpenAPI *Parameter Object*."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    location: ParameterLocation = Field(alias="in")
    required: bool = False
    description: Optional[str] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")


class MediaType(BaseModel):
    """An entry of a ``content`` map, keyed by media type."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    """An OpenAPI *Request Body Object*."""

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)
    required: bool = False


class Response(BaseModel):
    """An OpenAPI *Response Object*."""

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)


class Operation(BaseModel):
    """A single operation (one path + HTTP method pair)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)
    deprecated: bool = False

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        # YAML documents frequently spell status codes as bare integers
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class PathItem(BaseModel):
    """The operations available on a single path."""

    model_config = ConfigDict(frozen=True)

    get: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    delete: Optional[Operation] = None
    patch: Optional[Operation] = None
    parameters: list[Parameter] = Field(default_factory=list)

    def operations(self) -> list[tuple[HTTPMethod, Operation]]:
        """Return the declared operations in fixed method priority order."""
        result: list[tuple[HTTPMethod, Operation]] = []
        for method in HTTPMethod:
            operation = getattr(self, method.value)
            if operation is not None:
                result.append((method, operation))
        return result


class Info(BaseModel):
    """API metadata from the document's *Info Object*."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: Optional[str] = None
    version: str = ""


class Server(BaseModel):
    """A server entry from the document's ``servers`` array."""

    model_config = ConfigDict(frozen=True)

    url: str
    description: Optional[str] = None


class Components(BaseModel):
    """The ``components`` section; only ``schemas`` is consumed."""

    model_config = ConfigDict(frozen=True)

    schemas: dict[str, Schema] = Field(default_factory=dict)


class ApiDocument(BaseModel):
    """The parsed subset of an OpenAPI document.

    Component schemas are held once in :attr:`Components.schemas`; every
    ``$ref`` elsewhere in the document refers to them by name only.
    """

    model_config = ConfigDict(frozen=True)

    openapi: Optional[str] = None
    info: Info = Field(default_factory=Info)
    servers: list[Server] = Field(default_factory=list)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @property
    def base_url(self) -> Optional[str]:
        """URL of the first declared server, if any."""
        return self.servers[0].url if self.servers else None


# --- Client Models ---


class ParameterModel(BaseModel):
    """A call-site parameter of a generated client method.

    ``name`` is formatted by the active adapter; ``wire_name`` is the name
    sent over HTTP.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    wire_name: str
    type: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None


class RequestBodyModel(BaseModel):
    """The request body accepted by a generated client method."""

    model_config = ConfigDict(frozen=True)

    type: str
    required: bool = False
    content_type: Optional[str] = None


class MethodModel(BaseModel):
    """One generated client method (one path + HTTP method pair)."""

    model_config = ConfigDict(frozen=True)

    name: str
    http_method: HTTPMethod
    path: str = Field(description="Path template in the target language's syntax")
    raw_path: str = Field(description="Path as declared in the document")
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[ParameterModel] = Field(default_factory=list)
    request_body: Optional[RequestBodyModel] = None
    response_type: str


class PropertyModel(BaseModel):
    """A named field of a structural type."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    required: bool = False


class TypeKind(str, enum.Enum):
    """Whether a named type is an object with named fields or an alias."""

    STRUCTURE = "structure"
    ALIAS = "alias"


class TypeModel(BaseModel):
    """A named type generated from a component schema.

    Structural types carry an ordered property list and no expression;
    aliases carry the converted type expression.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: TypeKind
    expression: Optional[str] = None
    properties: list[PropertyModel] = Field(default_factory=list)

    @property
    def is_structure(self) -> bool:
        return self.kind == TypeKind.STRUCTURE


class ClientModel(BaseModel):
    """The complete language-agnostic model of a generated client.

    Built in one pass by :func:`~specsdk.generator.model_builder.build_client_model`
    and consumed once by the renderer. All sequences are in a deterministic
    order so that rendering the same document twice yields identical text.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str
    description: Optional[str] = None
    version: str = ""
    base_url: Optional[str] = None
    methods: list[MethodModel] = Field(default_factory=list)
    types: list[TypeModel] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
