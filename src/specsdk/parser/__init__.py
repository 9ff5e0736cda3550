"""OpenAPI spec parser -- acquire a document and validate it into models.

This sub-package is responsible for the first half of the specsdk pipeline:
turning a raw OpenAPI 3.x document (JSON or YAML, local file, remote URL, or
stdin) into an :class:`~specsdk.models.ApiDocument` that the model builder
can consume.

Typical usage::

    from specsdk.parser import load_spec, parse_document

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    document = parse_document(raw)

Sub-modules:

* :mod:`~specsdk.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection.
* :mod:`~specsdk.parser.extractor` -- Validation into the frozen document
  models, with field-path error reporting.
"""

from specsdk.parser.extractor import parse_document
from specsdk.parser.loader import load_spec

__all__ = ["load_spec", "parse_document"]
