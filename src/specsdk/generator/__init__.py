"""Client generator -- turn a parsed document into rendered source files.

This sub-package is the second half of the specsdk pipeline: taking an
:class:`~specsdk.models.ApiDocument` (produced by the parser) and a language
adapter, building the language-agnostic client model, and rendering it.

Sub-modules:

* :mod:`~specsdk.generator.naming` -- casing helpers shared by adapters.
* :mod:`~specsdk.generator.type_converter` -- schema node to type expression.
* :mod:`~specsdk.generator.model_builder` -- document to
  :class:`~specsdk.models.ClientModel`.
* :mod:`~specsdk.generator.renderer` -- Jinja2 rendering of the manifest.
* :mod:`~specsdk.generator.writer` -- atomic file output.
* :mod:`~specsdk.generator.pipeline` -- the end-to-end run (import it
  directly; it depends on :mod:`specsdk.adapters`).
"""

from specsdk.generator.model_builder import build_client_model
from specsdk.generator.renderer import RenderedFile, TemplateRenderer
from specsdk.generator.type_converter import convert_type
from specsdk.generator.writer import write_files

__all__ = [
    "RenderedFile",
    "TemplateRenderer",
    "build_client_model",
    "convert_type",
    "write_files",
]
