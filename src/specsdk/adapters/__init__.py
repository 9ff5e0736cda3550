"""Language adapters -- per-language naming, type spelling and template data."""

from specsdk.adapters.base import LanguageAdapter
from specsdk.adapters.python import PythonAdapter
from specsdk.adapters.registry import available_adapters, get_adapter
from specsdk.adapters.typescript import TypeScriptAdapter

__all__ = [
    "LanguageAdapter",
    "PythonAdapter",
    "TypeScriptAdapter",
    "available_adapters",
    "get_adapter",
]
