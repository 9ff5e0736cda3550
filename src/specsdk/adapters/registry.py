"""Adapter registry -- turn a language name into a :class:`LanguageAdapter`.

The built-in TypeScript and Python adapters are always available. Third-party
packages can add languages by declaring an entry point in the
``specsdk.adapters`` group whose target is a
:class:`~specsdk.adapters.base.LanguageAdapter` subclass::

    [project.entry-points."specsdk.adapters"]
    kotlin = "specsdk_kotlin:KotlinAdapter"

Lookups are case-insensitive and honour each adapter's
:attr:`~specsdk.adapters.base.LanguageAdapter.aliases`.
"""

from __future__ import annotations

import importlib.metadata
import logging

from specsdk.adapters.base import LanguageAdapter
from specsdk.adapters.python import PythonAdapter
from specsdk.adapters.typescript import TypeScriptAdapter
from specsdk.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "specsdk.adapters"
"""The entry-point group name used for adapter discovery."""

BUILTIN_ADAPTERS: tuple[type[LanguageAdapter], ...] = (TypeScriptAdapter, PythonAdapter)


def _discover_entry_point_adapters() -> list[LanguageAdapter]:
    """Load adapters registered under :data:`ENTRY_POINT_GROUP`.

    Entry points that fail to import or instantiate are logged as warnings
    and skipped.
    """
    adapters: list[LanguageAdapter] = []
    for ep in importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP):
        try:
            adapter_cls = ep.load()
            adapter = adapter_cls()
        except Exception as exc:
            logger.warning("Failed to load adapter '%s': %s", ep.name, exc)
            continue
        if not isinstance(adapter, LanguageAdapter):
            logger.warning(
                "Entry point '%s' is not a LanguageAdapter, skipping", ep.name
            )
            continue
        logger.debug("Discovered adapter '%s' from entry point '%s'", adapter.name, ep.name)
        adapters.append(adapter)
    return adapters


def available_adapters() -> list[LanguageAdapter]:
    """Return one instance of every known adapter, sorted by name.

    Built-in adapters win over entry points registering the same name.
    """
    by_name: dict[str, LanguageAdapter] = {}
    for adapter in [cls() for cls in BUILTIN_ADAPTERS] + _discover_entry_point_adapters():
        key = adapter.name.lower()
        if key in by_name:
            logger.debug("Adapter '%s' already registered, skipping duplicate", key)
            continue
        by_name[key] = adapter
    return [by_name[name] for name in sorted(by_name)]


def get_adapter(language: str) -> LanguageAdapter:
    """Look up the adapter for *language* (name or alias, any case).

    Raises:
        ConfigurationError: If no adapter answers to *language*. The message
            lists the supported languages.
    """
    wanted = language.strip().lower()
    adapters = available_adapters()
    for adapter in adapters:
        names = {adapter.name.lower(), *(alias.lower() for alias in adapter.aliases)}
        if wanted in names:
            return adapter

    supported = ", ".join(adapter.name for adapter in adapters)
    raise ConfigurationError(
        f"Unsupported language '{language}'. Supported languages: {supported}"
    )
