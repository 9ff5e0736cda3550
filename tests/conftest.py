"""Shared test fixtures for specsdk.

Provides reusable fixtures for loading the widget-store document, building
adapters, and managing output state. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specsdk.adapters.python import PythonAdapter
from specsdk.adapters.typescript import TypeScriptAdapter
from specsdk.models import ApiDocument
from specsdk.output import reset_output
from specsdk.parser.extractor import parse_document


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear SPECSDK_* variables so the developer's shell cannot leak in."""
    for name in (
        "SPECSDK_SPEC",
        "SPECSDK_NAME",
        "SPECSDK_OUTPUT",
        "SPECSDK_LANGUAGE",
        "SPECSDK_TEMPLATES",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def widgets_path() -> Path:
    """Path of the widget-store fixture document."""
    return FIXTURES_DIR / "widgets.json"


@pytest.fixture
def widgets_raw(widgets_path: Path) -> dict[str, Any]:
    """Load the raw widget-store spec dict."""
    with open(widgets_path) as f:
        return json.load(f)


@pytest.fixture
def widgets_document(widgets_raw: dict[str, Any]) -> ApiDocument:
    """The widget-store spec parsed into an ApiDocument."""
    return parse_document(widgets_raw)


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


@pytest.fixture
def ts_adapter() -> TypeScriptAdapter:
    return TypeScriptAdapter()


@pytest.fixture
def py_adapter() -> PythonAdapter:
    return PythonAdapter()
