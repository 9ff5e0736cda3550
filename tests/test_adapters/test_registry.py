"""Tests for specsdk.adapters.registry."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from specsdk.adapters.python import PythonAdapter
from specsdk.adapters.registry import ENTRY_POINT_GROUP, available_adapters, get_adapter
from specsdk.adapters.typescript import TypeScriptAdapter
from specsdk.exceptions import ConfigurationError


class GoAdapter(TypeScriptAdapter):
    """Stand-in third-party adapter reusing the TypeScript machinery."""

    aliases = ("golang",)

    @property
    def name(self) -> str:
        return "go"


def _entry_point(name: str, target: object) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = target
    return ep


def _patch_entry_points(*eps: MagicMock):  # noqa: ANN202
    selected = MagicMock()
    selected.select.return_value = list(eps)
    return patch(
        "specsdk.adapters.registry.importlib.metadata.entry_points", return_value=selected
    )


class TestGetAdapter:
    """Test language lookup."""

    @pytest.mark.parametrize(
        ("language", "expected"),
        [
            ("typescript", TypeScriptAdapter),
            ("TypeScript", TypeScriptAdapter),
            ("ts", TypeScriptAdapter),
            ("python", PythonAdapter),
            ("PY", PythonAdapter),
            ("  python ", PythonAdapter),
        ],
    )
    def test_builtin_names_and_aliases(self, language: str, expected: type) -> None:
        with _patch_entry_points():
            assert isinstance(get_adapter(language), expected)

    def test_unknown_language_lists_supported(self) -> None:
        with _patch_entry_points():
            with pytest.raises(ConfigurationError) as exc_info:
                get_adapter("cobol")
        message = str(exc_info.value)
        assert "Unsupported language 'cobol'" in message
        assert "python, typescript" in message
        assert exc_info.value.exit_code == 2


class TestEntryPointDiscovery:
    """Test third-party adapters registered as entry points."""

    def test_discovered_adapter_is_available(self) -> None:
        with _patch_entry_points(_entry_point("go", GoAdapter)) as mock_eps:
            adapter = get_adapter("golang")
        assert adapter.name == "go"
        mock_eps.return_value.select.assert_called_with(group=ENTRY_POINT_GROUP)

    def test_adapters_sorted_by_name(self) -> None:
        with _patch_entry_points(_entry_point("go", GoAdapter)):
            names = [adapter.name for adapter in available_adapters()]
        assert names == ["go", "python", "typescript"]

    def test_builtin_wins_over_duplicate_name(self) -> None:
        class FakeTypeScript(PythonAdapter):
            @property
            def name(self) -> str:
                return "TypeScript"

        with _patch_entry_points(_entry_point("ts", FakeTypeScript)):
            assert isinstance(get_adapter("typescript"), TypeScriptAdapter)
            assert len(available_adapters()) == 2

    def test_broken_entry_point_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        broken = MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("no module named kotlin")
        with _patch_entry_points(broken):
            names = [adapter.name for adapter in available_adapters()]
        assert names == ["python", "typescript"]
        assert "Failed to load adapter 'broken'" in caplog.text

    def test_non_adapter_entry_point_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with _patch_entry_points(_entry_point("junk", dict)):
            assert len(available_adapters()) == 2
        assert "is not a LanguageAdapter" in caplog.text
