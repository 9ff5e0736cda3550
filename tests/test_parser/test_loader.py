"""Tests for specsdk.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from specsdk.exceptions import SpecAcquisitionError, SpecParseError
from specsdk.parser.loader import _parse_content, load_spec

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    """Test loading specs from local files."""

    def test_loads_json_file(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "widgets.json"))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Widget Store"

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "spec.yaml"
        yaml_file.write_text(
            textwrap.dedent("""\
                openapi: "3.0.3"
                info:
                  title: YAML Test
                  version: "1.0.0"
                paths: {}
            """),
            encoding="utf-8",
        )
        result = load_spec(str(yaml_file))
        assert result["info"]["title"] == "YAML Test"

    def test_unknown_extension_falls_back_to_content_detection(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text("openapi: 3.1.0\npaths: {}\n", encoding="utf-8")
        assert load_spec(str(spec_file))["openapi"] == "3.1.0"

    def test_missing_file_is_acquisition_error(self, tmp_path: Path) -> None:
        with pytest.raises(SpecAcquisitionError, match="not found"):
            load_spec(str(tmp_path / "nope.json"))

    def test_empty_file_is_parse_error(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "empty.yaml"
        spec_file.write_text("   \n", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            load_spec(str(spec_file))

    def test_invalid_json_with_json_extension(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "broken.json"
        spec_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            load_spec(str(spec_file))

    def test_scalar_document_is_rejected(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "scalar.yaml"
        spec_file.write_text("just a string\n", encoding="utf-8")
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            load_spec(str(spec_file))


# ---------------------------------------------------------------------------
# Stdin
# ---------------------------------------------------------------------------


class TestLoadFromStdin:
    """Test loading specs from standard input."""

    @pytest.mark.parametrize("source", ["-", "stdin"])
    def test_reads_stdin(self, source: str) -> None:
        spec_json = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin test"}})
        with patch("specsdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec(source)
        assert result["info"]["title"] == "stdin test"

    def test_empty_stdin_is_parse_error(self) -> None:
        with patch("specsdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("")
            with pytest.raises(SpecParseError, match="No input"):
                load_spec("-")

    def test_closed_stdin_is_acquisition_error(self) -> None:
        closed = io.StringIO("")
        closed.close()
        with patch("specsdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = closed
            with pytest.raises(SpecAcquisitionError, match="stdin"):
                load_spec("-")


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


class TestLoadFromUrl:
    """Test fetching specs over HTTP with a mocked httpx.get."""

    URL = "https://example.com/openapi.json"

    def test_fetches_json(self) -> None:
        spec = {"openapi": "3.0.3", "info": {"title": "URL test"}}
        mock_response = httpx.Response(
            status_code=200,
            json=spec,
            request=httpx.Request("GET", self.URL),
        )
        with patch("specsdk.parser.loader.httpx.get", return_value=mock_response) as mock_get:
            result = load_spec(self.URL, timeout=5.0)
        assert result["info"]["title"] == "URL test"
        mock_get.assert_called_once_with(self.URL, timeout=5.0, follow_redirects=True)

    def test_fetches_yaml_by_content_type(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            text="openapi: 3.0.3\ninfo:\n  title: YAML over HTTP\n",
            headers={"content-type": "application/yaml"},
            request=httpx.Request("GET", self.URL),
        )
        with patch("specsdk.parser.loader.httpx.get", return_value=mock_response):
            result = load_spec(self.URL)
        assert result["info"]["title"] == "YAML over HTTP"

    def test_http_error_status_is_acquisition_error(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            text="not found",
            request=httpx.Request("GET", self.URL),
        )
        with patch("specsdk.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(SpecAcquisitionError, match="HTTP 404"):
                load_spec(self.URL)

    def test_network_failure_is_acquisition_error(self) -> None:
        error = httpx.ConnectError("connection refused", request=httpx.Request("GET", self.URL))
        with patch("specsdk.parser.loader.httpx.get", side_effect=error):
            with pytest.raises(SpecAcquisitionError, match="Failed to fetch"):
                load_spec(self.URL)

    def test_timeout_is_acquisition_error(self) -> None:
        error = httpx.ReadTimeout("timed out", request=httpx.Request("GET", self.URL))
        with patch("specsdk.parser.loader.httpx.get", side_effect=error):
            with pytest.raises(SpecAcquisitionError):
                load_spec(self.URL, timeout=0.1)


# ---------------------------------------------------------------------------
# Content parsing
# ---------------------------------------------------------------------------


class TestParseContent:
    """Test JSON/YAML detection on raw content."""

    def test_json_without_hint(self) -> None:
        assert _parse_content('{"a": 1}') == {"a": 1}

    def test_yaml_without_hint(self) -> None:
        assert _parse_content("a: 1\n") == {"a": 1}

    def test_garbage_reports_both_errors(self) -> None:
        with pytest.raises(SpecParseError) as exc_info:
            _parse_content("a: [unclosed\n  - b: {")
        message = str(exc_info.value)
        assert "JSON error" in message
        assert "YAML error" in message
