"""CLI tests for the specsdk Typer application.

Drives ``generate``, ``inspect`` and ``languages`` through Typer's
CliRunner against the widget-store fixture. Every test runs in a fresh
working directory so that no ``specsdk.json`` from the checkout leaks in.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from specsdk import __version__
from specsdk.app import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------


class TestTopLevel:
    """Test the root callback options."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"specsdk {__version__}" in result.output

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "generate" in result.output

    def test_languages(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "languages"])
        assert result.exit_code == 0
        lines = result.stdout.strip().split("\n")
        assert lines[0] == "Language\tAliases\tExtension\tDependencies"
        assert lines[1:] == ["python\tpy\tpy\thttpx", "typescript\tts\tts\taxios"]


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerate:
    """Test ``specsdk generate``."""

    def test_generates_typescript_client(
        self, runner: CliRunner, widgets_path: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "sdk"
        result = runner.invoke(
            app,
            ["--plain", "generate", "-s", str(widgets_path), "-n", "Widget Store", "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert (out / "client.ts").is_file()
        assert str(out / "client.ts") in result.stdout
        assert "Generated 5 methods and 8 types in 6 files" in result.output

    def test_generates_python_client(
        self, runner: CliRunner, widgets_path: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "py"
        result = runner.invoke(
            app,
            ["generate", "--spec", str(widgets_path), "--name", "W", "--lang", "py", "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert (out / "models.py").is_file()

    def test_dry_run_writes_nothing(
        self, runner: CliRunner, widgets_path: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "dry"
        result = runner.invoke(
            app, ["generate", "-s", str(widgets_path), "-n", "W", "-o", str(out), "--dry-run"]
        )
        assert result.exit_code == 0, result.output
        assert f"{out}/package.json" in result.stdout
        assert not out.exists()

    def test_json_summary(self, runner: CliRunner, widgets_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "dry"
        result = runner.invoke(
            app,
            ["--json", "-q", "generate", "-s", str(widgets_path), "-n", "W", "-o", str(out), "--dry-run"],
        )
        assert result.exit_code == 0, result.output
        summary = json.loads(result.stdout)
        assert summary["language"] == "typescript"
        assert summary["dry_run"] is True
        assert (summary["methods"], summary["types"]) == (5, 8)
        assert f"{out}/client.ts" in summary["files"]
        assert not out.exists()

    def test_project_file_supplies_inputs(
        self, runner: CliRunner, widgets_path: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "specsdk.json").write_text(
            json.dumps({"spec": str(widgets_path), "project_name": "W", "output_dir": "gen"}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["generate"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "gen" / "index.ts").is_file()

    def test_missing_name_is_configuration_error(
        self, runner: CliRunner, widgets_path: Path
    ) -> None:
        result = runner.invoke(app, ["--no-color", "generate", "-s", str(widgets_path)])
        assert result.exit_code == 2
        assert "Missing required input(s): --name" in result.output
        assert "specsdk generate --help" in result.output

    def test_unsupported_language(self, runner: CliRunner, widgets_path: Path) -> None:
        result = runner.invoke(
            app, ["generate", "-s", str(widgets_path), "-n", "W", "-l", "cobol"]
        )
        assert result.exit_code == 2
        assert "Unsupported language 'cobol'" in result.output

    def test_missing_spec_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["generate", "-s", str(tmp_path / "nope.yaml"), "-n", "W"]
        )
        assert result.exit_code == 6

    def test_output_dir_is_a_file(
        self, runner: CliRunner, widgets_path: Path, tmp_path: Path
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        result = runner.invoke(
            app, ["generate", "-s", str(widgets_path), "-n", "W", "-o", str(blocker)]
        )
        assert result.exit_code == 9


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspect:
    """Test ``specsdk inspect methods`` and ``specsdk inspect types``."""

    def test_methods_json(self, runner: CliRunner, widgets_path: Path) -> None:
        result = runner.invoke(app, ["--json", "inspect", "methods", "-s", str(widgets_path)])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert [row["Method"] for row in rows] == [
            "getRequest",
            "listWidgets",
            "createWidget",
            "getWidget",
            "widgetsDelete",
        ]
        get_widget = rows[3]
        assert get_widget["Verb"] == "GET"
        assert get_widget["Parameters"] == "widgetId, verbose?, xTraceId?"
        assert get_widget["Returns"] == "Widget"

    def test_methods_python_names(self, runner: CliRunner, widgets_path: Path) -> None:
        result = runner.invoke(
            app, ["--plain", "inspect", "methods", "-s", str(widgets_path), "-l", "python"]
        )
        assert result.exit_code == 0, result.output
        assert "get_widget\tGET\t/widgets/{widgetId}" in result.stdout

    def test_types_plain(self, runner: CliRunner, widgets_path: Path) -> None:
        result = runner.invoke(app, ["--plain", "inspect", "types", "-s", str(widgets_path)])
        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().split("\n")
        assert lines[0] == "Type\tKind\tDefinition"
        assert "Widget\tstructure\tid, name, status?, tags?, metadata?" in lines
        assert "Status\talias\t'active' | 'retired'" in lines

    def test_missing_spec_option(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["inspect", "types"])
        assert result.exit_code == 2
        assert "--spec" in result.output
