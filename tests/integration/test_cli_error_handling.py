"""CLI error-handling tests for file, line, and character diagnostics."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from confscan.cli import app


def test_parse_command_reports_missing_config_file(tmp_path: Path) -> None:
    """An unopenable source should fail at the open stage with exit code 1."""

    missing = tmp_path / "missing.conf"

    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(missing)])

    assert result.exit_code == 1
    assert "parse failed at stage `open`" in result.output
    assert f"Error in {missing}: can't read config source" in result.output
    assert "[source_unavailable]" in result.output
    assert "Hint: Verify the config file exists and is readable." in result.output


def test_parse_command_reports_file_line_and_character(tmp_path: Path) -> None:
    """Scan failures should name the file, the line, and the offending character."""

    config_path = tmp_path / "bad.conf"
    config_path.write_text("# header\nhost=db\n1abc=x\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(config_path)])

    assert result.exit_code == 1
    assert "parse failed at stage `scan`" in result.output
    assert (
        f"Error in {config_path}: param name can't start with non-alpha char '1' on line 3"
        in result.output
    )
    assert "[invalid_param_start]" in result.output
    assert "param=host" not in result.output


def test_check_command_reports_trailing_garbage(tmp_path: Path) -> None:
    """Unquoted values with spaces should fail with a quoting hint."""

    config_path = tmp_path / "bad.conf"
    config_path.write_text("name = two words\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["check", str(config_path)])

    assert result.exit_code == 1
    assert "[trailing_garbage]" in result.output
    assert "Hint: Quote values that contain spaces." in result.output


def test_parse_command_rejects_unknown_output_format(tmp_path: Path) -> None:
    """Unsupported formats should fail before scanning."""

    config_path = tmp_path / "app.conf"
    config_path.write_text("a=1\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(config_path), "--format", "xml"])

    assert result.exit_code == 1
    assert "parse failed at stage `arguments`" in result.output
    assert "Unsupported output format `xml`." in result.output


def test_parse_command_reports_invalid_length_option(tmp_path: Path) -> None:
    """Non-positive length overrides should fail at the settings stage."""

    config_path = tmp_path / "app.conf"
    config_path.write_text("a=1\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(config_path), "--max-name-length", "0"])

    assert result.exit_code == 1
    assert "parse failed at stage `settings`" in result.output
    assert "CLI option `max_name_length` must be a positive integer." in result.output


def test_check_command_reports_invalid_env_setting(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """Invalid `CONFSCAN_*` variables should fail at the settings stage."""

    config_path = tmp_path / "app.conf"
    config_path.write_text("a=1\n", encoding="utf-8")
    monkeypatch.setenv("CONFSCAN_ENCODING", "no-such-codec")

    runner = CliRunner()
    result = runner.invoke(app, ["check", str(config_path)])

    assert result.exit_code == 1
    assert "Unsupported `encoding` value `no-such-codec`." in result.output


def test_check_command_reports_missing_settings_file(tmp_path: Path) -> None:
    """A missing `--settings` file should fail at the settings stage."""

    config_path = tmp_path / "app.conf"
    config_path.write_text("a=1\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["check", str(config_path), "--settings", "missing.yaml"])

    assert result.exit_code == 1
    assert "check failed at stage `settings`" in result.output
    assert "Settings file not found: `missing.yaml`." in result.output
