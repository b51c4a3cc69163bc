"""CLI error-handling tests for concise stage-aware diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from pytest import MonkeyPatch
from typer.testing import CliRunner

from sysctlconf.cli import app


def test_parse_command_reports_parse_error_with_line_number(
    write_text_file: Callable[[str, str], Path],
) -> None:
    """A malformed line should fail with its line number and a format hint."""

    input_path = write_text_file("broken.conf", "a = 1\n\nnot an assignment\nb = 2\n")
    runner = CliRunner()

    result = runner.invoke(app, ["parse", str(input_path)])

    assert result.exit_code == 1
    assert (
        f"parse failed at stage `parse`: {input_path}: "
        "Parse error at line 3: invalid format, expected 'key=value'"
    ) in result.output
    assert "Hint: Each non-comment line must look like `key = value`." in result.output
    assert "Loaded settings" not in result.output


def test_parse_command_reports_empty_key_from_stdin() -> None:
    """Empty keys read from stdin should be labeled with `<stdin>`."""

    runner = CliRunner()

    result = runner.invoke(app, ["tree", "-"], input="=value\n")

    assert result.exit_code == 1
    assert (
        "tree failed at stage `parse`: <stdin>: Parse error at line 1: empty key not allowed"
    ) in result.output


def test_parse_command_reports_missing_input_file(tmp_path: Path) -> None:
    """A missing input file should fail at the read stage, not the parse stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["parse", str(tmp_path / "missing.conf")])

    assert result.exit_code == 1
    assert "parse failed at stage `read`: Failed to read input" in result.output
    assert "IO error:" in result.output


def test_parse_command_reports_missing_schema_file(
    sample_sysctl_path: Path, tmp_path: Path
) -> None:
    """A missing schema file should fail at the schema stage with a hint."""

    runner = CliRunner()

    result = runner.invoke(
        app,
        ["parse", str(sample_sysctl_path), "--schema", str(tmp_path / "missing.yaml")],
    )

    assert result.exit_code == 1
    assert "parse failed at stage `schema`: Failed to read schema file" in result.output
    assert "Hint: Provide an existing path via `--schema <path.yaml>`." in result.output


def test_parse_command_reports_unknown_schema_type(
    sample_sysctl_path: Path,
    write_text_file: Callable[[str, str], Path],
) -> None:
    """Unknown schema type tags should be named in the diagnostic."""

    schema_path = write_text_file("schema.yaml", "schema:\n  a:\n    type: decimal\n")
    runner = CliRunner()

    result = runner.invoke(app, ["parse", str(sample_sysctl_path), "-s", str(schema_path)])

    assert result.exit_code == 1
    assert "Unknown type 'decimal' in schema" in result.output


def test_parse_command_reports_invalid_runtime_settings(
    monkeypatch: MonkeyPatch, sample_sysctl_path: Path
) -> None:
    """Invalid environment settings should fail at the config stage."""

    monkeypatch.setenv("SYSCTLCONF_FORMAT", "toml")
    runner = CliRunner()

    result = runner.invoke(app, ["parse", str(sample_sysctl_path)])

    assert result.exit_code == 1
    assert "parse failed at stage `config`: Invalid runtime settings" in result.output
    assert "Unsupported `output_format` value `toml`" in result.output


def test_unexpected_errors_use_generic_diagnostics(
    monkeypatch: MonkeyPatch, sample_sysctl_path: Path
) -> None:
    """Non-stage exceptions should still fail with exit code 1."""

    def _failing_render(*_: object, **__: object) -> str:
        """Raise a generic error to verify fallback CLI diagnostics."""

        raise RuntimeError("renderer exploded")

    monkeypatch.setattr("sysctlconf.cli.render_tree", _failing_render)
    runner = CliRunner()

    result = runner.invoke(app, ["tree", str(sample_sysctl_path)])

    assert result.exit_code == 1
    assert "tree failed: renderer exploded" in result.output
