"""Command-line interface for sysctlconf.

Responsibilities:
- Expose user-facing commands for parsing, validating, and rendering settings.
- Convert CLI arguments into `RunConfig` and map domain errors to stage errors.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_rendered_tree,
    echo_settings,
    echo_violations,
    exit_with_command_error,
)
from .config import ConfigLoader, RunConfig, RuntimeConfigSources
from .errors import (
    CommandStageError,
    ParseError,
    SchemaError,
    SchemaValidationError,
    SysctlIOError,
)
from .io.source import is_stdin_source, load_table
from .schema.loader import SchemaLoader
from .schema.model import Schema, ValidationReport
from .schema.validator import Validator
from .table import ConfigTable
from .telemetry.logger import RunLogger
from .tree.builder import TreeBuilder
from .tree.render import render_tree

app = typer.Typer(
    name="sysctlconf",
    no_args_is_help=True,
    help="Parse, validate, and convert sysctl-style key=value files.",
)

InputArgument = Annotated[
    str,
    typer.Argument(help="Path to a sysctl-style file, or `-` to read standard input."),
]
FormatOption = Annotated[
    str | None,
    typer.Option("--format", "-f", help="Tree output format: `json` or `yaml`."),
]
SeparatorOption = Annotated[
    str | None,
    typer.Option("--separator", help="Key path separator used to build the tree."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Write phase logs to standard error."),
]


def _set_runtime_cli_value(runtime_cli_values: dict[str, str], key: str, value: str | None) -> None:
    """Set a runtime CLI value when the user passed one."""

    if value is not None:
        runtime_cli_values[key] = value


def _resolve_run_config(
    schema: Path | None = None,
    output_format: str | None = None,
    separator: str | None = None,
    verbose: bool = False,
) -> RunConfig:
    """Resolve effective run settings from CLI options and environment."""

    runtime_cli_values: dict[str, str] = {}
    _set_runtime_cli_value(
        runtime_cli_values, "schema_path", str(schema) if schema is not None else None
    )
    _set_runtime_cli_value(runtime_cli_values, "output_format", output_format)
    _set_runtime_cli_value(runtime_cli_values, "separator", separator)
    if verbose:
        runtime_cli_values["log_level"] = "INFO"

    try:
        return ConfigLoader.resolve(
            RuntimeConfigSources(cli=runtime_cli_values, env=os.environ)
        )
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid runtime settings: {exc}",
            hint="Check `--format`, `--separator`, and `SYSCTLCONF_*` environment variables.",
        ) from exc


def _load_input_table(source: str, run_logger: RunLogger) -> ConfigTable:
    """Parse the input source and map failures to stage errors."""

    run_logger.log_stage_start("parse", source=source)
    try:
        table = load_table(source)
    except SysctlIOError as exc:
        run_logger.log_stage_failure("parse", type(exc).__name__)
        raise CommandStageError(
            stage="read",
            detail=f"Failed to read input `{source}`: {exc}",
            hint="Verify the input path exists, or pass `-` to read standard input.",
        ) from exc
    except ParseError as exc:
        run_logger.log_stage_failure("parse", type(exc).__name__)
        label = "<stdin>" if is_stdin_source(source) else source
        raise CommandStageError(
            stage="parse",
            detail=f"{label}: {exc}",
            hint="Each non-comment line must look like `key = value`.",
        ) from exc
    run_logger.log_stage_complete("parse", settings=len(table))
    return table


def _load_schema(schema_path: Path, run_logger: RunLogger) -> Schema:
    """Load a schema document and map failures to stage errors."""

    run_logger.log_stage_start("schema", path=schema_path)
    try:
        schema = SchemaLoader.from_yaml(schema_path)
    except SysctlIOError as exc:
        run_logger.log_stage_failure("schema", type(exc).__name__)
        raise CommandStageError(
            stage="schema",
            detail=f"Failed to read schema file `{schema_path}`: {exc}",
            hint="Provide an existing path via `--schema <path.yaml>`.",
        ) from exc
    except SchemaError as exc:
        run_logger.log_stage_failure("schema", type(exc).__name__)
        raise CommandStageError(
            stage="schema",
            detail=f"Invalid schema file `{schema_path}`: {exc}",
            hint="Use types `string`, `bool`, `int`, `float`, or `{optional: <type>}`.",
        ) from exc
    run_logger.log_stage_complete("schema", fields=len(schema))
    return schema


def _validate_table(table: ConfigTable, schema: Schema, run_logger: RunLogger) -> ValidationReport:
    """Validate the table and log the outcome without raising."""

    run_logger.log_stage_start("validate")
    report = Validator().validate(table, schema)
    if report.ok:
        run_logger.log_stage_complete("validate", fields=len(schema))
    else:
        run_logger.log_stage_failure("validate", "SchemaValidationError")
    return report


def _validation_stage_error(report: ValidationReport) -> CommandStageError:
    """Build the aggregate stage error for a failed validation report."""

    return CommandStageError(
        stage="validate",
        detail=str(SchemaValidationError(report.violations)),
        hint="Fix the listed values or update the schema, then rerun.",
    )


def _render(table: ConfigTable, config: RunConfig) -> str:
    """Build and render the tree for a table."""

    tree = TreeBuilder(separator=config.separator).build(table)
    return render_tree(tree, output_format=config.output_format, indent=config.json_indent)


@app.command("parse")
def parse_command(
    input_file: InputArgument,
    schema: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to a YAML schema used to validate values."),
    ] = None,
    output_format: FormatOption = None,
    separator: SeparatorOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Parse settings, validate them when a schema is given, and print the tree."""

    run_logger: RunLogger | None = None
    try:
        config = _resolve_run_config(schema, output_format, separator, verbose)
        run_logger = RunLogger(level=config.log_level)
        table = _load_input_table(input_file, run_logger)

        if config.schema_path is not None:
            typer.echo(f"Loading schema file: {config.schema_path}")
            loaded_schema = _load_schema(config.schema_path, run_logger)
            typer.echo("Validating settings against schema...")
            report = _validate_table(table, loaded_schema, run_logger)
            if not report.ok:
                raise _validation_stage_error(report)
            typer.secho("Schema validation succeeded.", fg=typer.colors.GREEN)

        rendered = _render(table, config)
    except Exception as exc:
        exit_with_command_error("parse", exc)
    finally:
        if run_logger is not None:
            run_logger.close()

    echo_settings(table)
    echo_rendered_tree(rendered, config.output_format)


@app.command("validate")
def validate_command(
    input_file: InputArgument,
    schema: Annotated[
        Path | None,
        typer.Option(
            "--schema",
            "-s",
            help="Path to a YAML schema (defaults to `SYSCTLCONF_SCHEMA`).",
        ),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Check settings against a schema and report every violation."""

    run_logger: RunLogger | None = None
    report: ValidationReport | None = None
    try:
        config = _resolve_run_config(schema=schema, verbose=verbose)
        if config.schema_path is None:
            raise CommandStageError(
                stage="config",
                detail="A schema path is required for validation.",
                hint="Pass `--schema <path.yaml>` or set `SYSCTLCONF_SCHEMA`.",
            )
        run_logger = RunLogger(level=config.log_level)
        table = _load_input_table(input_file, run_logger)
        loaded_schema = _load_schema(config.schema_path, run_logger)
        report = _validate_table(table, loaded_schema, run_logger)
        if not report.ok:
            raise _validation_stage_error(report)
    except Exception as exc:
        if report is not None:
            echo_violations(report)
        exit_with_command_error("validate", exc)
    finally:
        if run_logger is not None:
            run_logger.close()

    typer.secho(
        f"OK: {len(loaded_schema)} schema field(s) checked, {len(table)} setting(s) loaded.",
        fg=typer.colors.GREEN,
    )


@app.command("tree")
def tree_command(
    input_file: InputArgument,
    output_format: FormatOption = None,
    separator: SeparatorOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print only the nested tree built from dot-separated keys."""

    run_logger: RunLogger | None = None
    try:
        config = _resolve_run_config(
            output_format=output_format,
            separator=separator,
            verbose=verbose,
        )
        run_logger = RunLogger(level=config.log_level)
        table = _load_input_table(input_file, run_logger)
        rendered = _render(table, config)
    except Exception as exc:
        exit_with_command_error("tree", exc)
    finally:
        if run_logger is not None:
            run_logger.close()

    echo_rendered_tree(rendered, config.output_format, with_header=False)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
