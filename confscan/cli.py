"""Command-line interface for confscan.

Responsibilities:
- Expose user-facing commands for scanning and checking config files.
- Resolve scanner settings from CLI options, environment, and YAML settings.
- Map scan and binding failures to stage-aware diagnostics with exit code 1.

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
    OUTPUT_FORMATS,
    echo_bound_options,
    echo_entries,
    exit_with_command_error,
)
from .config import ConfigLoader, ScannerConfig, SettingsSources
from .errors import (
    CommandStageError,
    ConfigScanError,
    ScanErrorKind,
    UnknownOptionError,
)
from .io.source import load_config_file
from .options import OptionSchema, bind_options, unknown_option_names
from .telemetry.logger import ScanLogger

app = typer.Typer(
    name="confscan",
    no_args_is_help=True,
    help="Scan `name = value` config files.",
)

_SCAN_HINTS = {
    ScanErrorKind.INVALID_PARAM_START: "Parameter names must start with an ASCII letter.",
    ScanErrorKind.INVALID_NAME_CHAR: "Use only letters, digits, and `_` in parameter names.",
    ScanErrorKind.NAME_TOO_LONG: "Shorten the name or raise `--max-name-length`.",
    ScanErrorKind.VALUE_TOO_LONG: "Shorten the value or raise `--max-value-length`.",
    ScanErrorKind.TRAILING_GARBAGE: "Quote values that contain spaces.",
    ScanErrorKind.MISSING_ASSIGNMENT: "Write each entry as `name = value`.",
    ScanErrorKind.SOURCE_UNAVAILABLE: "Verify the config file exists and is readable.",
}

ConfigFileArgument = Annotated[Path, typer.Argument(help="Path to the config file to scan.")]
MaxNameLengthOption = Annotated[
    int | None,
    typer.Option("--max-name-length", help="Longest accepted parameter name (default 30)."),
]
MaxValueLengthOption = Annotated[
    int | None,
    typer.Option("--max-value-length", help="Longest accepted parameter value (default 255)."),
]
EncodingOption = Annotated[
    str | None,
    typer.Option("--encoding", help="Text encoding of the config file (default utf-8)."),
]
SettingsOption = Annotated[
    Path | None,
    typer.Option("--settings", help="Path to YAML file with scanner settings."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Emit structured scan events on stderr."),
]


def _load_settings_file(settings_path: Path | None) -> ScannerConfig:
    """Load a YAML settings file when requested and map failures to stage errors."""

    if settings_path is None:
        return ScannerConfig()

    try:
        return ConfigLoader.from_yaml(settings_path)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="settings",
            detail=f"Settings file not found: `{settings_path}`.",
            hint="Provide an existing path via `--settings <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="settings",
            detail=f"Invalid settings file `{settings_path}`: {exc}",
            hint="Fix settings keys/values and rerun.",
        ) from exc
    except OSError as exc:
        raise CommandStageError(
            stage="settings",
            detail=f"Failed to read settings file `{settings_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _resolve_scanner_config(
    settings_path: Path | None,
    max_name_length: int | None,
    max_value_length: int | None,
    encoding: str | None,
    allow_unknown: bool | None = None,
) -> ScannerConfig:
    """Resolve effective scanner settings from YAML defaults, env, and CLI overrides."""

    base_config = _load_settings_file(settings_path)
    cli_values = {
        "max_name_length": max_name_length,
        "max_value_length": max_value_length,
        "encoding": encoding,
        "allow_unknown_options": allow_unknown,
    }
    try:
        return base_config.resolved(SettingsSources(cli=cli_values, env=os.environ))
    except ValueError as exc:
        raise CommandStageError(
            stage="settings",
            detail=str(exc),
            hint="Pass positive lengths and a known encoding.",
        ) from exc


def _build_run_logger(verbose: bool) -> ScanLogger | None:
    """Create a stderr scan logger when verbose output is requested."""

    return ScanLogger(level="DEBUG") if verbose else None


def _scan_config_file(
    config_file: Path,
    scanner_config: ScannerConfig,
    run_logger: ScanLogger | None,
) -> dict[str, str]:
    """Scan one config file and map scan failures to stage errors."""

    try:
        return load_config_file(
            config_file,
            scanner_config.limits(),
            encoding=scanner_config.encoding,
            run_logger=run_logger,
        )
    except ConfigScanError as exc:
        stage = "open" if exc.kind is ScanErrorKind.SOURCE_UNAVAILABLE else "scan"
        raise CommandStageError(
            stage=stage,
            detail=f"{exc} [{exc.kind.value}]",
            hint=_SCAN_HINTS.get(exc.kind),
        ) from exc


@app.command("parse")
def parse_command(
    config_file: ConfigFileArgument,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            help="Output format: `pairs`, `canonical`, or `json`.",
        ),
    ] = "pairs",
    max_name_length: MaxNameLengthOption = None,
    max_value_length: MaxValueLengthOption = None,
    encoding: EncodingOption = None,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Scan a config file and print its entries."""

    try:
        if output_format not in OUTPUT_FORMATS:
            raise CommandStageError(
                stage="arguments",
                detail=f"Unsupported output format `{output_format}`.",
                hint=f"Use one of: {', '.join(OUTPUT_FORMATS)}.",
            )
        scanner_config = _resolve_scanner_config(
            settings_file, max_name_length, max_value_length, encoding
        )
        values = _scan_config_file(config_file, scanner_config, _build_run_logger(verbose))
        echo_entries(values, output_format)
    except Exception as exc:
        exit_with_command_error("parse", exc)


@app.command("check")
def check_command(
    config_file: ConfigFileArgument,
    max_name_length: MaxNameLengthOption = None,
    max_value_length: MaxValueLengthOption = None,
    encoding: EncodingOption = None,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate a config file without printing its values."""

    try:
        scanner_config = _resolve_scanner_config(
            settings_file, max_name_length, max_value_length, encoding
        )
        values = _scan_config_file(config_file, scanner_config, _build_run_logger(verbose))
    except Exception as exc:
        exit_with_command_error("check", exc)

    typer.echo(f"OK {config_file}: {len(values)} entries")


@app.command("resolve")
def resolve_command(
    config_file: ConfigFileArgument,
    options_file: Annotated[
        Path,
        typer.Option(
            "--options",
            help="YAML mapping of known option names to default values.",
        ),
    ],
    allow_unknown: Annotated[
        bool | None,
        typer.Option(
            "--allow-unknown/--no-allow-unknown",
            help="Ignore parameters that the options file does not declare.",
        ),
    ] = None,
    max_name_length: MaxNameLengthOption = None,
    max_value_length: MaxValueLengthOption = None,
    encoding: EncodingOption = None,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Bind config entries to declared options and print resolved values."""

    try:
        scanner_config = _resolve_scanner_config(
            settings_file, max_name_length, max_value_length, encoding, allow_unknown
        )
        schema = _load_option_schema(options_file)
        run_logger = _build_run_logger(verbose)
        values = _scan_config_file(config_file, scanner_config, run_logger)
        try:
            bound = bind_options(
                values,
                schema,
                allow_unknown=scanner_config.allow_unknown_options,
            )
        except UnknownOptionError as exc:
            raise CommandStageError(
                stage="bind",
                detail=f"{exc} in {config_file}.",
                hint="Declare the option in the options file or pass `--allow-unknown`.",
            ) from exc
    except Exception as exc:
        exit_with_command_error("resolve", exc)

    unknown = unknown_option_names(values, schema)
    if unknown and run_logger is not None:
        run_logger.log_unknown_options(str(config_file), unknown)
    echo_bound_options(bound, unknown)


def _load_option_schema(options_file: Path) -> OptionSchema:
    """Load declared options and map failures to stage errors."""

    try:
        return OptionSchema.from_yaml(options_file)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="options",
            detail=f"Options file not found: `{options_file}`.",
            hint="Provide an existing path via `--options <path.yaml>`.",
        ) from exc
    except (OSError, ValueError) as exc:
        raise CommandStageError(
            stage="options",
            detail=f"Invalid options file `{options_file}`: {exc}",
            hint="Use a YAML mapping of `name: default` pairs.",
        ) from exc


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
