"""Config source loading.

Responsibilities:
- Open config files with guaranteed release on every exit path.
- Feed file or in-memory text into the scanner.
- Map unreadable sources to `SourceUnavailableError` and log every outcome.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..errors import ConfigScanError, SourceUnavailableError
from ..models.datatypes import ScanLimits
from ..scanner.machine import scan
from ..telemetry.logger import ScanLogger


def load_config_file(
    path: Path,
    limits: ScanLimits | None = None,
    *,
    encoding: str = "utf-8",
    run_logger: ScanLogger | None = None,
) -> dict[str, str]:
    """Scan a config file into a name-to-value mapping.

    Args:
        path: Config file path.
        limits: Name/value length bounds.
        encoding: Text encoding of the file.
        run_logger: Optional structured logger for scan events.

    Raises:
        SourceUnavailableError: If the file cannot be opened or decoded.
        ConfigScanError: If the file content is malformed.
    """

    source_name = str(path)
    try:
        with path.open("r", encoding=encoding) as handle:
            return _scan_logged(handle, limits, source_name, run_logger)
    except OSError as exc:
        error = SourceUnavailableError(source=source_name, reason=exc.strerror or str(exc))
        _log_failure(run_logger, error)
        raise error from exc
    except UnicodeDecodeError as exc:
        error = SourceUnavailableError(
            source=source_name,
            reason=f"not valid {encoding} text ({exc.reason})",
        )
        _log_failure(run_logger, error)
        raise error from exc


def load_config_text(
    text: str,
    limits: ScanLimits | None = None,
    *,
    source_name: str = "<string>",
    run_logger: ScanLogger | None = None,
) -> dict[str, str]:
    """Scan in-memory config text into a name-to-value mapping."""

    return _scan_logged(text, limits, source_name, run_logger)


def _scan_logged(
    source: Iterable[str],
    limits: ScanLimits | None,
    source_name: str,
    run_logger: ScanLogger | None,
) -> dict[str, str]:
    """Run one scan and report start/complete/failure events."""

    if run_logger is not None:
        run_logger.log_scan_start(source_name)
    try:
        result = scan(source, limits=limits, source_name=source_name)
    except ConfigScanError as exc:
        _log_failure(run_logger, exc)
        raise
    if run_logger is not None:
        run_logger.log_scan_complete(source_name, len(result))
    return result


def _log_failure(run_logger: ScanLogger | None, error: ConfigScanError) -> None:
    if run_logger is not None:
        run_logger.log_scan_failure(error.source, error.kind.value, error.line)
