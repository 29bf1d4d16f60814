"""Structured scan logging utilities.

Responsibilities:
- Emit concise, deterministic scan-level runtime logs through `loguru`.
- Never include scanned values; only names of events, sources, and counts.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/", ","} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class ScanLogger:
    """Emit deterministic event lines for config scans."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level=level, colorize=False)

    def _emit(self, level: str, event: str, source: str, **context: object) -> None:
        """Emit one structured scan log line."""

        line = (
            f"[scan] level={level} event={event} "
            f"source={_sanitize_context_value(source)}{_format_context(context)}"
        )
        _loguru_logger.log(level, line)

    def log_scan_start(self, source: str) -> None:
        """Emit a scan-start event."""

        self._emit("DEBUG", "start", source)

    def log_scan_complete(self, source: str, entries: int) -> None:
        """Emit a scan-complete event with the number of accepted entries."""

        self._emit("INFO", "complete", source, entries=entries)

    def log_scan_failure(self, source: str, error_kind: str, line: int | None) -> None:
        """Emit a scan-failure event without any scanned payload."""

        self._emit("ERROR", "failure", source, error_kind=error_kind, line=line)

    def log_unknown_options(self, source: str, names: list[str]) -> None:
        """Emit a warning listing option names that were never declared."""

        self._emit("WARNING", "unknown_options", source, names=",".join(sorted(names)))
