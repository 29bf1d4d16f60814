"""Domain exceptions for scanner, option binding, and CLI diagnostics."""

from __future__ import annotations

from enum import Enum


class ScanErrorKind(str, Enum):
    """Machine-checkable category of a fatal config scan failure."""

    INVALID_PARAM_START = "invalid_param_start"
    INVALID_NAME_CHAR = "invalid_name_char"
    NAME_TOO_LONG = "name_too_long"
    VALUE_TOO_LONG = "value_too_long"
    TRAILING_GARBAGE = "trailing_garbage"
    MISSING_ASSIGNMENT = "missing_assignment"
    SOURCE_UNAVAILABLE = "source_unavailable"


class ConfigScanError(ValueError):
    """Raised when a config source is rejected as a whole.

    Attributes:
        kind: Error category.
        detail: Human-readable description without location context.
        line: 1-based line number where scanning stopped, if known.
        character: Offending character, if one triggered the failure.
        source: Identifier of the scanned source (usually a file path).
    """

    def __init__(
        self,
        *,
        kind: ScanErrorKind,
        detail: str,
        line: int | None = None,
        character: str | None = None,
        source: str = "<string>",
    ) -> None:
        """Initialize a located scan error and render its diagnostic message."""

        self.kind = kind
        self.detail = detail
        self.line = line
        self.character = character
        self.source = source
        super().__init__(self._render())

    def _render(self) -> str:
        """Render the diagnostic with source, character, and line context."""

        message = f"Error in {self.source}: {self.detail}"
        if self.character is not None:
            message += f" {self.character!r}"
        if self.line is not None:
            message += f" on line {self.line}"
        return message


class SourceUnavailableError(ConfigScanError):
    """Raised when a config source cannot be opened or decoded."""

    def __init__(self, *, source: str, reason: str) -> None:
        """Initialize an unreadable-source error."""

        super().__init__(
            kind=ScanErrorKind.SOURCE_UNAVAILABLE,
            detail=f"can't read config source: {reason}",
            source=source,
        )
        self.reason = reason


class UnknownOptionError(ValueError):
    """Raised when scanned entries name options that were never declared."""

    def __init__(self, names: list[str]) -> None:
        """Initialize with the undeclared option names in deterministic order."""

        self.names = sorted(names)
        quoted = ", ".join(f'"{name}"' for name in self.names)
        super().__init__(f"Unknown parameter(s): {quoted}")


class CommandStageError(RuntimeError):
    """Raised when a specific CLI command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
