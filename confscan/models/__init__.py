"""Data models for confscan."""

from .datatypes import (
    DEFAULT_MAX_NAME_LENGTH,
    DEFAULT_MAX_VALUE_LENGTH,
    Entry,
    QuoteStyle,
    ScanLimits,
)

__all__ = [
    "DEFAULT_MAX_NAME_LENGTH",
    "DEFAULT_MAX_VALUE_LENGTH",
    "Entry",
    "QuoteStyle",
    "ScanLimits",
]
