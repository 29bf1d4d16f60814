"""Top-level package for confscan.

This package scans restricted `name = value` per-line config files into a
name-to-value mapping. The main entry points are `scan` for in-memory text
or streams and `load_config_file` for files on disk.
"""

from .errors import ConfigScanError, ScanErrorKind, SourceUnavailableError
from .io.source import load_config_file, load_config_text
from .models.datatypes import Entry, ScanLimits
from .scanner.machine import ConfigScanner, iter_entries, scan

__all__ = [
    "ConfigScanError",
    "ConfigScanner",
    "Entry",
    "ScanErrorKind",
    "ScanLimits",
    "SourceUnavailableError",
    "iter_entries",
    "load_config_file",
    "load_config_text",
    "scan",
    "__version__",
]

__version__ = "0.1.0"
