"""Config scanner components.

This package holds the character classifier, the scanner modes, and the
state machine that turns `key=value` text into entries.
"""

from .classify import CharClass, classify
from .machine import ConfigScanner, iter_chars, iter_entries, scan
from .states import ScanState

__all__ = [
    "CharClass",
    "ConfigScanner",
    "ScanState",
    "classify",
    "iter_chars",
    "iter_entries",
    "scan",
]
