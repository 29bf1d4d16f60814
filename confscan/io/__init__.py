"""Input components for confscan.

This package opens config sources and hands their text to the scanner.
"""

from .source import load_config_file, load_config_text

__all__ = ["load_config_file", "load_config_text"]
