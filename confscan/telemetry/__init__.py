"""Telemetry and observability helpers.

This package emits deterministic scan events for auditing config loads.
"""

from .logger import ScanLogger

__all__ = ["ScanLogger"]
