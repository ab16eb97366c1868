"""Telemetry and observability helpers.

This package records controller transitions for deterministic auditing.
"""

from .logger import FieldEventLogger

__all__ = ["FieldEventLogger"]
